from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

from ..helpers import Number
from .ticket import TicketRecord, TicketStatus


@dataclass
class TypeStat:
    count: Number = 0
    total_paid: Number = 0


@dataclass
class DatePoint:
    date: str
    count: Number = 0
    total_paid: Number = 0


@dataclass
class StatusSlice:
    label: str
    value: Number


@dataclass
class Summary:
    sold_ticket_count: Number = 0
    total_revenue: Number = 0
    checked_in_count: Number = 0
    unpaid_count: Number = 0
    awaiting_count: Number = 0
    conversion_rate: float = 0
    by_type: Dict[str, TypeStat] = field(default_factory=dict)
    by_date: List[DatePoint] = field(default_factory=list)
    status_breakdown: List[StatusSlice] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "soldTicketCount": self.sold_ticket_count,
            "totalRevenue": self.total_revenue,
            "checkedInCount": self.checked_in_count,
            "unpaidCount": self.unpaid_count,
            "awaitingCount": self.awaiting_count,
            "conversionRate": self.conversion_rate,
            "byType": {
                label: {"count": s.count, "totalPaid": s.total_paid}
                for label, s in self.by_type.items()
            },
            "byDate": [
                {"date": p.date, "count": p.count, "totalPaid": p.total_paid}
                for p in self.by_date
            ],
            "statusBreakdown": [
                {"label": s.label, "value": s.value}
                for s in self.status_breakdown
            ],
        }


def conversion_rate(sold: Number, unpaid: Number) -> float:
    denominator = sold + unpaid
    if not denominator:
        return 0
    return sold / denominator * 100


def aggregate(records: Iterable[Any]) -> Summary:
    """Reduce a flat list of participant entries to the dashboard summary.

    Accepts raw upstream mappings or TicketRecords. Pure and deterministic:
    the input is never mutated and malformed entries count as zero instead
    of raising.
    """
    sold = revenue = checked_in = unpaid = awaiting = 0
    by_type: Dict[str, TypeStat] = {}
    by_date: Dict[str, DatePoint] = {}

    for raw in records:
        rec = raw if isinstance(raw, TicketRecord) else TicketRecord.from_raw(raw)

        if rec.is_checked_in:
            checked_in += rec.qty
        elif rec.is_awaiting:
            awaiting += rec.qty
        elif rec.is_unpaid:
            unpaid += rec.qty

        if not rec.is_sold:
            continue
        sold += rec.qty
        revenue += rec.total_paid

        if rec.type_ticket:
            stat = by_type.setdefault(rec.type_ticket, TypeStat())
            stat.count += rec.qty
            stat.total_paid += rec.total_paid
        if rec.date_ticket:
            point = by_date.setdefault(
                rec.date_ticket, DatePoint(date=rec.date_ticket)
            )
            point.count += rec.qty
            point.total_paid += rec.total_paid

    return Summary(
        sold_ticket_count=sold,
        total_revenue=revenue,
        checked_in_count=checked_in,
        unpaid_count=unpaid,
        awaiting_count=awaiting,
        conversion_rate=conversion_rate(sold, unpaid),
        by_type=by_type,
        # plain string order; ISO dates sort chronologically
        by_date=[by_date[d] for d in sorted(by_date)],
        status_breakdown=[
            StatusSlice(TicketStatus.CHECKED_IN.label, checked_in),
            StatusSlice(TicketStatus.AWAITING_CHECKIN.label, awaiting),
        ],
    )
