from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from ..helpers import Number, to_number, to_text


class TicketStatus(Enum):
    UNPAID = "Unpaid"
    AWAITING_CHECKIN = "Awaiting Check-in"
    CHECKED_IN = "Check In"
    UNKNOWN = "Unknown"

    @property
    def label(self) -> str:
        return self.value


# raw upstream code -> status; anything else is UNKNOWN
_STATUS_CODES = {
    "0": TicketStatus.UNPAID,
    "1": TicketStatus.AWAITING_CHECKIN,
    "check in": TicketStatus.CHECKED_IN,
}


def classify_status(raw: Any) -> TicketStatus:
    # 1.0 from a JSON number reads as "1"
    if isinstance(raw, float) and raw.is_integer():
        raw = int(raw)
    return _STATUS_CODES.get(to_text(raw).lower(), TicketStatus.UNKNOWN)


@dataclass(frozen=True)
class TicketRecord:
    qty: Number = 0
    total_paid: Number = 0
    status: TicketStatus = TicketStatus.UNKNOWN
    clock_in: str = ""
    type_ticket: str = ""
    date_ticket: str = ""

    @classmethod
    def from_raw(cls, raw: Any) -> "TicketRecord":
        """Build a record from one upstream participant entry.

        Never raises: missing or garbage numeric fields become 0, missing
        strings become "", and a non-mapping entry yields the default record.
        """
        if not isinstance(raw, Mapping):
            return cls()
        return cls(
            qty=to_number(raw.get("qty")),
            total_paid=to_number(raw.get("total_paid")),
            status=classify_status(raw.get("status")),
            clock_in=to_text(raw.get("clock_in")),
            type_ticket=to_text(raw.get("type_ticket")),
            date_ticket=to_text(raw.get("date_ticket")),
        )

    @property
    def is_unpaid(self) -> bool:
        return self.status is TicketStatus.UNPAID

    @property
    def is_awaiting(self) -> bool:
        return self.status is TicketStatus.AWAITING_CHECKIN

    @property
    def is_checked_in(self) -> bool:
        return self.status is TicketStatus.CHECKED_IN

    @property
    def is_sold(self) -> bool:
        # a clock-in marks the ticket sold unless the order is explicitly
        # unpaid
        if self.is_awaiting:
            return True
        return bool(self.clock_in) and not self.is_unpaid
