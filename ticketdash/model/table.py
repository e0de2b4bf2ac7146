from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from ..helpers import to_number, to_text
from .ticket import classify_status

SEARCH_FIELDS = ("name", "email", "order_id", "type_ticket")
NUMERIC_COLUMNS = frozenset({"qty", "total_paid"})
SORTABLE_COLUMNS = frozenset({
    "name", "email", "type_ticket", "date_ticket", "qty", "total_paid",
    "order_id", "status", "created_at",
})
PAGE_SIZES = (10, 25, 50, 100, 200)
DEFAULT_PAGE_SIZE = 50
ALL = "all"


@dataclass
class TableQuery:
    search: str = ""
    type_filter: str = ALL
    date_filter: str = ALL
    sort_key: Optional[str] = None
    direction: str = "asc"  # asc | desc
    page: int = 1
    page_size: Optional[int] = DEFAULT_PAGE_SIZE  # None -> all rows

    @classmethod
    def from_params(
        cls,
        q: Optional[str] = None,
        type: Optional[str] = None,
        date: Optional[str] = None,
        sort: Optional[str] = None,
        dir: Optional[str] = None,
        page: Any = None,
        size: Any = None,
    ) -> "TableQuery":
        """Parse untrusted query-string values, falling back to defaults."""
        sort_key = sort if sort in SORTABLE_COLUMNS else None
        direction = "desc" if (dir or "").lower() == "desc" else "asc"

        try:
            page_no = max(1, int(page))
        except (TypeError, ValueError):
            page_no = 1

        size_s = to_text(size).lower()
        if size_s == ALL:
            page_size = None
        else:
            try:
                page_size = int(size_s)
            except ValueError:
                page_size = DEFAULT_PAGE_SIZE
            if page_size not in PAGE_SIZES:
                page_size = DEFAULT_PAGE_SIZE

        return cls(
            search=to_text(q),
            type_filter=to_text(type) or ALL,
            date_filter=to_text(date) or ALL,
            sort_key=sort_key,
            direction=direction,
            page=page_no,
            page_size=page_size,
        )

    @property
    def size_param(self) -> str:
        return ALL if self.page_size is None else str(self.page_size)


@dataclass
class TablePage:
    rows: List[Dict[str, Any]] = field(default_factory=list)
    total_items: int = 0
    page: int = 1
    page_size: Optional[int] = DEFAULT_PAGE_SIZE
    total_pages: int = 1
    start_index: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rows": self.rows,
            "totalItems": self.total_items,
            "page": self.page,
            "pageSize": ALL if self.page_size is None else self.page_size,
            "totalPages": self.total_pages,
            "startIndex": self.start_index,
        }


def _field(rec: Mapping[str, Any], name: str) -> str:
    return to_text(rec.get(name))


def matches(rec: Mapping[str, Any], query: TableQuery) -> bool:
    term = query.search.lower()
    if term and not any(
        term in _field(rec, f).lower() for f in SEARCH_FIELDS
    ):
        return False
    if (query.type_filter != ALL
            and _field(rec, "type_ticket").lower()
            != query.type_filter.lower()):
        return False
    if (query.date_filter != ALL
            and _field(rec, "date_ticket").lower()
            != query.date_filter.lower()):
        return False
    return True


def _sort_key(column: str):
    if column in NUMERIC_COLUMNS:
        return lambda rec: to_number(rec.get(column))
    return lambda rec: _field(rec, column)


def present_row(rec: Mapping[str, Any], number: int) -> Dict[str, Any]:
    return {
        "no": number,
        "name": _field(rec, "name"),
        "email": _field(rec, "email"),
        "order_id": _field(rec, "order_id"),
        "type_ticket": _field(rec, "type_ticket"),
        "date_ticket": _field(rec, "date_ticket"),
        "qty": to_number(rec.get("qty")),
        "total_paid": to_number(rec.get("total_paid")),
        "status": classify_status(rec.get("status")).label,
        "clock_in": _field(rec, "clock_in"),
    }


def query_table(records: Sequence[Any], query: TableQuery) -> TablePage:
    rows = [
        r for r in records
        if isinstance(r, Mapping) and matches(r, query)
    ]
    if query.sort_key:
        # sorted() is stable in both directions
        rows = sorted(
            rows,
            key=_sort_key(query.sort_key),
            reverse=(query.direction == "desc"),
        )

    total = len(rows)
    if query.page_size is None:
        total_pages = 1
        page = 1
        start, end = 0, total
    else:
        total_pages = max(1, math.ceil(total / query.page_size))
        page = min(max(1, query.page), total_pages)
        start = (page - 1) * query.page_size
        end = start + query.page_size

    return TablePage(
        rows=[
            present_row(r, start + i + 1)
            for i, r in enumerate(rows[start:end])
        ],
        total_items=total,
        page=page,
        page_size=query.page_size,
        total_pages=total_pages,
        start_index=start,
    )


def filter_options(records: Sequence[Any]) -> Tuple[List[str], List[str]]:
    types = set()
    dates = set()
    for r in records:
        if not isinstance(r, Mapping):
            continue
        t = _field(r, "type_ticket")
        d = _field(r, "date_ticket")
        if t:
            types.add(t)
        if d:
            dates.add(d)
    return sorted(types), sorted(dates)
