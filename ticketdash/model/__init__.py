from .summary import Summary, aggregate
from .table import TablePage, TableQuery, filter_options, query_table
from .ticket import TicketRecord, TicketStatus, classify_status

__all__ = [
    "Summary", "aggregate",
    "TablePage", "TableQuery", "filter_options", "query_table",
    "TicketRecord", "TicketStatus", "classify_status",
]
