"""
Table Explorer state and data pipeline.

Everything the Streamlit page needs besides widgets: deriving columns from
rows, search and per-column filters, pagination, cell formatting, and the
per-table load state machine with its stale-response guard.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

Row = Dict[str, Any]

PAGE_SIZE_OPTIONS = [10, 25, 50, 100]
EMPTY_CELL = "-"


class LoadStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"


@dataclass
class ColumnFilter:
    column: str
    value: str = ""


def derive_columns(rows: Sequence[Row]) -> List[str]:
    """Union of keys over all rows, in first-seen order."""
    columns: Dict[str, None] = {}
    for row in rows:
        for key in row:
            columns.setdefault(key, None)
    return list(columns)


def cell_text(value: Any) -> str:
    """String form of a value used for matching. Missing and null match as ''."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def apply_filters(rows: Sequence[Row], search_term: str, filters: Sequence[ColumnFilter]) -> List[Row]:
    """
    Rows containing ``search_term`` in any field and satisfying every
    (column, substring) filter. Matching is case-insensitive; empty search
    terms and empty filter values match everything.
    """
    result = list(rows)

    if search_term:
        needle = search_term.lower()
        result = [
            row for row in result
            if any(needle in cell_text(value).lower() for value in row.values())
        ]

    for column_filter in filters:
        if not column_filter.value:
            continue
        needle = column_filter.value.lower()
        result = [
            row for row in result
            if needle in cell_text(row.get(column_filter.column)).lower()
        ]

    return result


def paginate(rows: Sequence[Row], page: int, page_size: int) -> List[Row]:
    """The visible window ``rows[page*size : page*size+size]``."""
    start = page * page_size
    return list(rows[start:start + page_size])


def page_count(total: int, page_size: int) -> int:
    if page_size <= 0:
        return 0
    return (total + page_size - 1) // page_size


def looks_like_timestamp(value: str) -> bool:
    return ":" in value and "-" in value


def format_value(value: Any) -> str:
    """
    Display form of a cell: null/blank renders as '-', ISO-like timestamps
    as a locale date-time string, everything else as str().
    """
    if value is None:
        return EMPTY_CELL
    if isinstance(value, str):
        if not value.strip():
            return EMPTY_CELL
        if looks_like_timestamp(value):
            try:
                parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
            except ValueError:
                return value
            if parsed.tzinfo is not None:
                parsed = parsed.astimezone()
            return parsed.strftime("%c")
        return value
    return cell_text(value)


def filter_table_names(table_names: Sequence[str], search_term: str) -> List[str]:
    needle = (search_term or "").lower()
    return [name for name in table_names if needle in name.lower()]


@dataclass
class TableView:
    """
    State for the active table.

    ``select_table`` returns a generation token; a load result is applied
    only when its token still matches, so a slow response for a previously
    selected table can never overwrite the current one.
    """

    table_name: str = ""
    status: LoadStatus = LoadStatus.IDLE
    rows: List[Row] = field(default_factory=list)
    columns: List[str] = field(default_factory=list)
    error: Optional[str] = None
    search_term: str = ""
    filters: List[ColumnFilter] = field(default_factory=list)
    page: int = 0
    page_size: int = PAGE_SIZE_OPTIONS[0]
    generation: int = 0

    # -- loading ---------------------------------------------------------

    def select_table(self, table_name: str) -> int:
        self.generation += 1
        self.table_name = table_name
        self.status = LoadStatus.LOADING
        self.rows = []
        self.columns = []
        self.error = None
        self.search_term = ""
        self.filters = []
        self.page = 0
        return self.generation

    def is_current(self, token: int) -> bool:
        return token == self.generation

    def complete_load(self, token: int, rows: Sequence[Row]) -> bool:
        if not self.is_current(token):
            return False
        self.rows = list(rows)
        self.columns = derive_columns(self.rows)
        self.status = LoadStatus.LOADED
        return True

    def fail_load(self, token: int, message: str) -> bool:
        if not self.is_current(token):
            return False
        self.error = message
        self.status = LoadStatus.ERROR
        return True

    # -- search / filters / paging ---------------------------------------

    def set_search(self, term: str) -> None:
        self.search_term = term
        self.page = 0

    def add_filter(self) -> None:
        if not self.columns:
            return
        self.filters.append(ColumnFilter(column=self.columns[0]))
        self.page = 0

    def update_filter(self, index: int, column: Optional[str] = None, value: Optional[str] = None) -> None:
        current = self.filters[index]
        self.filters[index] = ColumnFilter(
            column=current.column if column is None else column,
            value=current.value if value is None else value,
        )
        self.page = 0

    def remove_filter(self, index: int) -> None:
        del self.filters[index]
        self.page = 0

    def set_page_size(self, page_size: int) -> None:
        if page_size <= 0:
            raise ValueError("page_size must be positive")
        self.page_size = page_size
        self.page = 0

    def set_page(self, page: int) -> None:
        last = max(page_count(len(self.filtered_rows), self.page_size) - 1, 0)
        self.page = min(max(page, 0), last)

    @property
    def filtered_rows(self) -> List[Row]:
        return apply_filters(self.rows, self.search_term, self.filters)

    @property
    def visible_rows(self) -> List[Row]:
        return paginate(self.filtered_rows, self.page, self.page_size)

    @property
    def is_empty(self) -> bool:
        return self.status == LoadStatus.LOADED and not self.rows

    def empty_message(self) -> str:
        return f"No data available for table: {self.table_name}"
