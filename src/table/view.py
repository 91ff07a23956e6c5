"""
src/table/view.py
─────────────────
Search / filter / sort / paginate engine for the generic data table.

Pipeline:
  records ──search──▶ ──filters──▶ filtered set ──sort──▶ ──page──▶ rows

The table state is a small serializable model so the Dash layer can keep
it in a dcc.Store between callbacks. Every state transition returns a new
state; records are never mutated.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Literal, Sequence, TypeVar

from pydantic import BaseModel, Field

from config.settings import settings
from src.table.columns import Column, FilterOption, get_value

T = TypeVar("T")

SortDirection = Literal["asc", "desc"]

ALL = "all"   # filter sentinel meaning "no filter"


class TableState(BaseModel):
    query: str = ""
    filters: dict[str, Any] = Field(default_factory=dict)
    sort_key: str | None = None
    sort_direction: SortDirection | None = None
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=settings.PAGE_SIZE, ge=1)
    hidden_columns: list[str] = Field(default_factory=list)
    selected: list[str] = Field(default_factory=list)   # row ids


@dataclass(frozen=True)
class TableView:
    """One rendered snapshot of the table."""
    filtered: list            # filtered + sorted, all pages
    rows: list                # current page only
    total: int                # records before search/filters
    page: int
    page_count: int
    start: int                # 1-based index of first row on the page (0 if empty)
    end: int

    @property
    def filtered_count(self) -> int:
        return len(self.filtered)


# ── State transitions ─────────────────────────────────────────────────────────

def is_active_filter(value: Any) -> bool:
    if value is None or value == "" or value == ALL:
        return False
    if isinstance(value, (list, tuple)) and not value:
        return False
    return True


def with_query(state: TableState, query: str | None) -> TableState:
    return state.model_copy(update={"query": query or "", "page": 1})


def with_filter(state: TableState, key: str, value: Any) -> TableState:
    filters = dict(state.filters)
    if is_active_filter(value):
        filters[key] = list(value) if isinstance(value, tuple) else value
    else:
        filters.pop(key, None)
    return state.model_copy(update={"filters": filters, "page": 1})


def reset(state: TableState) -> TableState:
    """Clear search, filters and sort; keep page size, hidden columns and selection."""
    return state.model_copy(
        update={"query": "", "filters": {}, "sort_key": None, "sort_direction": None, "page": 1}
    )


def toggle_sort(state: TableState, key: str) -> TableState:
    """Cycle asc → desc → unsorted on `key`; a new key starts at asc."""
    if state.sort_key != key:
        return state.model_copy(update={"sort_key": key, "sort_direction": "asc"})
    if state.sort_direction == "asc":
        return state.model_copy(update={"sort_direction": "desc"})
    return state.model_copy(update={"sort_key": None, "sort_direction": None})


def go_to_page(state: TableState, page: int, filtered_count: int) -> TableState:
    last = page_count(filtered_count, state.page_size)
    return state.model_copy(update={"page": min(max(1, int(page)), last)})


def with_page_size(state: TableState, page_size: int) -> TableState:
    return state.model_copy(update={"page_size": max(1, int(page_size)), "page": 1})


def toggle_column(state: TableState, key: str) -> TableState:
    hidden = list(state.hidden_columns)
    if key in hidden:
        hidden.remove(key)
    else:
        hidden.append(key)
    return state.model_copy(update={"hidden_columns": hidden})


def with_selected(state: TableState, row_id: str, selected: bool) -> TableState:
    ids = [i for i in state.selected if i != row_id]
    if selected:
        ids.append(row_id)
    return state.model_copy(update={"selected": ids})


def with_selection(state: TableState, row_ids: Sequence[str]) -> TableState:
    return state.model_copy(update={"selected": list(dict.fromkeys(row_ids))})


# ── Record pipeline ───────────────────────────────────────────────────────────

def visible_columns(columns: Sequence[Column], state: TableState) -> list[Column]:
    return [c for c in columns if not c.hidden and c.key not in state.hidden_columns]


def matches_query(record: Any, columns: Sequence[Column], query: str) -> bool:
    """Case-insensitive substring match on any searchable column."""
    if not query:
        return True
    needle = query.lower()
    for column in columns:
        if not column.searchable:
            continue
        value = get_value(record, column.key)
        if value is not None and needle in str(value).lower():
            return True
    return False


def matches_filters(record: Any, filters: dict[str, Any]) -> bool:
    for key, expected in filters.items():
        if not is_active_filter(expected):
            continue
        actual = get_value(record, key)
        if isinstance(expected, list):
            if actual not in expected:
                return False
        elif actual != expected:
            return False
    return True


def filter_records(records: Sequence[T], columns: Sequence[Column], state: TableState) -> list[T]:
    """The filtered set: search text and active filters, insertion order kept."""
    searchable = visible_columns(columns, state)
    return [
        r for r in records
        if matches_query(r, searchable, state.query) and matches_filters(r, state.filters)
    ]


def _natural_key(value: Any) -> tuple:
    # Numbers before strings; missing values last.
    if value is None:
        return (1, 0, 0)
    if isinstance(value, (bool, int, float)):
        if isinstance(value, float) and math.isnan(value):
            return (1, 0, 0)
        return (0, 0, value)
    return (0, 1, str(value).lower())


def sort_records(records: Sequence[T], state: TableState) -> list[T]:
    if not state.sort_key or not state.sort_direction:
        return list(records)
    key = state.sort_key
    ascending = sorted(records, key=lambda r: _natural_key(get_value(r, key)))
    if state.sort_direction == "desc":
        ascending.reverse()
    return ascending


def page_count(count: int, page_size: int) -> int:
    return max(1, math.ceil(count / page_size))


def build_view(records: Sequence[T], columns: Sequence[Column], state: TableState) -> TableView:
    filtered = sort_records(filter_records(records, columns, state), state)
    pages = page_count(len(filtered), state.page_size)
    page = min(max(1, state.page), pages)
    offset = (page - 1) * state.page_size
    rows = filtered[offset: offset + state.page_size]
    return TableView(
        filtered=filtered,
        rows=rows,
        total=len(records),
        page=page,
        page_count=pages,
        start=offset + 1 if rows else 0,
        end=offset + len(rows),
    )


def filter_options(column: Column, records: Sequence[Any]) -> list[FilterOption]:
    """Explicit options, or the distinct values of the field in first-seen order."""
    if column.filter_options is not None:
        return list(column.filter_options)
    seen: list[Any] = []
    for record in records:
        value = get_value(record, column.key)
        if value is not None and value != "" and value not in seen:
            seen.append(value)
    return [FilterOption(label=str(v), value=v) for v in seen]
