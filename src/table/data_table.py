"""
src/table/data_table.py
───────────────────────
DataTable[T]: one configured table over a list of records.

The table owns its view state (search, filters, sort, page, hidden columns,
selected rows) and never mutates its records. Row actions, add and import completion are
delegated to caller callbacks; persisting their effects is the caller's job.

The Dash layer keeps one configured instance per table id in a registry and
calls `bind()` with the records and state held in the browser stores.
"""
from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, Sequence, TypeVar

from config.settings import PAGE_SIZE_OPTIONS
from src.table import view as engine
from src.table.columns import Column, ExportColumn, FilterOption, ImportColumn, RowAction, export_columns_for, get_value
from src.table.exporter import ExportFormat, create_template, export_records
from src.table.importer import ImportResult, import_records
from src.table.view import TableState, TableView

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class TableSummary:
    total: int
    filtered: int
    start: int
    end: int


class DataTable(Generic[T]):

    def __init__(
        self,
        table_id: str,
        columns: Sequence[Column[T]],
        data: Sequence[T] = (),
        *,
        title: str = "",
        actions: Sequence[RowAction[T]] = (),
        export_columns: Sequence[ExportColumn] | None = None,
        import_columns: Sequence[ImportColumn] = (),
        template_rows: Sequence[dict] = (),
        on_add: Callable[[], Any] | None = None,
        on_import: Callable[[list[dict]], Any] | None = None,
        on_select: Callable[[list[T]], Any] | None = None,
        validate_row: Callable[[dict], Any] | None = None,
        searchable: bool = True,
        filterable: bool = True,
        exportable: bool = True,
        importable: bool = False,
        selectable: bool = False,
        page_size_options: Sequence[int] = tuple(PAGE_SIZE_OPTIONS),
        state: TableState | None = None,
    ):
        self.table_id = table_id
        self.columns = list(columns)
        self.data = list(data)
        self.title = title
        self.actions = list(actions)
        self.export_columns = list(export_columns) if export_columns else export_columns_for(self.columns)
        self.import_columns = list(import_columns)
        self.template_rows = list(template_rows)
        self.on_add = on_add
        self.on_import = on_import
        self.on_select = on_select
        self.validate_row = validate_row
        self.searchable = searchable
        self.filterable = filterable
        self.exportable = exportable
        self.importable = importable and bool(self.import_columns)
        self.selectable = selectable
        self.page_size_options = list(page_size_options)
        self.state = state or TableState()

    def bind(self, data: Sequence[T], state: TableState | None = None) -> "DataTable[T]":
        """Same configuration over other records / state."""
        bound = copy.copy(self)
        bound.data = list(data)
        bound.state = state or TableState(page_size=self.state.page_size)
        return bound

    # ── Lookup ────────────────────────────────────────────────────────────────

    def column(self, key: str) -> Column[T]:
        for c in self.columns:
            if c.key == key:
                return c
        raise KeyError(f"Unknown column: {key}")

    def action(self, key: str) -> RowAction[T]:
        for a in self.actions:
            if a.key == key:
                return a
        raise KeyError(f"Unknown action: {key}")

    @property
    def visible_columns(self) -> list[Column[T]]:
        return engine.visible_columns(self.columns, self.state)

    @property
    def filterable_columns(self) -> list[Column[T]]:
        return [c for c in self.columns if c.filterable]

    def filter_options(self, key: str) -> list[FilterOption]:
        return engine.filter_options(self.column(key), self.data)

    # ── View ──────────────────────────────────────────────────────────────────

    @property
    def view(self) -> TableView:
        return engine.build_view(self.data, self.columns, self.state)

    @property
    def rows(self) -> list[T]:
        return self.view.rows

    @property
    def filtered(self) -> list[T]:
        return self.view.filtered

    @property
    def summary(self) -> TableSummary:
        v = self.view
        return TableSummary(total=v.total, filtered=v.filtered_count, start=v.start, end=v.end)

    # ── State transitions ─────────────────────────────────────────────────────

    def search(self, query: str | None) -> None:
        self.state = engine.with_query(self.state, query)

    def set_filter(self, key: str, value: Any) -> None:
        self.column(key)
        self.state = engine.with_filter(self.state, key, value)

    def clear_filter(self, key: str) -> None:
        self.set_filter(key, None)

    def reset(self) -> None:
        self.state = engine.reset(self.state)

    def toggle_sort(self, key: str) -> None:
        if not self.column(key).sortable:
            return
        self.state = engine.toggle_sort(self.state, key)

    def go_to_page(self, page: int) -> None:
        self.state = engine.go_to_page(self.state, page, self.view.filtered_count)

    def next_page(self) -> None:
        self.go_to_page(self.view.page + 1)

    def previous_page(self) -> None:
        self.go_to_page(self.view.page - 1)

    def set_page_size(self, page_size: int) -> None:
        if page_size not in self.page_size_options:
            raise ValueError(f"Unsupported page size: {page_size}")
        self.state = engine.with_page_size(self.state, page_size)

    def toggle_column(self, key: str) -> None:
        self.column(key)
        self.state = engine.toggle_column(self.state, key)

    # ── Selection ─────────────────────────────────────────────────────────────

    @staticmethod
    def row_id(record: T) -> str:
        return str(get_value(record, "id"))

    def is_selected(self, record: T) -> bool:
        return self.row_id(record) in self.state.selected

    @property
    def selected_rows(self) -> list[T]:
        """Selected records that still exist, in selection order."""
        by_id = {self.row_id(r): r for r in self.data}
        return [by_id[i] for i in self.state.selected if i in by_id]

    @property
    def all_selected(self) -> bool:
        rows = self.rows
        return bool(rows) and all(self.is_selected(r) for r in rows)

    @property
    def some_selected(self) -> bool:
        return not self.all_selected and any(self.is_selected(r) for r in self.rows)

    def select_row(self, row_id: str, selected: bool = True) -> None:
        self.state = engine.with_selected(self.state, str(row_id), selected)
        self._selection_changed()

    def select_page(self, selected: bool = True) -> None:
        """Select exactly the rows of the current page, or clear the selection."""
        ids = [self.row_id(r) for r in self.rows] if selected else []
        self.state = engine.with_selection(self.state, ids)
        self._selection_changed()

    def clear_selection(self) -> None:
        self.select_page(False)

    def _selection_changed(self) -> None:
        if self.on_select is not None:
            self.on_select(self.selected_rows)

    # ── Delegated effects ─────────────────────────────────────────────────────

    def actions_for(self, record: T) -> list[RowAction[T]]:
        return [a for a in self.actions if not a.is_hidden(record)]

    def invoke(self, action_key: str, record: T) -> Any:
        action = self.action(action_key)
        if action.is_disabled(record) or action.is_hidden(record) or action.on_click is None:
            logger.debug("Action %s skipped on table %s", action_key, self.table_id)
            return None
        return action.on_click(record)

    def add(self) -> Any:
        if self.on_add is None:
            return None
        return self.on_add()

    # ── Files ─────────────────────────────────────────────────────────────────

    def export(self, fmt: ExportFormat = "xlsx") -> bytes:
        return export_records(self.filtered, self.export_columns, fmt=fmt, sheet_name=(self.title or "Data")[:31])

    def create_template(self, fmt: ExportFormat = "xlsx") -> bytes:
        columns = [ExportColumn(key=c.key, title=c.title) for c in self.import_columns] or self.export_columns
        return create_template(columns, self.template_rows, fmt=fmt)

    def import_file(self, content: bytes | str, filename: str) -> ImportResult:
        if not self.import_columns:
            raise ValueError(f"Table {self.table_id} has no import columns")
        return import_records(
            content, filename, self.import_columns,
            on_complete=self.on_import, validate=self.validate_row,
        )
