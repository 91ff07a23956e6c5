"""
src/table/columns.py
────────────────────
Column, action and import/export descriptors for the generic data table.

A descriptor is bound to a record type `T`; records may be pydantic models
or plain dicts (the browser stores hold dicts).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Literal, TypeVar

T = TypeVar("T")

CellType = Literal["string", "number", "integer", "date", "boolean"]


@dataclass(frozen=True)
class FilterOption:
    label: str
    value: Any


@dataclass(frozen=True)
class Column(Generic[T]):
    key: str
    title: str
    searchable: bool = False
    filterable: bool = False
    sortable: bool = False
    filter_options: tuple[FilterOption, ...] | None = None
    render: Callable[[Any, T], Any] | None = None
    width: str | None = None
    align: Literal["left", "center", "right"] = "left"
    hidden: bool = False
    option_group: str | None = None   # enum name in config.options; rendered as a status badge


@dataclass(frozen=True)
class RowAction(Generic[T]):
    key: str
    label: str
    icon: str = ""
    variant: Literal["default", "destructive"] = "default"
    on_click: Callable[[T], Any] | None = None
    disabled: Callable[[T], bool] | None = None
    hidden: Callable[[T], bool] | None = None

    def is_disabled(self, record: T) -> bool:
        return bool(self.disabled and self.disabled(record))

    def is_hidden(self, record: T) -> bool:
        return bool(self.hidden and self.hidden(record))


@dataclass(frozen=True)
class ExportColumn:
    key: str
    title: str
    width: int = 15   # spreadsheet character width


@dataclass(frozen=True)
class ImportColumn:
    key: str
    title: str
    required: bool = False
    type: CellType = "string"
    choices: tuple[Any, ...] = field(default_factory=tuple)


def get_value(record: Any, key: str) -> Any:
    """
    Read `key` from a dict or object record.

    Dotted keys walk nested dicts/attributes ("equipment.name"). Missing
    values come back as None.
    """
    if record is None or not key:
        return None
    if isinstance(record, dict):
        if key in record:
            return record[key]
    elif hasattr(record, key):
        return getattr(record, key)

    if "." not in key:
        return None
    node: Any = record
    for part in key.split("."):
        if isinstance(node, dict):
            node = node.get(part)
        else:
            node = getattr(node, part, None)
        if node is None:
            return None
    return node


def export_columns_for(columns: list[Column]) -> list[ExportColumn]:
    """Default export mapping: every visible column, title as header."""
    return [ExportColumn(key=c.key, title=c.title) for c in columns if not c.hidden]
