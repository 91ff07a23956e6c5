"""
src/table/registry.py
─────────────────────
Configured DataTable instances keyed by table id.

The pattern-matching callbacks only receive a table id from the browser;
columns, actions and import/export mappings are looked up here. Tables that
accept imports also register how accepted rows merge into their records.
"""
from __future__ import annotations

from typing import Callable

from src.table.data_table import DataTable

Merger = Callable[[list[dict], list[dict]], list[dict]]

_TABLES: dict[str, DataTable] = {}
_MERGERS: dict[str, Merger] = {}


def register_table(table: DataTable, merge: Merger | None = None) -> DataTable:
    _TABLES[table.table_id] = table
    if merge is not None:
        _MERGERS[table.table_id] = merge
    return table


def get_table(table_id: str) -> DataTable:
    try:
        return _TABLES[table_id]
    except KeyError:
        raise KeyError(f"Unknown table: {table_id}") from None


def get_merger(table_id: str) -> Merger | None:
    return _MERGERS.get(table_id)
