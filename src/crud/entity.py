"""
src/crud/entity.py
──────────────────
Entity schemas and the list/form operations shared by every CRUD page.

An EntitySchema describes one page: the record model, the modal form
fields, the table columns and the import/export mapping. All operations
work on lists of JSON-ready dicts (the page store contents) and return new
lists; the input list is never mutated.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Generic, Literal, Sequence, TypeVar

from pydantic import BaseModel

from src.table.columns import Column, ExportColumn, ImportColumn, RowAction
from src.table.data_table import DataTable

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

FieldKind = Literal["text", "number", "date", "select", "checkbox", "textarea"]


@dataclass(frozen=True)
class FormField:
    key: str
    label: str                     # translation key in the "fields" namespace
    kind: FieldKind = "text"
    required: bool = False
    options: tuple[dict, ...] = ()  # {"label", "value"} for selects
    default: Any = ""


@dataclass(frozen=True)
class EntitySchema(Generic[M]):
    name: str                      # page / table id
    model: type[M]
    title_key: str                 # translation key in the "pages" namespace
    fields: tuple[FormField, ...]
    columns: tuple[Column, ...]
    initial: Callable[[], list[dict]]
    export_columns: tuple[ExportColumn, ...] = ()
    import_columns: tuple[ImportColumn, ...] = ()
    # Derives computed fields (e.g. next schedule date) before validation.
    prepare: Callable[[dict], dict] | None = None
    # Fields `prepare` computes; dropped on edit so they are derived again.
    derived: tuple[str, ...] = ()
    actions: tuple[RowAction, ...] = (
        RowAction(key="edit", label="edit", icon="✎"),
        RowAction(key="delete", label="delete", icon="🗑", variant="destructive"),
    )

    def form_field(self, key: str) -> FormField:
        for f in self.fields:
            if f.key == key:
                return f
        raise KeyError(f"Unknown field {key} on {self.name}")

    def table(self, title: str = "") -> DataTable:
        return DataTable(
            self.name,
            self.columns,
            title=title or self.name,
            actions=self.actions,
            export_columns=self.export_columns or None,
            import_columns=self.import_columns,
            importable=bool(self.import_columns),
            selectable=True,
            validate_row=self.check,
        )

    def check(self, values: dict) -> None:
        """Raise ValidationError when `values` cannot become a record."""
        _build(self, values, "0")


# ── Ids ───────────────────────────────────────────────────────────────────────

def new_id(existing: Sequence[dict] = ()) -> str:
    """Millisecond timestamp id, bumped until unused."""
    taken = {r.get("id") for r in existing}
    candidate = int(time.time() * 1000)
    while str(candidate) in taken:
        candidate += 1
    return str(candidate)


# ── Form ──────────────────────────────────────────────────────────────────────

def blank_form(schema: EntitySchema) -> dict:
    return {f.key: f.default for f in schema.fields}


def form_from_record(schema: EntitySchema, record: dict) -> dict:
    form = {}
    for f in schema.fields:
        value = record.get(f.key)
        form[f.key] = f.default if value is None else value
    return form


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _coerce(f: FormField, value: Any) -> Any:
    if _is_empty(value):
        return None
    if f.kind == "number":
        number = float(value)
        return int(number) if number.is_integer() else number
    if f.kind == "checkbox":
        return bool(value)
    if isinstance(value, str):
        return value.strip()
    return value


def validate_form(schema: EntitySchema, form: dict) -> tuple[dict, list[str]]:
    """
    Presence check plus number coercion.

    Returns the cleaned values (empty optional fields dropped) and the
    labels of required fields that are missing or unparseable.
    """
    cleaned: dict[str, Any] = {}
    missing: list[str] = []
    for f in schema.fields:
        try:
            value = _coerce(f, form.get(f.key))
        except (TypeError, ValueError):
            missing.append(f.label)
            continue
        if value is None:
            if f.required:
                missing.append(f.label)
            continue
        cleaned[f.key] = value
    return cleaned, missing


def _build(schema: EntitySchema, values: dict, record_id: str) -> dict:
    data = {**values, "id": record_id}
    if schema.prepare is not None:
        data = schema.prepare(data)
    return schema.model.model_validate(data).model_dump(mode="json")


# ── List operations ───────────────────────────────────────────────────────────

def create_record(schema: EntitySchema, records: Sequence[dict], values: dict) -> list[dict]:
    """New record with a fresh id, placed first."""
    record = _build(schema, values, new_id(records))
    logger.info("Created %s %s", schema.name, record["id"])
    return [record, *records]


def update_record(schema: EntitySchema, records: Sequence[dict], record_id: str, values: dict) -> list[dict]:
    """Replace the record with `record_id`; the id is kept."""
    dropped = {f.key for f in schema.fields} | set(schema.derived)
    updated = []
    for r in records:
        if r.get("id") == record_id:
            # Empty form fields fall back to model defaults; derived fields are recomputed.
            kept = {k: v for k, v in r.items() if k not in dropped}
            updated.append(_build(schema, {**kept, **values}, record_id))
        else:
            updated.append(r)
    return updated


def delete_record(records: Sequence[dict], record_id: str) -> list[dict]:
    return [r for r in records if r.get("id") != record_id]


def find_record(records: Sequence[dict], record_id: str) -> dict | None:
    return next((r for r in records if r.get("id") == record_id), None)


def merge_imported(schema: EntitySchema, records: Sequence[dict], rows: Sequence[dict]) -> list[dict]:
    """Append imported rows after the existing ones, each with a fresh id."""
    merged = list(records)
    for row in rows:
        merged.append(_build(schema, row, new_id(merged)))
    logger.info("Merged %d imported rows into %s", len(rows), schema.name)
    return merged
