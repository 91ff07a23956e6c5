"""
src/table/importer.py
─────────────────────
Spreadsheet import with per-row validation.

A file is read into a frame (CSV or XLSX), headers are matched to the
caller's ImportColumn descriptors by title or key, and every data row is
converted and validated on its own. Rejected rows are reported with their
spreadsheet row number (header = row 1); accepted rows are returned.
Nothing is written into application state here.
"""
from __future__ import annotations

import base64
import binascii
import io
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any, Callable, Sequence

import pandas as pd
from pydantic import BaseModel, Field, ValidationError

from src.table.columns import ImportColumn

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = (".csv", ".xlsx")

_TRUE = {"y", "yes", "true", "1", "o"}
_FALSE = {"n", "no", "false", "0", "x"}


class ImportFormatError(ValueError):
    """The file as a whole cannot be read."""


class RowError(BaseModel):
    row: int                  # spreadsheet row number; 0 for file-level errors
    field: str | None = None  # column title
    code: str                 # required / invalid_number / invalid_date / ...
    message: str


class ImportSummary(BaseModel):
    total: int = 0
    success: int = 0
    failed: int = 0


class ImportResult(BaseModel):
    success: bool
    data: list[dict] = Field(default_factory=list)
    errors: list[RowError] = Field(default_factory=list)
    rejected_rows: list[int] = Field(default_factory=list)
    summary: ImportSummary = Field(default_factory=ImportSummary)


# ── File reading ──────────────────────────────────────────────────────────────

def decode_upload(contents: str) -> bytes:
    """Decode a dcc.Upload data URI ("data:<mime>;base64,<payload>")."""
    try:
        _, payload = contents.split(",", 1)
        return base64.b64decode(payload, validate=True)
    except (ValueError, binascii.Error) as e:
        raise ImportFormatError("Uploaded content is not a base64 data URI") from e


def read_table_file(content: bytes, filename: str) -> pd.DataFrame:
    ext = Path(filename).suffix.lower()
    if ext not in SUPPORTED_EXTENSIONS:
        raise ImportFormatError(f"Unsupported file type: {ext or filename}")
    buf = io.BytesIO(content)
    try:
        if ext == ".csv":
            df = pd.read_csv(buf, dtype=str, keep_default_na=False, encoding="utf-8-sig")
        else:
            df = pd.read_excel(buf, dtype=object, engine="openpyxl")
    except Exception as e:
        raise ImportFormatError(f"Unable to parse {filename}: {e}") from e
    df.columns = [str(c).strip() for c in df.columns]
    return df


def _match_headers(df: pd.DataFrame, columns: Sequence[ImportColumn]) -> dict[str, str]:
    """ImportColumn.key → frame column name."""
    by_name = {c.lower(): c for c in df.columns}
    mapping: dict[str, str] = {}
    for col in columns:
        found = by_name.get(col.title.lower()) or by_name.get(col.key.lower())
        if found is not None:
            mapping[col.key] = found
    missing = [c.title for c in columns if c.required and c.key not in mapping]
    if missing:
        raise ImportFormatError(f"Missing required column(s): {', '.join(missing)}")
    return mapping


# ── Cell conversion ───────────────────────────────────────────────────────────

def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def _to_number(value: Any) -> float:
    if isinstance(value, bool):
        raise ValueError(value)
    if isinstance(value, (int, float)):
        return float(value)
    return float(str(value).replace(",", "").strip())


def _convert(value: Any, col: ImportColumn) -> Any:
    """Convert one non-blank cell; raises ValueError with an error code."""
    if col.type == "string":
        converted: Any = str(value).strip()
    elif col.type == "number":
        try:
            converted = _to_number(value)
        except ValueError:
            raise ValueError("invalid_number") from None
    elif col.type == "integer":
        try:
            number = _to_number(value)
        except ValueError:
            raise ValueError("invalid_integer") from None
        if not number.is_integer():
            raise ValueError("invalid_integer")
        converted = int(number)
    elif col.type == "date":
        if isinstance(value, (datetime, date)):
            converted = value.strftime("%Y-%m-%d")
        else:
            try:
                converted = pd.to_datetime(str(value).strip()).strftime("%Y-%m-%d")
            except (ValueError, TypeError, OverflowError):
                raise ValueError("invalid_date") from None
    elif col.type == "boolean":
        if isinstance(value, bool):
            converted = value
        else:
            text = str(value).strip().lower()
            if text in _TRUE:
                converted = True
            elif text in _FALSE:
                converted = False
            else:
                raise ValueError("invalid_boolean")
    else:
        raise ValueError(f"unknown_type:{col.type}")

    if col.choices and converted not in col.choices:
        raise ValueError("invalid_choice")
    return converted


_MESSAGES = {
    "required": "Required value is missing",
    "invalid_number": "Not a number",
    "invalid_integer": "Not a whole number",
    "invalid_date": "Not a valid date (YYYY-MM-DD)",
    "invalid_boolean": "Expected Y/N",
    "invalid_choice": "Value is not one of the allowed options",
    "invalid_value": "Value is out of the allowed range",
}


def _row_error(row: int, col: ImportColumn, code: str) -> RowError:
    return RowError(row=row, field=col.title, code=code, message=_MESSAGES.get(code, code))


def _rejected_by(validate: Callable[[dict], Any], record: dict, row: int,
                 columns: Sequence[ImportColumn]) -> RowError | None:
    """Run the record-level check; its ValueError becomes an invalid_value error."""
    try:
        validate(record)
    except ValueError as e:
        titles = {c.key: c.title for c in columns}
        locs = [err["loc"][0] for err in e.errors() if err.get("loc")] if isinstance(e, ValidationError) else []
        field = next((titles[k] for k in locs if k in titles), None)
        return RowError(row=row, field=field, code="invalid_value", message=_MESSAGES["invalid_value"])
    return None


# ── Public API ────────────────────────────────────────────────────────────────

def parse_rows(
    df: pd.DataFrame,
    columns: Sequence[ImportColumn],
    validate: Callable[[dict], Any] | None = None,
) -> ImportResult:
    mapping = _match_headers(df, columns)
    data: list[dict] = []
    errors: list[RowError] = []
    rejected: list[int] = []
    total = 0

    for offset, raw in enumerate(df.to_dict(orient="records")):
        row_no = offset + 2
        cells = {key: raw.get(name) for key, name in mapping.items()}
        if all(_is_blank(v) for v in cells.values()):
            continue
        total += 1

        record: dict[str, Any] = {}
        row_errors: list[RowError] = []
        for col in columns:
            value = cells.get(col.key)
            if _is_blank(value):
                if col.required:
                    row_errors.append(_row_error(row_no, col, "required"))
                continue
            try:
                record[col.key] = _convert(value, col)
            except ValueError as e:
                row_errors.append(_row_error(row_no, col, str(e)))

        if not row_errors and validate is not None:
            error = _rejected_by(validate, record, row_no, columns)
            if error is not None:
                row_errors.append(error)

        if row_errors:
            errors.extend(row_errors)
            rejected.append(row_no)
        else:
            data.append(record)

    return ImportResult(
        success=True,
        data=data,
        errors=errors,
        rejected_rows=rejected,
        summary=ImportSummary(total=total, success=len(data), failed=len(rejected)),
    )


def import_records(
    content: bytes | str,
    filename: str,
    columns: Sequence[ImportColumn],
    on_complete: Callable[[list[dict]], Any] | None = None,
    validate: Callable[[dict], Any] | None = None,
) -> ImportResult:
    """
    Parse an uploaded file (raw bytes or a dcc.Upload data URI) against
    `columns`.

    Rows failing validation are listed in `errors` / `rejected_rows` without
    aborting the batch. A file that cannot be read at all gives
    `success=False` and a single file-level error. `validate` is called with
    each converted row and rejects it by raising ValueError (a pydantic
    ValidationError included). `on_complete` receives the accepted rows when
    there are any.
    """
    try:
        if isinstance(content, str):
            content = decode_upload(content)
        result = parse_rows(read_table_file(content, filename), columns, validate)
    except ImportFormatError as e:
        logger.warning("Import of %s failed: %s", filename, e)
        return ImportResult(
            success=False,
            errors=[RowError(row=0, code="file", message=str(e))],
        )

    logger.info(
        "Imported %s: %d accepted, %d rejected",
        filename, result.summary.success, result.summary.failed,
    )
    if on_complete is not None and result.data:
        on_complete(result.data)
    return result
