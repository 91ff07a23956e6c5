"""
src/table/exporter.py
─────────────────────
Spreadsheet export of table records.

Formats:
  xlsx : openpyxl engine, caller-supplied column widths, bold header row
  csv  : UTF-8 with BOM so spreadsheet tools detect the encoding
"""
from __future__ import annotations

import io
import logging
import re
from enum import Enum
from typing import Any, Literal, Sequence

import pandas as pd
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from src.table.columns import ExportColumn, get_value

logger = logging.getLogger(__name__)

ExportFormat = Literal["xlsx", "csv"]

MIME_TYPES: dict[str, str] = {
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "csv": "text/csv",
}


def format_cell(value: Any) -> Any:
    """Spreadsheet-friendly cell value: Y/N for booleans, blank for None."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "Y" if value else "N"
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value)
    return value


def to_frame(records: Sequence[Any], columns: Sequence[ExportColumn]) -> pd.DataFrame:
    titles = [c.title for c in columns]
    rows = [[format_cell(get_value(r, c.key)) for c in columns] for r in records]
    return pd.DataFrame(rows, columns=titles)


def _write_excel(frame: pd.DataFrame, columns: Sequence[ExportColumn], sheet_name: str) -> bytes:
    buf = io.BytesIO()
    with pd.ExcelWriter(buf, engine="openpyxl") as writer:
        frame.to_excel(writer, index=False, sheet_name=sheet_name)
        ws = writer.sheets[sheet_name]
        for idx, column in enumerate(columns, start=1):
            ws.column_dimensions[get_column_letter(idx)].width = column.width
        for cell in ws[1]:
            cell.font = Font(bold=True)
    return buf.getvalue()


def _write_csv(frame: pd.DataFrame) -> bytes:
    return frame.to_csv(index=False).encode("utf-8-sig")


def export_records(
    records: Sequence[Any],
    columns: Sequence[ExportColumn],
    fmt: ExportFormat = "xlsx",
    sheet_name: str = "Data",
) -> bytes:
    """Serialize `records` (already filtered by the caller) to file bytes."""
    frame = to_frame(records, columns)
    logger.info("Exporting %d rows × %d columns as %s", len(frame), len(columns), fmt)
    if fmt == "xlsx":
        return _write_excel(frame, columns, sheet_name)
    if fmt == "csv":
        return _write_csv(frame)
    raise ValueError(f"Unsupported export format: {fmt}")


def create_template(
    columns: Sequence[ExportColumn],
    sample_rows: Sequence[dict] = (),
    fmt: ExportFormat = "xlsx",
) -> bytes:
    """Header row plus optional sample rows for data entry."""
    return export_records(list(sample_rows), columns, fmt=fmt, sheet_name="Template")


def export_filename(title: str, fmt: ExportFormat, suffix: str = "") -> str:
    slug = re.sub(r"\s+", "_", title.strip().lower()) or "export"
    return f"{slug}{suffix}.{fmt}"
