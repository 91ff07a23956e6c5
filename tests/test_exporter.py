"""
tests/test_exporter.py
───────────────────────
Tests for spreadsheet export.
"""
import io

import pandas as pd
import pytest
from openpyxl import load_workbook

from config.options import Priority
from src.table.columns import ExportColumn
from src.table.exporter import create_template, export_filename, export_records, format_cell, to_frame

COLUMNS = [
    ExportColumn("code", "Code", width=12),
    ExportColumn("name", "Name", width=30),
    ExportColumn("active", "Active"),
]


class TestFormatCell:
    def test_values(self):
        assert format_cell(None) == ""
        assert format_cell(True) == "Y"
        assert format_cell(False) == "N"
        assert format_cell(Priority.HIGH) == "high"
        assert format_cell(["a", "b"]) == "a, b"
        assert format_cell(3.5) == 3.5

    def test_to_frame_uses_titles_and_nested_keys(self):
        rows = [{"code": "A", "name": "x", "active": True, "meta": {"site": "P1"}}]
        frame = to_frame(rows, [ExportColumn("code", "Code"), ExportColumn("meta.site", "Site")])
        assert list(frame.columns) == ["Code", "Site"]
        assert frame.iloc[0].tolist() == ["A", "P1"]


class TestExportRecords:
    def test_xlsx_widths_and_bold_header(self):
        rows = [{"code": "A", "name": "Pump", "active": True}]
        content = export_records(rows, COLUMNS, fmt="xlsx", sheet_name="Equipment")
        ws = load_workbook(io.BytesIO(content))["Equipment"]
        assert ws["A1"].value == "Code"
        assert ws["A1"].font.bold
        assert ws.column_dimensions["A"].width == 12
        assert ws.column_dimensions["B"].width == 30
        assert ws["C2"].value == "Y"

    def test_csv_has_bom(self):
        content = export_records([{"code": "A", "name": "펌프", "active": False}], COLUMNS, fmt="csv")
        assert content.startswith(b"\xef\xbb\xbf")
        frame = pd.read_csv(io.BytesIO(content), encoding="utf-8-sig")
        assert frame.iloc[0].tolist() == ["A", "펌프", "N"]

    def test_empty_records_still_have_header(self):
        frame = pd.read_csv(io.BytesIO(export_records([], COLUMNS, fmt="csv")), encoding="utf-8-sig")
        assert list(frame.columns) == ["Code", "Name", "Active"]
        assert frame.empty

    def test_unknown_format(self):
        with pytest.raises(ValueError):
            export_records([], COLUMNS, fmt="pdf")


class TestTemplate:
    def test_sample_rows(self):
        content = create_template(COLUMNS, [{"code": "EQ-001", "name": "Sample", "active": True}])
        ws = load_workbook(io.BytesIO(content))["Template"]
        assert [c.value for c in ws[1]] == ["Code", "Name", "Active"]
        assert [c.value for c in ws[2]] == ["EQ-001", "Sample", "Y"]

    def test_filename(self):
        assert export_filename("Equipment List", "xlsx") == "equipment_list.xlsx"
        assert export_filename("equipment", "xlsx", suffix="_template") == "equipment_template.xlsx"
        assert export_filename("  ", "csv") == "export.csv"
