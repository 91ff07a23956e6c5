"""
tests/test_importer.py
───────────────────────
Tests for spreadsheet import with per-row validation.
"""
import base64
import io
from datetime import datetime

import pandas as pd
from pydantic import BaseModel, Field

from src.table.importer import decode_upload, import_records

CSV = (
    "Code,Name,Capacity,Qty,Install date,Active,Status\n"
    "EQ-1,Pump,12.5,3,2024-01-15,Y,running\n"
    "EQ-2,,abc,1.5,2024-02-30,maybe,broken\n"
    ",,,,,,\n"
    'EQ-3,Fan,"1,200",,,N,\n'
).encode("utf-8")


class TestRowValidation:
    def test_accepts_valid_rows(self, import_columns):
        result = import_records(CSV, "equipment.csv", import_columns)
        assert result.success
        assert result.data == [
            {"code": "EQ-1", "name": "Pump", "capacity": 12.5, "qty": 3,
             "install_date": "2024-01-15", "active": True, "status": "running"},
            {"code": "EQ-3", "name": "Fan", "capacity": 1200.0, "active": False},
        ]

    def test_reports_rejected_row_numbers(self, import_columns):
        result = import_records(CSV, "equipment.csv", import_columns)
        # header is row 1, the blank row 4 is skipped
        assert result.rejected_rows == [3]
        assert {e.row for e in result.errors} == {3}

    def test_error_codes_per_field(self, import_columns):
        result = import_records(CSV, "equipment.csv", import_columns)
        assert [(e.field, e.code) for e in result.errors] == [
            ("Name", "required"),
            ("Capacity", "invalid_number"),
            ("Qty", "invalid_integer"),
            ("Install date", "invalid_date"),
            ("Active", "invalid_boolean"),
            ("Status", "invalid_choice"),
        ]

    def test_summary_counts(self, import_columns):
        summary = import_records(CSV, "equipment.csv", import_columns).summary
        assert (summary.total, summary.success, summary.failed) == (3, 2, 1)
        assert summary.success + summary.failed == summary.total

    def test_headers_match_by_key_case_insensitive(self, import_columns):
        content = b"CODE,name,qty\nEQ-7,Crane,4\n"
        result = import_records(content, "x.csv", import_columns)
        assert result.data == [{"code": "EQ-7", "name": "Crane", "qty": 4}]


class TestFileErrors:
    def test_missing_required_header(self, import_columns):
        result = import_records(b"Code,Capacity\nEQ-1,3\n", "x.csv", import_columns)
        assert not result.success
        assert result.data == []
        assert len(result.errors) == 1
        assert (result.errors[0].row, result.errors[0].code) == (0, "file")

    def test_unsupported_extension(self, import_columns):
        result = import_records(b"whatever", "legacy.xls", import_columns)
        assert not result.success
        assert result.errors[0].code == "file"

    def test_bad_data_uri(self, import_columns):
        result = import_records("not-a-data-uri", "x.csv", import_columns)
        assert not result.success

    def test_unreadable_xlsx(self, import_columns):
        result = import_records(b"not a zip file", "x.xlsx", import_columns)
        assert not result.success


class TestFormats:
    def test_xlsx(self, import_columns):
        frame = pd.DataFrame({
            "Code": ["EQ-9"],
            "Name": ["Mixer"],
            "Capacity": [40],
            "Install date": [datetime(2024, 3, 1)],
        })
        buf = io.BytesIO()
        frame.to_excel(buf, index=False, engine="openpyxl")
        result = import_records(buf.getvalue(), "equipment.xlsx", import_columns)
        assert result.data == [
            {"code": "EQ-9", "name": "Mixer", "capacity": 40.0, "install_date": "2024-03-01"},
        ]

    def test_data_uri(self, import_columns):
        uri = "data:text/csv;base64," + base64.b64encode(b"Code,Name\nA,B\n").decode()
        assert decode_upload(uri) == b"Code,Name\nA,B\n"
        result = import_records(uri, "x.csv", import_columns)
        assert result.data == [{"code": "A", "name": "B"}]


class TestCompletion:
    def test_on_complete_receives_accepted_rows(self, import_columns):
        received = []
        import_records(CSV, "equipment.csv", import_columns, on_complete=received.append)
        assert len(received) == 1
        assert [r["code"] for r in received[0]] == ["EQ-1", "EQ-3"]

    def test_on_complete_not_called_without_rows(self, import_columns):
        received = []
        import_records(b"Code,Name\n,x\n", "x.csv", import_columns, on_complete=received.append)
        assert received == []


class _Capacity(BaseModel):
    code: str
    capacity: float = Field(default=0, ge=0)


class TestRecordCheck:
    DATA = b"Code,Name,Capacity\nEQ-1,Pump,-5\nEQ-2,Fan,10\n"

    def test_failing_row_rejected_with_field(self, import_columns):
        result = import_records(self.DATA, "x.csv", import_columns, validate=_Capacity.model_validate)
        assert result.rejected_rows == [2]
        assert [(e.row, e.field, e.code) for e in result.errors] == [(2, "Capacity", "invalid_value")]
        assert result.data == [{"code": "EQ-2", "name": "Fan", "capacity": 10.0}]
        assert result.summary.failed == 1

    def test_plain_value_error_has_no_field(self, import_columns):
        def no_pumps(row):
            if row["name"] == "Pump":
                raise ValueError("pumps are managed elsewhere")

        result = import_records(self.DATA, "x.csv", import_columns, validate=no_pumps)
        assert [(e.row, e.field, e.code) for e in result.errors] == [(2, None, "invalid_value")]

    def test_not_called_for_rows_with_cell_errors(self, import_columns):
        seen = []
        import_records(CSV, "equipment.csv", import_columns, validate=seen.append)
        assert [r["code"] for r in seen] == ["EQ-1", "EQ-3"]

    def test_table_passes_hook(self, table):
        table.validate_row = _Capacity.model_validate
        result = table.import_file(self.DATA, "x.csv")
        assert result.rejected_rows == [2]
