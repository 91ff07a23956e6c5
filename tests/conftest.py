"""
tests/conftest.py
─────────────────
Shared pytest fixtures for the FMS test suite.
"""
import os
from datetime import date

import numpy as np
import pytest

os.environ.setdefault("SIMULATION_SEED", "42")
os.environ.setdefault("DEFAULT_LANG", "ko")

_STATUSES = ["running", "stopped", "maintenance", "failure", "running"]


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(42)


@pytest.fixture
def today() -> date:
    return date(2024, 6, 1)


@pytest.fixture
def records() -> list[dict]:
    """25 equipment-like rows; odd ids are pumps, ids 1-12 sit in Plant A."""
    return [
        {
            "id": str(i),
            "code": f"EQ-{i:03d}",
            "name": f"Pump {i}" if i % 2 else f"Compressor {i}",
            "location": "Plant A" if i <= 12 else "Plant B",
            "status": _STATUSES[i % 5],
            "capacity": float(i * 10) if i != 7 else None,
        }
        for i in range(1, 26)
    ]


@pytest.fixture
def columns():
    from src.table.columns import Column
    return [
        Column(key="code", title="Code", searchable=True, sortable=True),
        Column(key="name", title="Name", searchable=True, sortable=True),
        Column(key="location", title="Location", filterable=True),
        Column(key="status", title="Status", filterable=True, sortable=True, option_group="EquipmentStatus"),
        Column(key="capacity", title="Capacity", sortable=True, align="right"),
    ]


@pytest.fixture
def import_columns():
    from src.table.columns import ImportColumn
    return [
        ImportColumn(key="code", title="Code", required=True),
        ImportColumn(key="name", title="Name", required=True),
        ImportColumn(key="capacity", title="Capacity", type="number"),
        ImportColumn(key="qty", title="Qty", type="integer"),
        ImportColumn(key="install_date", title="Install date", type="date"),
        ImportColumn(key="active", title="Active", type="boolean"),
        ImportColumn(key="status", title="Status", choices=("running", "stopped")),
    ]


@pytest.fixture
def table(records, columns, import_columns):
    from src.table.data_table import DataTable
    return DataTable("equipment", columns, records, title="Equipment", import_columns=import_columns, importable=True)
