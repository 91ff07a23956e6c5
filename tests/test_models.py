"""
tests/test_models.py
─────────────────────
Tests for Pydantic v2 data models.
"""
import pytest
from pydantic import ValidationError

from config.options import EquipmentStatus
from src.data import mock
from src.data.models import (
    Equipment,
    KpiMetrics,
    MaterialStock,
    PreventiveMaster,
    TPMActivity,
    User,
)


class TestEnumValues:
    def test_enum_stored_as_value(self):
        eq = Equipment(id="1", code="C", name="N", type="pump", location="L", status=EquipmentStatus.FAILURE)
        assert type(eq.status) is str
        assert eq.status == "failure"

    def test_string_accepted(self):
        eq = Equipment(id="1", code="C", name="N", type="pump", location="L", status="maintenance")
        assert eq.model_dump(mode="json")["status"] == "maintenance"

    def test_unknown_status_rejected(self):
        with pytest.raises(ValidationError):
            Equipment(id="1", code="C", name="N", type="pump", location="L", status="exploded")


class TestBounds:
    def test_percentages(self):
        base = dict(id="1", equipment_id="EQ", equipment_name="E", mtbf=10, mttr=1, oee=80, health_score=90)
        KpiMetrics(availability=100, **base)
        with pytest.raises(ValidationError):
            KpiMetrics(availability=101, **base)

    def test_negative_stock(self):
        with pytest.raises(ValidationError):
            MaterialStock(id="1", material_code="M", material_name="N", warehouse_name="W", current_stock=-1)

    def test_completion_rate(self):
        with pytest.raises(ValidationError):
            TPMActivity(id="1", activity_no="A", title="T", start_date="2024-01-01",
                        end_date="2024-01-02", completion_rate=120)

    def test_interval_must_be_positive(self):
        with pytest.raises(ValidationError):
            PreventiveMaster(id="1", code="P", name="N", equipment_id="E",
                             effective_date="2024-01-01", interval_days=0)


class TestMockData:
    def test_users_have_no_password(self):
        assert len(mock.USERS) == len(mock.MOCK_CREDENTIALS)
        for user in mock.USERS:
            assert type(user) is User
            assert "password" not in user.model_dump()

    def test_seed_returns_fresh_json_copies(self):
        first = mock.seed(mock.EQUIPMENT)
        first[0]["name"] = "changed"
        assert mock.seed(mock.EQUIPMENT)[0]["name"] != "changed"
        assert all(isinstance(r["id"], str) for r in first)
