"""
tests/test_simulator.py
────────────────────────
Tests for the sensor reading and KPI trend simulator.
"""
from datetime import UTC, date, datetime

import numpy as np

from config.options import SensorStatus
from src.data.simulator import apply_readings, classify, kpi_trend, make_rng, simulate_sensor_values

SENSORS = [
    {"id": "S-1", "status": "active", "min_value": 0, "max_value": 10, "last_value": None},
    {"id": "S-2", "status": "inactive", "min_value": 0, "max_value": 10, "last_value": 3.0},
    {"id": "S-3", "status": "warning", "min_value": 50, "max_value": 80, "last_value": 60.0},
]


class TestSensorValues:
    def test_inactive_skipped(self, rng):
        readings = simulate_sensor_values(SENSORS, rng)
        assert [r.sensor_id for r in readings] == ["S-1", "S-3"]

    def test_reproducible(self):
        a = simulate_sensor_values(SENSORS, make_rng(7), now=datetime(2024, 6, 1, tzinfo=UTC))
        b = simulate_sensor_values(SENSORS, make_rng(7), now=datetime(2024, 6, 1, tzinfo=UTC))
        assert a == b

    def test_status_follows_range(self, rng):
        sensors = [{"id": str(i), "status": "active", "min_value": 0, "max_value": 1} for i in range(200)]
        readings = simulate_sensor_values(sensors, rng)
        for r in readings:
            expected = "active" if 0 <= r.value <= 1 else "warning"
            assert r.status == expected
        assert {r.status for r in readings} == {"active", "warning"}

    def test_timestamp_truncated(self, rng):
        now = datetime(2024, 6, 1, 12, 0, 0, 123456, tzinfo=UTC)
        reading = simulate_sensor_values(SENSORS[:1], rng, now=now)[0]
        assert reading.timestamp == "2024-06-01T12:00:00+00:00"

    def test_classify(self):
        assert classify(5, 0, 10) == SensorStatus.ACTIVE
        assert classify(10, 0, 10) == SensorStatus.ACTIVE
        assert classify(10.1, 0, 10) == SensorStatus.WARNING

    def test_apply_readings(self, rng):
        readings = simulate_sensor_values(SENSORS, rng)
        updated = apply_readings(SENSORS, readings)
        assert updated[0]["last_value"] == readings[0].value
        assert updated[1] == SENSORS[1]
        assert SENSORS[0]["last_value"] is None


class TestKpiTrend:
    METRICS = [
        {"equipment_name": "A", "oee": 80.0},
        {"equipment_name": "B", "oee": 99.5},
    ]

    def test_shape_and_dates(self, rng):
        df = kpi_trend(self.METRICS, rng, days=30, end=date(2024, 6, 1))
        assert len(df) == 60
        assert list(df.columns) == ["date", "equipment_name", "oee"]
        a = df[df["equipment_name"] == "A"]
        assert a["date"].iloc[0] == date(2024, 5, 3)
        assert a["date"].iloc[-1] == date(2024, 6, 1)

    def test_ends_at_current_value(self, rng):
        df = kpi_trend(self.METRICS, rng, end=date(2024, 6, 1))
        last = df.groupby("equipment_name")["oee"].last().to_dict()
        assert last == {"A": 80.0, "B": 99.5}

    def test_clipped(self, rng):
        df = kpi_trend(self.METRICS, rng, days=365)
        assert np.all((df["oee"] >= 0) & (df["oee"] <= 100))

    def test_empty(self, rng):
        df = kpi_trend([], rng)
        assert df.empty
        assert list(df.columns) == ["date", "equipment_name", "oee"]
