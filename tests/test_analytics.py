"""
tests/test_analytics.py
────────────────────────
Tests for schedule dates, calendar grids and KPI aggregation.
"""
from datetime import date, datetime

import pytest

from src.analytics.calendar import MONDAY, SUNDAY, group_by_date, month_grid, shift_month, weekday_order
from src.analytics.kpi import dashboard_summary, health_grade, kpi_color, kpi_overview
from src.analytics.schedule import next_schedule_date, parse_date


class TestNextScheduleDate:
    @pytest.mark.parametrize("base, period, value, expected", [
        ("2024-01-31", "MONTHLY", 1, "2024-02-29"),
        ("2023-01-31", "MONTHLY", 1, "2023-02-28"),
        ("2024-01-15", "QUARTERLY", 1, "2024-04-15"),
        ("2024-01-15", "BI_ANNUALLY", 1, "2024-07-15"),
        ("2024-02-29", "YEARLY", 1, "2025-02-28"),
        ("2024-01-15", "WEEKLY", 2, "2024-01-29"),
        ("2024-12-31", "DAILY", 1, "2025-01-01"),
        ("2024-01-01", "CUSTOM_DAYS", 45, "2024-02-15"),
    ])
    def test_periods(self, base, period, value, expected):
        assert next_schedule_date(base, period, value) == expected

    def test_invalid_base_uses_today(self, today):
        assert next_schedule_date("garbage", "DAILY", 1, today=today) == "2024-06-02"

    @pytest.mark.parametrize("value", [0, -3, None])
    def test_non_positive_returns_base(self, value):
        assert next_schedule_date("2024-01-15", "MONTHLY", value) == "2024-01-15"

    def test_unknown_period(self):
        assert next_schedule_date("2024-01-15", "HOURLY", 1) == "2024-01-15"

    def test_parse_date(self):
        assert parse_date(datetime(2024, 1, 2, 3, 4)) == date(2024, 1, 2)
        assert parse_date("2024-01-02T10:00:00") == date(2024, 1, 2)
        assert parse_date("02/01/2024") is None
        assert parse_date(None) is None


class TestCalendar:
    def test_sunday_first_grid(self):
        weeks = month_grid(2024, 6)
        assert len(weeks) == 6
        assert all(len(w) == 7 for w in weeks)
        assert weeks[0] == [None] * 6 + [date(2024, 6, 1)]
        assert weeks[-1] == [date(2024, 6, 30)] + [None] * 6
        assert sum(d is not None for w in weeks for d in w) == 30

    def test_monday_first_grid(self):
        first = month_grid(2024, 6, MONDAY)[0]
        assert first == [None] * 5 + [date(2024, 6, 1), date(2024, 6, 2)]

    def test_weekday_order(self):
        assert weekday_order(SUNDAY) == [6, 0, 1, 2, 3, 4, 5]
        assert weekday_order(MONDAY) == list(range(7))

    @pytest.mark.parametrize("year, month, delta, expected", [
        (2024, 12, 1, (2025, 1)),
        (2024, 1, -1, (2023, 12)),
        (2024, 6, -18, (2022, 12)),
        (2024, 6, 0, (2024, 6)),
    ])
    def test_shift_month(self, year, month, delta, expected):
        assert shift_month(year, month, delta) == expected

    def test_group_by_date(self):
        rows = [
            {"d": "2024-06-03"},
            {"d": "bad"},
            {"d": None},
            {"d": "2024-06-03T10:00"},
            {"d": "2024-06-04"},
        ]
        grouped = group_by_date(rows, "d")
        assert grouped == {"2024-06-03": [rows[0], rows[3]], "2024-06-04": [rows[4]]}


class TestKpi:
    @pytest.mark.parametrize("score, grade", [
        (95, "A"), (90, "A"), (89.9, "B"), (80, "B"), (70, "C"), (60, "D"), (59.9, "F"), (None, "F"),
    ])
    def test_health_grade(self, score, grade):
        assert health_grade(score) == grade

    def test_overview(self):
        metrics = [
            {"mtbf": 100, "mttr": 2, "availability": 98, "oee": 80, "health_score": 90, "risk_level": "low"},
            {"mtbf": 200, "mttr": 4, "availability": 90, "oee": 70, "health_score": 61, "risk_level": "high"},
        ]
        out = kpi_overview(metrics)
        assert out.equipment_count == 2
        assert (out.avg_mtbf, out.avg_mttr, out.avg_availability) == (150.0, 3.0, 94.0)
        assert (out.avg_oee, out.avg_health) == (75.0, 75.5)
        assert out.risk_counts == {"low": 1, "medium": 0, "high": 1, "critical": 0}

    def test_empty_overview(self):
        out = kpi_overview([])
        assert out.equipment_count == 0
        assert out.avg_oee == 0.0

    def test_kpi_color(self):
        assert kpi_color(90, good=85, fair=70) == "#2ea44f"
        assert kpi_color(75, good=85, fair=70) == "#e8a020"
        assert kpi_color(50, good=85, fair=70) == "#da3633"

    def test_dashboard_summary(self):
        equipment = [{"status": "running"}, {"status": "failure"}, {"status": "failure"}]
        orders = [{"status": s} for s in ("COMPLETED", "CANCELLED", "PLANNED", "OVERDUE")]
        stocks = [{"status": s} for s in ("low", "out", "normal", "excess")]
        out = dashboard_summary(equipment, orders, stocks)
        assert (out.equipment_total, out.equipment_failed) == (3, 2)
        assert out.open_orders == 2
        assert out.stock_alerts == 2
        assert out.status_counts == {"running": 1, "stopped": 0, "maintenance": 0, "failure": 2}
