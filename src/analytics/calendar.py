"""
src/analytics/calendar.py
─────────────────────────
Month grid and per-day grouping for the maintenance calendars.
"""
from __future__ import annotations

import calendar
from collections import defaultdict
from datetime import date
from typing import Any, Iterable

from src.analytics.schedule import parse_date
from src.table.columns import get_value

SUNDAY = calendar.SUNDAY
MONDAY = calendar.MONDAY


def group_by_date(records: Iterable[Any], date_key: str) -> dict[str, list]:
    """
    Bucket records by the ISO date in `date_key`.

    Input order is kept within a day; records without a valid date are
    skipped.
    """
    grouped: dict[str, list] = defaultdict(list)
    for record in records:
        day = parse_date(get_value(record, date_key))
        if day is not None:
            grouped[day.isoformat()].append(record)
    return dict(grouped)


def month_grid(year: int, month: int, first_weekday: int = SUNDAY) -> list[list[date | None]]:
    """Weeks of the month, 7 cells each; days outside the month are None."""
    cal = calendar.Calendar(firstweekday=first_weekday)
    weeks: list[list[date | None]] = []
    for week in cal.monthdatescalendar(year, month):
        weeks.append([d if d.month == month else None for d in week])
    return weeks


def weekday_order(first_weekday: int = SUNDAY) -> list[int]:
    """calendar weekday numbers (Mon=0) in column order."""
    return [(first_weekday + i) % 7 for i in range(7)]


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1
