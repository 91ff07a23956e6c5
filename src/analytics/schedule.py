"""
src/analytics/schedule.py
─────────────────────────
Next-occurrence calculation for recurring maintenance and inspections.

Period types:
  DAILY / CUSTOM_DAYS  +n days
  WEEKLY               +n weeks
  MONTHLY              +n months   (month-end clamped: Jan 31 + 1M → Feb 28/29)
  QUARTERLY            +3n months
  BI_ANNUALLY          +6n months
  YEARLY               +n years
"""
from __future__ import annotations

import logging
from datetime import date, datetime

import pandas as pd

logger = logging.getLogger(__name__)

_OFFSETS = {
    "DAILY": lambda n: pd.DateOffset(days=n),
    "WEEKLY": lambda n: pd.DateOffset(weeks=n),
    "MONTHLY": lambda n: pd.DateOffset(months=n),
    "QUARTERLY": lambda n: pd.DateOffset(months=3 * n),
    "BI_ANNUALLY": lambda n: pd.DateOffset(months=6 * n),
    "YEARLY": lambda n: pd.DateOffset(years=n),
    "CUSTOM_DAYS": lambda n: pd.DateOffset(days=n),
}

PERIOD_TYPES: tuple[str, ...] = tuple(_OFFSETS)


def parse_date(value: str | date | None) -> date | None:
    """ISO date string / date / datetime → date, or None when unparseable."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        return None


def next_schedule_date(
    base: str | date | None,
    period_type: str,
    value: int | None,
    today: date | None = None,
) -> str:
    """
    ISO date of the next occurrence after `base`.

    An invalid base date falls back to today. Non-positive values and unknown
    period types return the base date unchanged.
    """
    start = parse_date(base)
    if start is None:
        logger.warning("Invalid base date %r for schedule; defaulting to today", base)
        start = today or date.today()

    if not value or value <= 0:
        logger.warning("Period value %r must be positive; returning base date", value)
        return start.isoformat()

    offset = _OFFSETS.get(period_type)
    if offset is None:
        logger.warning("Unhandled period type %s; returning base date", period_type)
        return start.isoformat()

    return (pd.Timestamp(start) + offset(int(value))).date().isoformat()
