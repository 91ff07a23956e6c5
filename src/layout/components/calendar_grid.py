"""
src/layout/components/calendar_grid.py
───────────────────────────────────────
Month calendar with per-day badges.
"""
from __future__ import annotations

from datetime import date
from typing import Any, Callable

from dash import html

from src.analytics.calendar import SUNDAY, month_grid, weekday_order
from src.i18n.translator import t

BORDER = "var(--fms-border)"
MUTED = "var(--fms-muted)"
ACCENT = "var(--fms-accent)"

MAX_BADGES = 3


def calendar_grid(
    year: int,
    month: int,
    by_date: dict[str, list],
    badge: Callable[[Any], tuple[str, str]],
    lang: str | None = None,
    today: date | None = None,
) -> html.Div:
    """
    Args:
        by_date: {"YYYY-MM-DD": [record, ...]} for the month
        badge: record → (label, color)
    """
    today = today or date.today()
    header = [
        html.Div(t(f"weekday.{d}", "common", lang), className="cal-head",
                 style={"color": "#da3633" if d == 6 else MUTED})
        for d in weekday_order(SUNDAY)
    ]

    cells = []
    for week in month_grid(year, month, SUNDAY):
        for day in week:
            if day is None:
                cells.append(html.Div(className="cal-cell cal-empty"))
                continue
            records = by_date.get(day.isoformat(), [])
            badges = []
            for record in records[:MAX_BADGES]:
                label, color = badge(record)
                badges.append(html.Div(
                    label,
                    className="cal-badge",
                    title=label,
                    style={"borderLeft": f"3px solid {color}"},
                ))
            if len(records) > MAX_BADGES:
                badges.append(html.Div(
                    t("more_count", "common", lang, count=len(records) - MAX_BADGES),
                    style={"fontSize": ".65rem", "color": MUTED},
                ))
            is_today = day == today
            cells.append(html.Div(
                [
                    html.Div(str(day.day), className="cal-day",
                             style={"color": ACCENT if is_today else None,
                                    "fontWeight": "700" if is_today else "400"}),
                    *badges,
                ],
                className="cal-cell",
                style={"border": f"1px solid {ACCENT if is_today else BORDER}"},
            ))

    return html.Div(header + cells, className="cal-grid")
