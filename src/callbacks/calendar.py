"""
src/callbacks/calendar.py
──────────────────────────
Month navigation and rendering for the preventive / calibration calendars.
"""
from __future__ import annotations

from datetime import date

from dash import Input, Output, State, ctx, html, no_update

from config.options import status_color
from src.analytics.calendar import group_by_date, shift_month
from src.i18n.translator import t
from src.layout.components.calendar_grid import calendar_grid
from src.layout.components.data_table import dt_id
from src.pages.calendars import CALENDARS
from src.state.app_state import load_state

# kind → (option group of the status, label field, status values in the legend)
_BADGES = {
    "preventive": ("PreventiveOrderStatus", "equipment_name",
                   ("PLANNED", "IN_PROGRESS", "COMPLETED", "OVERDUE")),
    "calibration": ("calibration", "instrument_name", ("scheduled", "completed", "overdue")),
}


def _legend(kind: str, lang: str | None) -> html.Div:
    group, _, statuses = _BADGES[kind]
    return html.Div(
        [
            html.Span(
                [
                    html.Span(style={
                        "display": "inline-block", "width": "10px", "height": "10px",
                        "borderRadius": "2px", "backgroundColor": status_color(group, s),
                        "marginRight": "4px",
                    }),
                    t(f"{group}.{s}", "options", lang, fallback=s),
                ],
                style={"fontSize": ".72rem", "marginLeft": "12px"},
            )
            for s in statuses
        ]
    )


def register(app) -> None:

    @app.callback(
        Output("cal-month", "data"),
        Input("cal-prev", "n_clicks"),
        Input("cal-next", "n_clicks"),
        Input("cal-today", "n_clicks"),
        State("cal-month", "data"),
        prevent_initial_call=True,
    )
    def navigate(_prev, _next, _today, current):
        trigger = ctx.triggered_id
        if trigger is None:
            return no_update
        if trigger == "cal-today":
            today = date.today()
            return {"year": today.year, "month": today.month}
        year, month = shift_month(current["year"], current["month"], -1 if trigger == "cal-prev" else 1)
        return {"year": year, "month": month}

    @app.callback(
        Output("cal-grid", "children"),
        Output("cal-title", "children"),
        Output("cal-legend", "children"),
        Input("cal-month", "data"),
        Input(dt_id("data", "preventive_orders"), "data"),
        Input(dt_id("data", "calibrations"), "data"),
        State("cal-kind", "data"),
        State("store-app", "data"),
    )
    def render_calendar(month, orders, calibrations, kind, app_data):
        lang = load_state(app_data).language
        table_id, date_key = CALENDARS[kind]
        records = orders if table_id == "preventive_orders" else calibrations
        group, label_key, _ = _BADGES[kind]

        def badge(record: dict) -> tuple[str, str]:
            return record.get(label_key) or record.get("id", ""), status_color(group, record.get("status"))

        grid = calendar_grid(
            month["year"], month["month"],
            group_by_date(records or [], date_key),
            badge,
            lang,
        )
        title = t("month_title", "common", lang, year=month["year"], month=month["month"])
        return grid, title, _legend(kind, lang)
