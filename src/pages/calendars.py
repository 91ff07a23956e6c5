"""
src/pages/calendars.py
──────────────────────
Month calendars for preventive work orders and instrument calibrations.
Both read the shared record stores, so edits on the list pages show up here.
"""
from datetime import date

import dash_bootstrap_components as dbc
from dash import dcc, html

from src.i18n.translator import t
from src.pages.entity import page_header

CARD_BG = "var(--fms-card)"
BORDER = "var(--fms-border)"

# kind → (records table id, date field)
CALENDARS = {
    "preventive": ("preventive_orders", "scheduled_date"),
    "calibration": ("calibrations", "next_calibration_date"),
}


def layout(kind: str, lang: str | None = None) -> html.Div:
    today = date.today()
    return html.Div(
        [
            page_header(t(f"{kind}_calendar.title", "pages", lang),
                        t(f"{kind}_calendar.subtitle", "pages", lang)),
            dcc.Store(id="cal-kind", data=kind),
            dcc.Store(id="cal-month", data={"year": today.year, "month": today.month}),
            html.Div(
                [
                    html.Div(
                        [
                            dbc.Button("‹", id="cal-prev", n_clicks=0, size="sm", color="secondary", outline=True),
                            html.Span(id="cal-title", style={"fontWeight": "700", "margin": "0 12px"}),
                            dbc.Button("›", id="cal-next", n_clicks=0, size="sm", color="secondary", outline=True),
                            dbc.Button(t("today", "common", lang), id="cal-today", n_clicks=0, size="sm",
                                       color="primary", outline=True, className="ms-3"),
                            html.Div(id="cal-legend", className="ms-auto"),
                        ],
                        style={"display": "flex", "alignItems": "center", "marginBottom": "12px"},
                    ),
                    html.Div(id="cal-grid"),
                ],
                style={
                    "backgroundColor": CARD_BG,
                    "border": f"1px solid {BORDER}",
                    "borderRadius": "8px",
                    "padding": "16px",
                },
            ),
        ]
    )
