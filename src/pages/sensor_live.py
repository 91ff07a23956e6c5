"""
src/pages/sensor_live.py
────────────────────────
Live sensor panel. The refresh interval lives on this page only, so
readings are simulated while it is open.
"""

import dash_bootstrap_components as dbc
from dash import dcc, html

from config.settings import settings
from src.i18n.translator import t
from src.layout.components.kpi_card import panel
from src.pages.entity import page_header


def layout(lang: str | None = None) -> html.Div:
    return html.Div(
        [
            html.Div(
                [
                    page_header(t("sensor_live.title", "pages", lang), t("sensor_live.subtitle", "pages", lang)),
                    dbc.Switch(
                        id="sensor-live-pause",
                        label=t("sensor_live.pause", "pages", lang),
                        value=False,
                        className="ms-auto",
                    ),
                ],
                style={"display": "flex", "alignItems": "flex-start"},
            ),
            dcc.Interval(id="interval-sensors", interval=settings.SENSOR_REFRESH_MS, n_intervals=0),
            dcc.Store(id="sensor-history", data=[]),
            html.Div(id="sensor-live-cards", className="mb-3"),
            panel(
                t("sensor_live.chart", "pages", lang),
                dcc.Graph(id="sensor-live-chart", config={"displayModeBar": False}),
            ),
        ]
    )
