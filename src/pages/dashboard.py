"""
src/pages/dashboard.py
──────────────────────
Home dashboard: headline KPI cards and a set of widgets the user can show
or hide. Widget visibility is kept in the application state.
"""

import dash_bootstrap_components as dbc
from dash import html

from src.i18n.translator import t
from src.pages.entity import page_header
from src.state.app_state import DASHBOARD_WIDGETS, AppState


def layout(state: AppState) -> html.Div:
    lang = state.language
    return html.Div(
        [
            html.Div(
                [
                    page_header(t("dashboard.title", "pages", lang), t("dashboard.subtitle", "pages", lang)),
                    dbc.DropdownMenu(
                        dbc.Checklist(
                            id="dashboard-widgets",
                            options=[
                                {"label": t(f"widget.{w}", "pages", lang), "value": w}
                                for w in DASHBOARD_WIDGETS
                            ],
                            value=state.widgets("dashboard"),
                            className="px-3 py-1",
                        ),
                        label=t("customize", "pages", lang),
                        size="sm",
                        color="secondary",
                        className="ms-auto",
                    ),
                ],
                style={"display": "flex", "alignItems": "flex-start"},
            ),
            html.Div(id="dashboard-content"),
        ]
    )
