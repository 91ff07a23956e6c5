"""
src/pages/login.py
──────────────────
Company / username / password sign-in form.
"""

import dash_bootstrap_components as dbc
from dash import html

from src.data.mock import COMPANIES
from src.i18n.translator import t

CARD_BG = "var(--fms-card)"
BORDER = "var(--fms-border)"
MUTED = "var(--fms-muted)"
ACCENT = "var(--fms-accent)"


def layout(lang: str | None = None) -> html.Div:
    return html.Div(
        html.Div(
            [
                html.Div("⚙ FMS", style={"fontSize": "1.6rem", "fontWeight": "700", "color": ACCENT}),
                html.P(t("login_subtitle", "auth", lang), style={"color": MUTED, "fontSize": ".85rem"}),
                dbc.Alert(id="login-error", color="danger", is_open=False, className="py-2"),
                dbc.Label(t("company", "auth", lang)),
                dbc.Select(
                    id="login-company",
                    options=COMPANIES,
                    value=COMPANIES[0]["value"],
                    className="mb-3",
                ),
                dbc.Label(t("username", "auth", lang)),
                dbc.Input(id="login-username", type="text", className="mb-3", autoFocus=True),
                dbc.Label(t("password", "auth", lang)),
                dbc.Input(id="login-password", type="password", className="mb-4", n_submit=0),
                dbc.Button(
                    t("login", "auth", lang),
                    id="login-submit",
                    n_clicks=0,
                    color="primary",
                    className="w-100",
                ),
                html.Div(
                    t("demo_hint", "auth", lang),
                    style={"fontSize": ".7rem", "color": MUTED, "marginTop": "14px"},
                ),
            ],
            style={
                "backgroundColor": CARD_BG,
                "border": f"1px solid {BORDER}",
                "borderRadius": "10px",
                "padding": "28px",
                "width": "360px",
            },
        ),
        style={"display": "flex", "justifyContent": "center", "paddingTop": "10vh"},
    )
