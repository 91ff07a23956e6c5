"""
src/layout/navbar.py
─────────────────────
Top bar: brand, language menu, theme toggle and the signed-in user.
"""

import dash_bootstrap_components as dbc
from dash import html

from src.i18n.translator import supported_languages, t
from src.state.app_state import AppState, resolved_mode

NAV_BG = "var(--fms-card)"
BORDER = "var(--fms-border)"
ACCENT = "var(--fms-accent)"
MUTED = "var(--fms-muted)"


def _language_menu(state: AppState) -> dbc.DropdownMenu:
    current = next(
        (lang for lang in supported_languages() if lang["code"] == state.language),
        supported_languages()[0],
    )
    return dbc.DropdownMenu(
        [
            dbc.DropdownMenuItem(
                f"{lang['flag']} {lang['native']}",
                id={"type": "lang-option", "lang": lang["code"]},
                n_clicks=0,
                active=lang["code"] == state.language,
            )
            for lang in supported_languages()
        ],
        label=f"{current['flag']} {current['native']}",
        size="sm",
        color="secondary",
        nav=True,
        in_navbar=True,
    )


def theme_toggle_icon(state: AppState) -> str:
    return "☾" if resolved_mode(state.theme) == "dark" else "☀"


def create_navbar(state: AppState) -> dbc.Navbar:
    lang = state.language
    user = state.user
    return dbc.Navbar(
        dbc.Container(
            [
                # Brand
                dbc.NavbarBrand(
                    [
                        html.Span("⚙", style={"marginRight": "8px", "fontSize": "1.1rem"}),
                        html.Span("FMS", style={"fontWeight": "700", "letterSpacing": ".04em"}),
                        html.Span(t("app_subtitle", "common", lang),
                                  style={"fontSize": ".72rem", "color": MUTED, "marginLeft": "8px"}),
                    ],
                    href="/",
                    style={"color": ACCENT, "textDecoration": "none"},
                ),
                dbc.NavbarToggler(id="navbar-toggler", n_clicks=0),
                dbc.Collapse(
                    dbc.Nav(
                        [
                            _language_menu(state),
                            dbc.NavItem(
                                dbc.Button(
                                    theme_toggle_icon(state),
                                    id="theme-toggle",
                                    n_clicks=0,
                                    size="sm",
                                    color="link",
                                    title=t("toggle_theme", "common", lang),
                                    style={"color": ACCENT, "textDecoration": "none"},
                                )
                            ),
                            dbc.NavItem(
                                html.Span(
                                    [
                                        html.Span(user.name, style={"fontWeight": "600"}),
                                        html.Span(f" · {user.company}", style={"color": MUTED}),
                                    ] if user else [],
                                    style={"fontSize": ".8rem", "margin": "0 12px"},
                                )
                            ),
                            dbc.NavItem(
                                dbc.Button(
                                    t("logout", "auth", lang),
                                    id="logout-btn",
                                    n_clicks=0,
                                    size="sm",
                                    color="secondary",
                                    outline=True,
                                )
                            ),
                        ],
                        className="ms-auto",
                        navbar=True,
                        style={"alignItems": "center"},
                    ),
                    id="navbar-collapse",
                    navbar=True,
                    is_open=False,
                ),
            ],
            fluid=True,
        ),
        id="navbar",
        color=NAV_BG,
        dark=resolved_mode(state.theme) == "dark",
        sticky="top",
        style={"borderBottom": f"1px solid {BORDER}", "padding": ".5rem 1rem"},
    )
