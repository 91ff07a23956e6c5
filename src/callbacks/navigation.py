"""
src/callbacks/navigation.py
────────────────────────────
Routing, the authentication guard, navbar and theme/language shortcuts.
"""
from __future__ import annotations

import logging

from dash import ALL, Input, Output, State, ctx, html, no_update

from config.navigation import HOME_PATH, LOGIN_PATH, ROUTES
from src.crud.schemas import SCHEMAS
from src.i18n.translator import t
from src.layout.navbar import create_navbar, theme_toggle_icon
from src.layout.sidebar import create_sidebar
from src.pages import calendars, dashboard, entity, kpi, login, sensor_live, theme
from src.state.app_state import AppState, css_variables, dump_state, load_state, resolved_mode, set_language, set_theme

logger = logging.getLogger(__name__)

ROOT_STYLE = {
    "backgroundColor": "var(--fms-bg)",
    "minHeight": "100vh",
    "color": "var(--fms-text)",
}

_PAGES = {
    "dashboard": dashboard.layout,
    "kpi": lambda s: kpi.layout(s.language),
    "sensor_live": lambda s: sensor_live.layout(s.language),
    "preventive_calendar": lambda s: calendars.layout("preventive", s.language),
    "calibration_calendar": lambda s: calendars.layout("calibration", s.language),
    "theme": theme.layout,
}


def clicked() -> bool:
    """True when the triggering input carries a real click (n_clicks > 0)."""
    return any(item.get("value") for item in ctx.triggered)


def not_found(lang: str | None) -> html.Div:
    return html.Div(
        [
            html.H2("404", className="page-title"),
            html.P(t("not_found", "common", lang), className="page-subtitle"),
            html.A(t("go_home", "common", lang), href=HOME_PATH),
        ],
        className="page-header",
    )


def render_page(pathname: str | None, state: AppState):
    route = ROUTES.get(pathname or HOME_PATH)
    if route is None:
        logger.debug("No route for %s", pathname)
        return not_found(state.language)
    if route.page in SCHEMAS:
        return entity.layout(SCHEMAS[route.page], state.language)
    return _PAGES[route.page](state)


def route_key(state: AppState) -> dict:
    """The parts of the app state that page layouts are built from."""
    return {
        "user": state.user.model_dump(mode="json") if state.user else None,
        "language": state.language,
    }


def theme_style(state: AppState) -> dict:
    return {**css_variables(state.theme), **ROOT_STYLE}


def register(app) -> None:
    """Register routing and navbar callbacks."""

    # ── Route key: theme and widget changes do not rebuild the page ───────────
    @app.callback(
        Output("store-route", "data"),
        Input("store-app", "data"),
        State("store-route", "data"),
    )
    def sync_route(app_data: dict | None, current: dict | None):
        key = route_key(load_state(app_data))
        return no_update if key == current else key

    # ── Theme ─────────────────────────────────────────────────────────────────
    @app.callback(
        Output("app-root", "style"),
        Input("store-app", "data"),
    )
    def apply_theme(app_data: dict | None) -> dict:
        return theme_style(load_state(app_data))

    @app.callback(
        Output("theme-toggle", "children"),
        Output("navbar", "dark"),
        Input("store-app", "data"),
        prevent_initial_call=True,
    )
    def theme_navbar(app_data: dict | None):
        state = load_state(app_data)
        return theme_toggle_icon(state), resolved_mode(state.theme) == "dark"

    # ── Page routing + guard ──────────────────────────────────────────────────
    @app.callback(
        Output("page-content", "children"),
        Output("navbar-container", "children"),
        Output("sidebar-container", "children"),
        Output("url", "pathname"),
        Input("url", "pathname"),
        Input("store-route", "data"),
        State("store-app", "data"),
    )
    def display_page(pathname: str | None, _route: dict | None, app_data: dict | None):
        state = load_state(app_data)

        if not state.is_authenticated:
            redirect = LOGIN_PATH if pathname != LOGIN_PATH else no_update
            return login.layout(state.language), None, None, redirect

        if pathname == LOGIN_PATH:
            pathname, redirect = HOME_PATH, HOME_PATH
        else:
            redirect = no_update
        return (
            render_page(pathname, state),
            create_navbar(state),
            create_sidebar(pathname, state.language),
            redirect,
        )

    # ── Navbar collapse ───────────────────────────────────────────────────────
    @app.callback(
        Output("navbar-collapse", "is_open"),
        Input("navbar-toggler", "n_clicks"),
        State("navbar-collapse", "is_open"),
        prevent_initial_call=True,
    )
    def toggle_navbar(n_clicks: int, is_open: bool) -> bool:
        return not is_open

    # ── Language menu ─────────────────────────────────────────────────────────
    @app.callback(
        Output("store-app", "data", allow_duplicate=True),
        Input({"type": "lang-option", "lang": ALL}, "n_clicks"),
        State("store-app", "data"),
        prevent_initial_call=True,
    )
    def choose_language(_clicks: list, app_data: dict | None):
        if not clicked():
            return no_update
        state = set_language(load_state(app_data), ctx.triggered_id["lang"])
        return dump_state(state)

    # ── Theme toggle ──────────────────────────────────────────────────────────
    @app.callback(
        Output("store-app", "data", allow_duplicate=True),
        Input("theme-toggle", "n_clicks"),
        State("store-app", "data"),
        prevent_initial_call=True,
    )
    def toggle_theme(n_clicks: int, app_data: dict | None):
        if not n_clicks:
            return no_update
        state = load_state(app_data)
        mode = "light" if resolved_mode(state.theme) == "dark" else "dark"
        return dump_state(set_theme(state, mode=mode))
