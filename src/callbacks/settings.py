"""
src/callbacks/settings.py
──────────────────────────
Theme page and dashboard widget preferences → persisted application state.
"""
from __future__ import annotations

from dash import ALL, Input, Output, State, ctx, no_update

from src.callbacks.navigation import clicked
from src.state.app_state import dump_state, load_state, set_language, set_theme, set_widgets


def register(app) -> None:

    @app.callback(
        Output("store-app", "data", allow_duplicate=True),
        Input("theme-mode", "value"),
        State("store-app", "data"),
        prevent_initial_call=True,
    )
    def choose_mode(mode, app_data):
        state = load_state(app_data)
        if not mode or mode == state.theme.mode:
            return no_update
        return dump_state(set_theme(state, mode=mode))

    @app.callback(
        Output("store-app", "data", allow_duplicate=True),
        Input({"type": "accent-option", "accent": ALL}, "n_clicks"),
        State("store-app", "data"),
        prevent_initial_call=True,
    )
    def choose_accent(_clicks, app_data):
        if not clicked():
            return no_update
        return dump_state(set_theme(load_state(app_data), accent=ctx.triggered_id["accent"]))

    @app.callback(
        Output("store-app", "data", allow_duplicate=True),
        Input("settings-language", "value"),
        State("store-app", "data"),
        prevent_initial_call=True,
    )
    def choose_language(lang, app_data):
        state = load_state(app_data)
        if not lang or lang == state.language:
            return no_update
        return dump_state(set_language(state, lang))

    @app.callback(
        Output("store-app", "data", allow_duplicate=True),
        Input("dashboard-widgets", "value"),
        State("store-app", "data"),
        prevent_initial_call=True,
    )
    def choose_widgets(widgets, app_data):
        state = load_state(app_data)
        if list(widgets or []) == state.widgets("dashboard"):
            return no_update
        return dump_state(set_widgets(state, widgets or []))
