"""
src/callbacks/auth.py
─────────────────────
Login form submission and logout.
"""
from __future__ import annotations

from dash import Input, Output, State, no_update

from config.navigation import LOGIN_PATH
from src.state.app_state import dump_state, load_state
from src.state.auth import login, logout


def register(app) -> None:

    @app.callback(
        Output("store-app", "data", allow_duplicate=True),
        Output("login-error", "children"),
        Output("login-error", "is_open"),
        Input("login-submit", "n_clicks"),
        Input("login-password", "n_submit"),
        State("login-company", "value"),
        State("login-username", "value"),
        State("login-password", "value"),
        State("store-app", "data"),
        prevent_initial_call=True,
    )
    def submit_login(n_clicks, n_submit, company_id, username, password, app_data):
        if not (n_clicks or n_submit):
            return no_update, no_update, no_update
        state, error = login(load_state(app_data), company_id, username, password)
        if error:
            return no_update, error, True
        return dump_state(state), "", False

    @app.callback(
        Output("store-app", "data", allow_duplicate=True),
        Output("url", "pathname", allow_duplicate=True),
        Input("logout-btn", "n_clicks"),
        State("store-app", "data"),
        prevent_initial_call=True,
    )
    def sign_out(n_clicks, app_data):
        if not n_clicks:
            return no_update, no_update
        return dump_state(logout(load_state(app_data))), LOGIN_PATH
