"""
src/layout/main.py
───────────────────
Main application layout composition.

Contains:
  - dcc.Location for routing
  - dcc.Store for the persisted application state (browser local storage)
    and the route key derived from it (user + language)
  - one records store per entity schema (in memory, shared across pages)
  - Navbar + sidebar + page content containers (filled by callbacks)
"""
from dash import dcc, html

from src.crud.schemas import SCHEMAS
from src.layout.components.data_table import dt_id
from src.state.app_state import AppState, css_variables, dump_state


def create_layout() -> html.Div:
    """Assemble the root application layout."""
    default_state = AppState()
    return html.Div(
        [
            # ── Client-side state stores ──────────────────────────────────────
            dcc.Store(id="store-app", storage_type="local", data=dump_state(default_state)),
            dcc.Store(id="store-route", data=None),
            *[
                dcc.Store(id=dt_id("data", name), data=schema.initial())
                for name, schema in SCHEMAS.items()
            ],

            # ── Routing ───────────────────────────────────────────────────────
            dcc.Location(id="url", refresh=False),

            # ── Navigation bar ────────────────────────────────────────────────
            html.Div(id="navbar-container"),

            # ── Sidebar + page content ────────────────────────────────────────
            html.Div(
                [
                    html.Div(id="sidebar-container"),
                    html.Div(
                        id="page-content",
                        style={"flex": "1", "minWidth": "0", "padding": "1.25rem"},
                    ),
                ],
                style={"display": "flex", "minHeight": "calc(100vh - 60px)"},
            ),

            # ── Footer ────────────────────────────────────────────────────────
            html.Footer(
                [
                    html.Span("FMS · Facility Management System"),
                    html.Span(" · "),
                    html.Span("Mock data"),
                ],
                style={
                    "textAlign": "center",
                    "padding": ".7rem",
                    "fontSize": ".72rem",
                    "color": "var(--fms-muted)",
                    "borderTop": "1px solid var(--fms-border)",
                },
            ),
        ],
        id="app-root",
        style={
            **css_variables(default_state.theme),
            "backgroundColor": "var(--fms-bg)",
            "minHeight": "100vh",
            "color": "var(--fms-text)",
        },
    )
