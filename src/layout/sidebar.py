"""
src/layout/sidebar.py
──────────────────────
Section menu built from the route registry.
"""
import dash_bootstrap_components as dbc
from dash import html

from config.navigation import NAVIGATION
from src.i18n.translator import t

SIDEBAR_BG = "var(--fms-card)"
BORDER = "var(--fms-border)"
MUTED = "var(--fms-muted)"


def create_sidebar(pathname: str, lang: str | None = None) -> html.Div:
    """Sections with their links; the link for `pathname` is highlighted."""
    sections = []
    for section in NAVIGATION:
        sections.append(html.Div(
            t(section.label_key, "nav", lang),
            style={
                "fontSize": ".68rem",
                "color": MUTED,
                "textTransform": "uppercase",
                "letterSpacing": ".08em",
                "margin": "14px 0 6px",
            },
        ))
        sections.append(dbc.Nav(
            [
                dbc.NavLink(
                    t(route.label_key, "nav", lang),
                    href=route.path,
                    active=route.path == pathname,
                    className="sidebar-link",
                )
                for route in section.routes
            ],
            vertical=True,
            pills=True,
        ))

    return html.Div(
        sections,
        style={
            "backgroundColor": SIDEBAR_BG,
            "borderRight": f"1px solid {BORDER}",
            "padding": "6px 14px 14px",
            "width": "220px",
            "flexShrink": "0",
        },
    )
