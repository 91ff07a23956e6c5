"""
src/layout/components/status_badge.py
──────────────────────────────────────
Option value badge (status, priority, risk...) with color-coded border.
"""

from dash import html

from config.options import status_color
from src.i18n.translator import t


def status_badge(group: str, value: str, lang: str | None = None) -> html.Span:
    """Inline badge; label from the "options" namespace as "<group>.<value>"."""
    color = status_color(group, value)
    label = t(f"{group}.{value}", "options", lang, fallback=str(value))

    return html.Span(
        label,
        style={
            "fontSize": ".68rem",
            "fontWeight": "700",
            "color": color,
            "border": f"1px solid {color}",
            "borderRadius": "4px",
            "padding": "1px 7px",
            "whiteSpace": "nowrap",
        },
    )
