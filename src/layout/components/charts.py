"""
src/layout/components/charts.py
────────────────────────────────
Shared Plotly layout following the active theme.
"""
from __future__ import annotations

import plotly.graph_objects as go

from src.state.app_state import ThemeState, resolved_mode, theme_tokens


def base_layout(theme: ThemeState, height: int = 280, showlegend: bool = True) -> dict:
    tokens = theme_tokens(theme)
    return {
        "template": "plotly_dark" if resolved_mode(theme) == "dark" else "plotly_white",
        "paper_bgcolor": tokens["card"],
        "plot_bgcolor": tokens["card"],
        "margin": {"l": 10, "r": 10, "t": 10, "b": 10},
        "font": {"color": tokens["text"], "size": 11},
        "xaxis": {"gridcolor": tokens["border"]},
        "yaxis": {"gridcolor": tokens["border"]},
        "legend": {"bgcolor": "rgba(0,0,0,0)", "font": {"size": 10}},
        "height": height,
        "showlegend": showlegend,
    }


def empty_figure(theme: ThemeState, message: str, height: int = 280) -> go.Figure:
    fig = go.Figure()
    fig.update_layout(**base_layout(theme, height, showlegend=False))
    fig.add_annotation(text=message, showarrow=False, font={"color": theme_tokens(theme)["muted"]})
    fig.update_xaxes(visible=False)
    fig.update_yaxes(visible=False)
    return fig
