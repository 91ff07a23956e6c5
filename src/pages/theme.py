"""
src/pages/theme.py
──────────────────
Appearance and language settings.
"""

import dash_bootstrap_components as dbc
from dash import html

from config.options import ACCENT_COLORS
from src.i18n.translator import supported_languages, t
from src.layout.components.kpi_card import panel
from src.pages.entity import page_header
from src.state.app_state import AppState


def _accent_button(name: str, color: str, active: bool) -> html.Button:
    return html.Button(
        "✓" if active else "",
        id={"type": "accent-option", "accent": name},
        n_clicks=0,
        title=name,
        style={
            "width": "36px",
            "height": "36px",
            "borderRadius": "50%",
            "backgroundColor": color,
            "border": "3px solid var(--fms-text)" if active else "3px solid transparent",
            "color": "#ffffff",
            "fontWeight": "700",
            "marginRight": "10px",
            "cursor": "pointer",
        },
    )


def layout(state: AppState) -> html.Div:
    lang = state.language
    return html.Div(
        [
            page_header(t("theme.title", "pages", lang), t("theme.subtitle", "pages", lang)),
            dbc.Row(
                [
                    dbc.Col(panel(
                        t("theme.mode", "pages", lang),
                        dbc.RadioItems(
                            id="theme-mode",
                            options=[
                                {"label": t(f"theme.mode.{m}", "pages", lang), "value": m}
                                for m in ("light", "dark", "system")
                            ],
                            value=state.theme.mode,
                        ),
                    ), md=4),
                    dbc.Col(panel(
                        t("theme.accent", "pages", lang),
                        html.Div(
                            [_accent_button(name, color, name == state.theme.accent)
                             for name, color in ACCENT_COLORS.items()],
                            id="accent-options",
                            style={"display": "flex"},
                        ),
                    ), md=4),
                    dbc.Col(panel(
                        t("language", "common", lang),
                        dbc.RadioItems(
                            id="settings-language",
                            options=[
                                {"label": f"{l['flag']} {l['native']}", "value": l["code"]}
                                for l in supported_languages()
                            ],
                            value=lang,
                        ),
                    ), md=4),
                ],
                className="g-3",
            ),
        ]
    )
