"""
src/state/app_state.py
──────────────────────
Application-wide state: signed-in user, language, theme, dashboard layouts.

Persisted in the browser through one dcc.Store(storage_type="local") whose
data is a dict of blobs, one per local-storage entry:

    fms-user              JSON user object or absent
    fms-language          language code
    fms-theme             {"mode": ..., "accent": ...}
    fms-dashboard-layout  {feature: [widget, ...]}

`load_state` is the only reader of that dict and `dump_state` the only
writer. Malformed or unsupported values fall back to defaults.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError

from config.options import ACCENT_COLORS
from src.data.models import User
from src.i18n.translator import DEFAULT_LANG, SUPPORTED_LANGS

logger = logging.getLogger(__name__)

USER_KEY = "fms-user"
LANGUAGE_KEY = "fms-language"
THEME_KEY = "fms-theme"
LAYOUT_KEY = "fms-dashboard-layout"

ThemeMode = Literal["light", "dark", "system"]

DASHBOARD_WIDGETS: tuple[str, ...] = ("kpi", "equipment_status", "failures", "work_orders", "stock")


class ThemeState(BaseModel):
    mode: ThemeMode = "dark"
    accent: str = "blue"


class AppState(BaseModel):
    user: User | None = None
    language: str = DEFAULT_LANG
    theme: ThemeState = Field(default_factory=ThemeState)
    dashboard_layouts: dict[str, list[str]] = Field(default_factory=dict)

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def widgets(self, feature: str = "dashboard") -> list[str]:
        return self.dashboard_layouts.get(feature, list(DASHBOARD_WIDGETS))


# ── Storage boundary ──────────────────────────────────────────────────────────

def _decode(blob: Any) -> Any:
    """Blobs may be stored as JSON text or as already-decoded values."""
    if isinstance(blob, str):
        try:
            return json.loads(blob)
        except json.JSONDecodeError:
            return blob
    return blob


def _load_user(blob: Any) -> User | None:
    data = _decode(blob)
    if not isinstance(data, dict):
        return None
    try:
        return User.model_validate(data)
    except ValidationError as e:
        logger.debug("Discarding stored user: %s", e)
        return None


def _load_language(blob: Any) -> str:
    lang = _decode(blob)
    if isinstance(lang, str) and lang in SUPPORTED_LANGS:
        return lang
    if blob is not None:
        logger.debug("Discarding stored language %r", blob)
    return DEFAULT_LANG


def _load_theme(blob: Any) -> ThemeState:
    data = _decode(blob)
    if not isinstance(data, dict):
        return ThemeState()
    try:
        theme = ThemeState.model_validate(data)
    except ValidationError as e:
        logger.debug("Discarding stored theme: %s", e)
        return ThemeState()
    if theme.accent not in ACCENT_COLORS:
        return theme.model_copy(update={"accent": "blue"})
    return theme


def _load_layouts(blob: Any) -> dict[str, list[str]]:
    data = _decode(blob)
    if not isinstance(data, dict):
        return {}
    layouts: dict[str, list[str]] = {}
    for feature, widgets in data.items():
        if isinstance(widgets, list) and all(isinstance(w, str) for w in widgets):
            layouts[str(feature)] = list(widgets)
        else:
            logger.debug("Discarding stored layout for %s", feature)
    return layouts


def load_state(raw: dict | None) -> AppState:
    """Rebuild the state from the persisted blob dict; never raises on bad data."""
    if not isinstance(raw, dict):
        return AppState()
    return AppState(
        user=_load_user(raw.get(USER_KEY)),
        language=_load_language(raw.get(LANGUAGE_KEY)),
        theme=_load_theme(raw.get(THEME_KEY)),
        dashboard_layouts=_load_layouts(raw.get(LAYOUT_KEY)),
    )


def dump_state(state: AppState) -> dict:
    blob: dict[str, Any] = {
        LANGUAGE_KEY: state.language,
        THEME_KEY: state.theme.model_dump(),
        LAYOUT_KEY: state.dashboard_layouts,
    }
    if state.user is not None:
        blob[USER_KEY] = state.user.model_dump(mode="json")
    return blob


# ── Transitions ───────────────────────────────────────────────────────────────

def set_language(state: AppState, lang: str) -> AppState:
    return state.model_copy(update={"language": _load_language(lang)})


def set_theme(state: AppState, mode: str | None = None, accent: str | None = None) -> AppState:
    theme = _load_theme({
        "mode": mode or state.theme.mode,
        "accent": accent or state.theme.accent,
    })
    return state.model_copy(update={"theme": theme})


def set_widgets(state: AppState, widgets: list[str], feature: str = "dashboard") -> AppState:
    known = [w for w in widgets if w in DASHBOARD_WIDGETS]
    layouts = {**state.dashboard_layouts, feature: known}
    return state.model_copy(update={"dashboard_layouts": layouts})


# ── Theme tokens ──────────────────────────────────────────────────────────────

_PALETTES = {
    "dark": {
        "bg": "#0d1117",
        "card": "#161b22",
        "border": "#30363d",
        "text": "#c9d1d9",
        "muted": "#8b949e",
    },
    "light": {
        "bg": "#f6f8fa",
        "card": "#ffffff",
        "border": "#d0d7de",
        "text": "#1f2328",
        "muted": "#656d76",
    },
}


def resolved_mode(theme: ThemeState) -> str:
    return "dark" if theme.mode == "system" else theme.mode


def theme_tokens(theme: ThemeState) -> dict[str, str]:
    """Colors used by inline styles; system mode renders dark."""
    tokens = dict(_PALETTES[resolved_mode(theme)])
    tokens["accent"] = ACCENT_COLORS.get(theme.accent, ACCENT_COLORS["blue"])
    return tokens


def css_variables(theme: ThemeState) -> dict[str, str]:
    """Theme tokens as CSS custom properties for the root container."""
    return {f"--fms-{name}": value for name, value in theme_tokens(theme).items()}
