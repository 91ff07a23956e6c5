"""
src/i18n/translator.py
───────────────────────
Translation engine using per-language, per-namespace JSON bundles.

Layout:
    locales/<lang>/<namespace>.json     flat {"key": "text"}

Lookup order: requested language → default language → `fallback` → key.
`{name}` placeholders are filled from keyword arguments.

Usage:
    from src.i18n.translator import t

    t("save")                              # → "저장" (ko)
    t("dashboard", "nav", "en")            # → "Dashboard"
    t("page_info", "data_table", page=2, total=5)
"""

from __future__ import annotations

import json
import logging
import re
from functools import lru_cache
from pathlib import Path
from typing import Any

from config.settings import settings

logger = logging.getLogger(__name__)

_LOCALES_DIR = Path(__file__).parent / "locales"
_PLACEHOLDER = re.compile(r"\{(\w+)\}")

LANGUAGES: tuple[dict[str, str], ...] = (
    {"code": "ko", "name": "Korean", "native": "한국어", "flag": "🇰🇷"},
    {"code": "en", "name": "English", "native": "English", "flag": "🇺🇸"},
    {"code": "ja", "name": "Japanese", "native": "日本語", "flag": "🇯🇵"},
    {"code": "zh", "name": "Chinese", "native": "中文", "flag": "🇨🇳"},
)
SUPPORTED_LANGS: tuple[str, ...] = tuple(lang["code"] for lang in LANGUAGES)
DEFAULT_LANG = settings.DEFAULT_LANG if settings.DEFAULT_LANG in SUPPORTED_LANGS else "ko"

_current_lang: str = DEFAULT_LANG


@lru_cache(maxsize=64)
def _load_bundle(lang: str, namespace: str) -> dict:
    path = _LOCALES_DIR / lang / f"{namespace}.json"
    if not path.exists():
        return {}
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def supported_languages() -> list[dict[str, str]]:
    return [dict(lang) for lang in LANGUAGES]


def resolve_lang(lang: str | None) -> str:
    return lang if lang in SUPPORTED_LANGS else DEFAULT_LANG


def set_lang(lang: str) -> None:
    """Set the active language (module-level default)."""
    global _current_lang
    _current_lang = resolve_lang(lang)


def get_lang() -> str:
    return _current_lang


def _interpolate(text: str, params: dict[str, Any]) -> str:
    return _PLACEHOLDER.sub(
        lambda m: str(params[m.group(1)]) if m.group(1) in params else m.group(0),
        text,
    )


def t(
    key: str,
    namespace: str = "common",
    lang: str | None = None,
    fallback: str | None = None,
    **params: Any,
) -> str:
    """
    Translate `key` from `namespace`.

    Args:
        key: Flat key, e.g. "save" or "section.home"
        namespace: Bundle name ("common", "nav", "data_table", ...)
        lang: Language override; uses the module default if None
        fallback: Text used when no bundle has the key

    Returns:
        Translated string, `fallback`, or the key itself if not found.
    """
    code = resolve_lang(lang or _current_lang)
    text = _load_bundle(code, namespace).get(key)
    if text is None and code != DEFAULT_LANG:
        text = _load_bundle(DEFAULT_LANG, namespace).get(key)
    if text is None:
        text = fallback if fallback is not None else key
    return _interpolate(str(text), params) if params else str(text)
