"""
tests/test_translator.py
─────────────────────────
Tests for the translation lookup chain.
"""
import pytest

from src.i18n import translator
from src.i18n.translator import SUPPORTED_LANGS, resolve_lang, supported_languages, t


@pytest.fixture
def restore_lang():
    before = translator.get_lang()
    yield
    translator.set_lang(before)


class TestLookup:
    def test_requested_language(self):
        assert t("save", lang="ko") == "저장"
        assert t("save", lang="en") == "Save"
        assert t("dashboard", "nav", "en") == "Dashboard"

    def test_partial_language_falls_back_to_default(self, monkeypatch):
        loaded = translator._load_bundle
        monkeypatch.setattr(translator, "_load_bundle", lambda lang, ns: {} if lang == "ja" else loaded(lang, ns))
        assert t("invalid_fields", lang="ja", fields="a") == "입력값을 확인하세요: a"

    def test_unsupported_language(self):
        assert resolve_lang("fr") == "ko"
        assert t("save", lang="fr") == "저장"

    def test_missing_key(self):
        assert t("no.such.key") == "no.such.key"
        assert t("no.such.key", fallback="Fallback") == "Fallback"

    def test_missing_namespace(self):
        assert t("save", "nope", "en") == "save"


class TestInterpolation:
    def test_params(self):
        assert t("month_title", lang="en", year=2024, month=6) != t("month_title", lang="en")
        assert "2024" in t("month_title", lang="en", year=2024, month=6)

    def test_unknown_placeholder_kept(self):
        assert t("x", fallback="{a} and {b}", a=1) == "1 and {b}"


class TestActiveLanguage:
    def test_set_lang(self, restore_lang):
        translator.set_lang("en")
        assert t("save") == "Save"
        translator.set_lang("xx")
        assert translator.get_lang() == "ko"

    def test_supported_languages_are_copies(self):
        langs = supported_languages()
        langs[0]["code"] = "mutated"
        assert [lang["code"] for lang in supported_languages()] == list(SUPPORTED_LANGS)


class TestBundleCoverage:
    NAMESPACES = ("common", "nav", "auth", "data_table", "pages", "fields", "options")

    @pytest.mark.parametrize("lang", [code for code in SUPPORTED_LANGS if code != "ko"])
    @pytest.mark.parametrize("namespace", NAMESPACES)
    def test_every_default_key_translated(self, lang, namespace):
        base = translator._load_bundle("ko", namespace)
        bundle = translator._load_bundle(lang, namespace)
        assert base
        assert sorted(set(base) - set(bundle)) == []

    @pytest.mark.parametrize("lang", SUPPORTED_LANGS)
    def test_new_table_keys(self, lang):
        assert t("selected_count", "data_table", lang, count=3) != "selected_count"
        assert "3" in t("selected_count", "data_table", lang, count=3)
        assert t("error.invalid_value", "data_table", lang) != "error.invalid_value"
