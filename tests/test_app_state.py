"""
tests/test_app_state.py
────────────────────────
Tests for persisted application state and mock authentication.
"""
from src.callbacks.navigation import route_key, theme_style
from src.data.models import User
from src.state.app_state import (
    DASHBOARD_WIDGETS,
    LANGUAGE_KEY,
    LAYOUT_KEY,
    THEME_KEY,
    USER_KEY,
    AppState,
    ThemeState,
    css_variables,
    dump_state,
    load_state,
    set_language,
    set_theme,
    set_widgets,
)
from src.state.auth import authenticate, login, logout

USER = User(id="1", username="admin", name="Admin", email="a@b.c", level="admin")


class TestStorage:
    def test_defaults(self):
        state = load_state(None)
        assert state.user is None
        assert not state.is_authenticated
        assert state.language == "ko"
        assert state.theme == ThemeState()
        assert state.widgets() == list(DASHBOARD_WIDGETS)

    def test_round_trip(self):
        state = AppState(
            user=USER,
            language="en",
            theme=ThemeState(mode="light", accent="green"),
            dashboard_layouts={"dashboard": ["kpi", "stock"]},
        )
        assert load_state(dump_state(state)) == state

    def test_signed_out_has_no_user_blob(self):
        assert USER_KEY not in dump_state(AppState())

    def test_json_text_blobs(self):
        state = load_state({
            USER_KEY: USER.model_dump_json(),
            LANGUAGE_KEY: '"ja"',
            THEME_KEY: '{"mode": "light", "accent": "purple"}',
        })
        assert state.user == USER
        assert state.language == "ja"
        assert state.theme.accent == "purple"

    def test_plain_language_text(self):
        assert load_state({LANGUAGE_KEY: "en"}).language == "en"

    def test_malformed_blobs_fall_back(self):
        state = load_state({
            USER_KEY: "{broken",
            LANGUAGE_KEY: "xx",
            THEME_KEY: {"mode": "neon"},
            LAYOUT_KEY: {"dashboard": [1, 2], "kpi": ["kpi"]},
        })
        assert state.user is None
        assert state.language == "ko"
        assert state.theme == ThemeState()
        assert state.dashboard_layouts == {"kpi": ["kpi"]}

    def test_unknown_accent_becomes_blue(self):
        state = load_state({THEME_KEY: {"mode": "light", "accent": "pink"}})
        assert (state.theme.mode, state.theme.accent) == ("light", "blue")


class TestTransitions:
    def test_set_language(self):
        assert set_language(AppState(), "zh").language == "zh"
        assert set_language(AppState(language="en"), "fr").language == "ko"

    def test_set_theme_partial(self):
        state = set_theme(AppState(), mode="light")
        state = set_theme(state, accent="red")
        assert (state.theme.mode, state.theme.accent) == ("light", "red")

    def test_set_widgets_drops_unknown(self):
        state = set_widgets(AppState(), ["stock", "bogus", "kpi"])
        assert state.widgets() == ["stock", "kpi"]
        assert state.widgets("other") == list(DASHBOARD_WIDGETS)

    def test_css_variables(self):
        dark = css_variables(ThemeState(mode="system", accent="green"))
        assert dark["--fms-bg"] == "#0d1117"
        assert dark["--fms-accent"] == "#2ea44f"
        light = css_variables(ThemeState(mode="light"))
        assert light["--fms-card"] == "#ffffff"
        assert set(light) == set(dark)


class TestRouteKey:
    def test_theme_change_keeps_route(self):
        state = AppState(user=USER)
        themed = set_theme(state, mode="light", accent="red")
        assert route_key(themed) == route_key(state)
        assert theme_style(themed) != theme_style(state)

    def test_language_and_user_change_route(self):
        state = AppState(user=USER)
        assert route_key(set_language(state, "en")) != route_key(state)
        assert route_key(logout(state))["user"] is None

    def test_theme_style_carries_variables(self):
        style = theme_style(AppState(theme=ThemeState(mode="light")))
        assert style["--fms-card"] == "#ffffff"
        assert style["backgroundColor"] == "var(--fms-bg)"


class TestAuth:
    def test_valid_credentials(self):
        state, error = login(AppState(), "company1", "admin", "admin123")
        assert error is None
        assert state.user.username == "admin"
        assert "password" not in state.user.model_dump()

    def test_wrong_company(self):
        assert authenticate("company2", "admin", "admin123") is None

    def test_failure_message_is_translated(self):
        before = AppState(language="en")
        state, error = login(before, "company1", "admin", "nope")
        assert state is before
        assert error == "Invalid company, username or password."

    def test_logout(self):
        state, _ = login(AppState(), "company1", "user1", "user123")
        out = logout(state)
        assert out.user is None
        assert logout(out).user is None
