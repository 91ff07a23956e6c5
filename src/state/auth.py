"""
src/state/auth.py
─────────────────
Mock authentication against the static credential list.
"""
from __future__ import annotations

import logging

from src.data.mock import MOCK_CREDENTIALS
from src.data.models import User
from src.i18n.translator import t
from src.state.app_state import AppState

logger = logging.getLogger(__name__)


def authenticate(company_id: str | None, username: str | None, password: str | None) -> User | None:
    """Matching user without the password, or None."""
    for cred in MOCK_CREDENTIALS:
        if cred.company_id == company_id and cred.username == username and cred.password == password:
            return User.model_validate(cred.model_dump(exclude={"password"}))
    return None


def login(
    state: AppState,
    company_id: str | None,
    username: str | None,
    password: str | None,
) -> tuple[AppState, str | None]:
    """(new state, None) on success; (unchanged state, message) otherwise."""
    user = authenticate(company_id, username, password)
    if user is None:
        logger.info("Login failed for %s@%s", username, company_id)
        return state, t("login_failed", "auth", state.language)
    logger.info("User %s signed in", user.username)
    return state.model_copy(update={"user": user}), None


def logout(state: AppState) -> AppState:
    if state.user is not None:
        logger.info("User %s signed out", state.user.username)
    return state.model_copy(update={"user": None})
