"""Credential check for the single staff account."""

from __future__ import annotations

import secrets

from .config import Settings, get_settings


def _matches(supplied: str, expected: str) -> bool:
    return secrets.compare_digest(supplied.encode("utf-8"), expected.encode("utf-8"))


def verify_login(username: str | None, password: str | None, settings: Settings | None = None) -> bool:
    """Return True only when both values equal the configured credential pair."""
    cfg = settings or get_settings()
    if not username or not password:
        return False
    if not cfg.admin_username or not cfg.admin_password:
        return False
    user_ok = _matches(username, cfg.admin_username)
    pass_ok = _matches(password, cfg.admin_password)
    return user_ok and pass_ok
