"""Session helpers (signed cookie middleware, context object, access gate)."""
from __future__ import annotations

from dataclasses import dataclass
from typing import MutableMapping, Optional

from fastapi import Depends, FastAPI, Request
from starlette.middleware.sessions import SessionMiddleware

from shelter.core.config import Settings
from shelter.core.errors import AuthenticationRequired

SESSION_COOKIE_NAME = "session"
SESSION_USER_KEY = "user"
LOGIN_PATH = "/login"


@dataclass
class SessionContext:
    """Explicit view of the session attached to one request."""

    data: MutableMapping

    @property
    def user(self) -> Optional[dict]:
        value = self.data.get(SESSION_USER_KEY)
        if isinstance(value, dict) and value.get("username"):
            return value
        return None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def username(self) -> str:
        user = self.user
        return user["username"] if user else ""


def configure_sessions(app: FastAPI, settings: Settings) -> None:
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session_secret,
        session_cookie=SESSION_COOKIE_NAME,
        max_age=max(60, settings.session_ttl_seconds),
        same_site="lax",
        https_only=settings.app_env == "prod",
    )


def session_context(request: Request) -> SessionContext:
    return SessionContext(request.session)


def gate(ctx: SessionContext) -> dict:
    """Admit the request when a user is signed in; never touches the session."""
    user = ctx.user
    if user is None:
        raise AuthenticationRequired(LOGIN_PATH)
    return user


def require_user(ctx: SessionContext = Depends(session_context)) -> dict:
    return gate(ctx)


def login_session(ctx: SessionContext, username: str) -> None:
    ctx.data.clear()
    ctx.data[SESSION_USER_KEY] = {"username": username}


def logout_session(ctx: SessionContext) -> None:
    ctx.data.clear()
