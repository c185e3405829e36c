from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from shelter.core.config import Settings
from shelter.core.security import verify_login
from shelter.routers.deps import request_settings
from shelter.services.session_service import (
    SessionContext,
    login_session,
    logout_session,
    session_context,
)

router = APIRouter(tags=["auth"])
logger = logging.getLogger(__name__)


def _templates(request: Request):
    tpl = getattr(getattr(request.app, "state", None), "templates", None)
    if tpl:
        return tpl
    raise RuntimeError("Templates not configured")


def _login_page(request: Request, error: str | None = None, status_code: int = 200, username: str = ""):
    return _templates(request).TemplateResponse(
        request,
        "login.html",
        {"error": error, "username": username},
        status_code=status_code,
    )


@router.get("/login", response_class=HTMLResponse)
def login_form(request: Request, ctx: SessionContext = Depends(session_context)):
    if ctx.is_authenticated:
        return RedirectResponse("/dashboard", status_code=302)
    return _login_page(request)


@router.post("/login")
def do_login(
    request: Request,
    username: str = Form(""),
    password: str = Form(""),
    ctx: SessionContext = Depends(session_context),
    settings: Settings = Depends(request_settings),
):
    if verify_login(username, password, settings):
        login_session(ctx, username)
        logger.info("User %s signed in", username)
        return RedirectResponse("/dashboard", status_code=302)
    logger.warning("Failed sign-in attempt for %r", username)
    return _login_page(request, error="Invalid credentials", status_code=401, username=username)


@router.post("/logout")
def logout(ctx: SessionContext = Depends(session_context)):
    if ctx.is_authenticated:
        logger.info("User %s signed out", ctx.username)
    logout_session(ctx)
    return RedirectResponse("/login", status_code=302)
