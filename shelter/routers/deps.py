"""Dependencies shared by the routers."""
from __future__ import annotations

from fastapi import Request

from shelter.core.config import Settings, get_settings


def request_settings(request: Request) -> Settings:
    """Settings the app was built with; falls back to the environment."""
    settings = getattr(request.app.state, "settings", None)
    return settings if isinstance(settings, Settings) else get_settings()
