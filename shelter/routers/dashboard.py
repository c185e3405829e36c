from __future__ import annotations

import json

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from shelter.core.config import Settings
from shelter.domain import ADOPTERS, PETS
from shelter.repositories import get_store
from shelter.routers.deps import request_settings
from shelter.services.dashboard_service import weekly_adoptions
from shelter.services.session_service import require_user

router = APIRouter(tags=["dashboard"])


def _templates(request: Request):
    tpl = getattr(getattr(request.app, "state", None), "templates", None)
    if tpl:
        return tpl
    raise RuntimeError("Templates not configured")


@router.get("/dashboard", response_class=HTMLResponse)
def dashboard(
    request: Request,
    user: dict = Depends(require_user),
    settings: Settings = Depends(request_settings),
):
    weekly = weekly_adoptions(get_store(PETS.name, settings).list())
    adopters_total = len(get_store(ADOPTERS.name, settings).list())
    chart = json.dumps({"labels": weekly.labels, "values": weekly.counts})
    context = {
        "user": user["username"],
        "stats": {
            "totalPets": weekly.total,
            "totalAdopters": adopters_total,
            "weekTotal": sum(weekly.counts),
        },
        "weekly": list(zip(weekly.labels, weekly.counts)),
        "chart": chart,
    }
    return _templates(request).TemplateResponse(request, "dashboard.html", context)
