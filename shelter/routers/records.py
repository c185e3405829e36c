"""
List/create/show/delete routes for one record kind.

``build_router(PETS)`` and ``build_router(ADOPTERS)`` produce the /pets and
/adopters routers; every route sits behind the session gate.
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse

from shelter.core.config import Settings
from shelter.domain import RecordKind, extract_fields, missing_required
from shelter.repositories import RecordStore, get_store
from shelter.routers.deps import request_settings
from shelter.services.session_service import require_user

logger = logging.getLogger(__name__)


def _templates(request: Request):
    tpl = getattr(getattr(request.app, "state", None), "templates", None)
    if tpl:
        return tpl
    raise RuntimeError("Templates not configured")


def build_router(kind: RecordKind) -> APIRouter:
    router = APIRouter(prefix=f"/{kind.name}", tags=[kind.name], dependencies=[Depends(require_user)])
    title = kind.singular.capitalize()

    def store(settings: Settings = Depends(request_settings)) -> RecordStore:
        return get_store(kind.name, settings)

    def render_list(request: Request, records: list, *, error: str | None = None, status_code: int = 200):
        return _templates(request).TemplateResponse(
            request,
            "records_list.html",
            {"kind": kind, "records": records, "error": error},
            status_code=status_code,
        )

    def render_form(request: Request, values: dict, *, error: str | None = None, status_code: int = 200):
        return _templates(request).TemplateResponse(
            request,
            "record_form.html",
            {"kind": kind, "values": values, "error": error},
            status_code=status_code,
        )

    @router.get("", response_class=HTMLResponse)
    def list_records(request: Request, records: RecordStore = Depends(store)):
        return render_list(request, records.list())

    @router.get("/new", response_class=HTMLResponse)
    def new_record(request: Request):
        return render_form(request, {})

    async def create_record(request: Request, records: RecordStore = Depends(store)):
        form = await request.form()
        fields = extract_fields(kind, form)
        missing = missing_required(kind, fields)
        if missing:
            logger.info("Rejected %s without %s", kind.singular, ", ".join(missing))
            return render_form(request, fields, error=kind.required_message, status_code=400)
        record = records.add(fields)
        logger.info("Created %s %s", kind.singular, record["id"])
        return RedirectResponse(f"/{kind.name}", status_code=302)

    router.add_api_route("/new", create_record, methods=["POST"])
    router.add_api_route("", create_record, methods=["POST"])

    @router.get("/{record_id}", response_class=HTMLResponse)
    def show_record(request: Request, record_id: str, records: RecordStore = Depends(store)):
        record = records.get_by_id(record_id)
        if record is None:
            return render_list(request, records.list(), error=f"{title} not found.", status_code=404)
        return _templates(request).TemplateResponse(
            request,
            "record_detail.html",
            {"kind": kind, "record": record},
        )

    @router.delete("/{record_id}")
    def delete_record(record_id: str, records: RecordStore = Depends(store)):
        if not records.delete_by_id(record_id):
            return JSONResponse({"success": False, "message": f"{title} not found"}, status_code=404)
        return JSONResponse({"success": True, "message": f"{title} deleted successfully"})

    return router
