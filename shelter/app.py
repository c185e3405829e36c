import logging
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from shelter.core.config import Settings, get_settings
from shelter.core.errors import AuthenticationRequired, StorageUnavailable
from shelter.domain import ADOPTERS, PETS
from shelter.routers import auth as auth_router
from shelter.routers import dashboard as dashboard_router
from shelter.routers import records as records_router
from shelter.services.session_service import configure_sessions

BASE = Path(__file__).resolve().parent
WEB = BASE.parent / "web"
TEMPLATES = BASE.parent / "templates"

logger = logging.getLogger(__name__)


def _configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


async def _login_redirect(request: Request, exc: AuthenticationRequired):
    return RedirectResponse(exc.login_path, status_code=302)


async def _storage_fault(request: Request, exc: StorageUnavailable):
    # fatal to this request only; the process keeps serving
    logger.error("Storage fault on %s %s: %s", request.method, request.url.path, exc.message, exc_info=exc)
    return PlainTextResponse("Storage unavailable", status_code=500)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Factory compatible with uvicorn/gunicorn (``--factory``)."""
    settings = settings or get_settings()
    _configure_logging(settings)

    app = FastAPI(title="Shelter Admin")
    configure_sessions(app, settings)
    app.add_exception_handler(AuthenticationRequired, _login_redirect)
    app.add_exception_handler(StorageUnavailable, _storage_fault)

    app.mount("/static", StaticFiles(directory=WEB), name="static")
    app.state.templates = Jinja2Templates(directory=str(TEMPLATES))
    app.state.settings = settings

    @app.get("/health")
    def health():
        return PlainTextResponse("OK")

    @app.get("/")
    def root():
        return RedirectResponse("/login", status_code=302)

    app.include_router(auth_router.router)
    app.include_router(dashboard_router.router)
    app.include_router(records_router.build_router(PETS))
    app.include_router(records_router.build_router(ADOPTERS))

    backend = "sql" if settings.database_url else str(settings.data_dir)
    logger.info("Shelter admin ready (env=%s, storage=%s)", settings.app_env, backend)
    return app


app = create_app()
