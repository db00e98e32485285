"""
FastAPI application factory.

``create_app()`` assembles the application with CORS, error handlers,
routers, static file mounts, and the health endpoint. The module-level
``app`` instance allows ``uvicorn src.api.app:app --reload``.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from src.api.middleware.error_handler import register_error_handlers
from src.api.routes import history, upload
from src.core.config import Settings, check_required_settings, get_settings
from src.core.exceptions import VoiceScribeError
from src.core.models import HealthResponse, HelloResponse
from src.services.storage.database import close_db, get_engine, init_db
from src.services.storage.files import URL_PREFIX, ContentStore
from src.services.transcription import create_stt
from src.services.transcription.base import BaseSTT

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application startup and shutdown lifecycle.

    Startup: refuse to run without required settings, create tables, and
    build the STT provider unless one was injected.
    Shutdown: close the provider's HTTP client, then dispose the DB engine.
    """
    settings: Settings = app.state.settings
    check_required_settings(settings)

    await init_db(get_engine(settings.database_url))
    app.state.content_store.ensure_dir()
    if app.state.stt is None:
        app.state.stt = create_stt(
            "deepgram",
            api_key=settings.deepgram_api_key,
            model=settings.deepgram_model,
            smart_format=settings.deepgram_smart_format,
            base_url=settings.deepgram_base_url,
            timeout=settings.deepgram_timeout,
        )
    logger.info("VoiceScribe ready, content directory %s", app.state.content_store.root)
    yield
    await app.state.stt.aclose()
    await close_db()


def _mount_frontend(app: FastAPI, dist_dir: Path) -> None:
    """Serve a built single-page frontend with fallback to ``index.html``."""
    index = dist_dir / "index.html"
    root = dist_dir.resolve()

    @app.get("/{full_path:path}", include_in_schema=False)
    async def frontend(full_path: str):
        if full_path == "api" or full_path.startswith("api/"):
            raise VoiceScribeError(detail="Not found", code="NOT_FOUND", status_code=404)
        candidate = (root / full_path).resolve()
        if full_path and candidate.is_relative_to(root) and candidate.is_file():
            return FileResponse(candidate)
        if not index.is_file():
            raise VoiceScribeError(detail="Frontend not built", code="NOT_FOUND", status_code=404)
        return FileResponse(index)


def create_app(settings: Settings | None = None, stt: BaseSTT | None = None) -> FastAPI:
    """Build and return a fully configured FastAPI application.

    Args:
        settings: Configuration override; defaults to ``get_settings()``.
        stt: Pre-built STT provider (tests inject a mock). When omitted the
            Deepgram client is created during startup.

    Returns:
        FastAPI: The configured application, ready for ``uvicorn``.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="VoiceScribe",
        description="Record or upload audio, transcribe it with Deepgram, "
        "and keep a history of the results.",
        version="0.1.0",
        lifespan=lifespan,
    )

    # -- Application context --
    app.state.settings = settings
    app.state.content_store = ContentStore(settings.uploads_dir)
    app.state.stt = stt

    # -- CORS --
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -- Error handlers --
    register_error_handlers(app)

    # -- Health check (root-level, not under /api) --
    @app.get("/health", response_model=HealthResponse, tags=["system"])
    async def health() -> HealthResponse:
        return HealthResponse(timestamp=datetime.now(UTC))

    @app.get("/api/hello", response_model=HelloResponse, tags=["system"])
    async def hello() -> HelloResponse:
        return HelloResponse()

    # -- REST routes --
    app.include_router(upload.router, prefix="/api")
    app.include_router(history.router, prefix="/api")

    # -- Stored audio --
    app.mount(
        f"/{URL_PREFIX}",
        StaticFiles(directory=app.state.content_store.root, check_dir=False),
        name=URL_PREFIX,
    )

    # -- Frontend bundle (SPA fallback), registered last --
    if settings.frontend_dist_dir:
        dist_dir = Path(settings.frontend_dist_dir)
        if dist_dir.is_dir():
            _mount_frontend(app, dist_dir)
        else:
            logger.warning("Frontend directory %s not found; not serving it", dist_dir)

    return app


app = create_app()
