# File: backend/app/main.py
# Version: v0.4.0
"""
FastAPI app entry.

- `create_app()` builds the app around an explicit session factory (tests
  pass their own; the default comes from SETTINGS.DB_URL) and stores it on
  `app.state`, where `backend.app.db.session.get_db` picks it up.
- Keeps all route assembly in backend/app/api/v1/api.py.
- Mounts /api/* via `api_router`; /reports/* and /query at root via `public_router`.
- Renders store errors as `{"error": ...}` bodies.
- Optional SQLite auto-heal is guarded by SCHEMA_AUTOHEAL.
"""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session, sessionmaker

from backend.app.api.v1.api import api_router, public_router
from backend.app.core.config import Settings, settings as default_settings
from backend.app.core.errors import ReporterError
from backend.app.db.maintenance import ensure_schema_sqlite
from backend.app.db.session import build_engine, build_session_factory

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str) -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)


def create_app(
    settings: Optional[Settings] = None,
    session_factory: Optional[sessionmaker[Session]] = None,
) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.LOG_LEVEL)

    if session_factory is None:
        session_factory = build_session_factory(build_engine(settings.DB_URL))

    app = FastAPI(
        title=f"{settings.APP_NAME} API",
        version=settings.APP_VERSION,
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
        docs_url=f"{settings.API_PREFIX}/docs",
    )
    app.state.settings = settings
    app.state.session_factory = session_factory

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Origin", "Content-Length", "Content-Type", "ACCESS_TOKEN"],
        max_age=settings.CORS_MAX_AGE,
    )

    @app.exception_handler(ReporterError)
    async def _reporter_error(request: Request, exc: ReporterError) -> JSONResponse:
        return JSONResponse({"error": exc.message}, status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.info("rejected %s %s: %d validation error(s)", request.method, request.url.path, len(exc.errors()))
        return JSONResponse(
            {"error": "invalid request body", "details": jsonable_encoder(exc.errors())},
            status_code=400,
        )

    @app.get("/healthz")
    def healthz():
        return {"status": "ok"}

    # APIs under /api
    app.include_router(api_router, prefix=settings.API_PREFIX)

    # Reports and GraphQL at root
    app.include_router(public_router)

    @app.on_event("startup")
    def _startup_autoheal() -> None:
        # Only try auto-heal if explicitly enabled AND using SQLite
        if not settings.SCHEMA_AUTOHEAL:
            return
        engine = session_factory.kw["bind"]
        actions = ensure_schema_sqlite(engine)
        if actions:
            logger.info("[schema-autoheal] %s", ", ".join(actions))

    return app


app = create_app()
