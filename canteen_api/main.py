"""
Canteen API — FastAPI Application Factory
==========================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app(settings) returns a configured FastAPI
       instance whose connection handle (engine + session factory) lives on
       `app.state`.
Who:   uvicorn imports `canteen_api.main:app`; tests call create_app() with
       their own Settings.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌──────────┐ ┌──────┐ ┌──────┐        │
    │  │ Req ID   │→│ Logging  │→│ GZip │→│ CORS │        │
    │  └──────────┘ └──────────┘ └──────┘ └──────┘        │
    │                                                     │
    │  Routes:                                            │
    │  ┌────────────┐ ┌────────────┐ ┌──────────────┐     │
    │  │ /canteens  │ │ /menus     │ │ GET /health  │     │
    │  └────────────┘ └────────────┘ └──────────────┘     │
    │                                                     │
    │  Exception Handlers (all answer with the envelope): │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation→400 │ NotFound→404 │ Database→500 │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging, configuration check, optional create_all
    Shutdown: dispose the engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from canteen_api import __version__
from canteen_api.config import Settings, get_settings
from canteen_api.database import (
    create_engine,
    create_session_factory,
    dispose_engine,
    init_db,
)
from canteen_api.exceptions import (
    INTERNAL_ERROR_MESSAGE,
    CanteenAPIError,
    DatabaseError,
    NotFoundError,
)
from canteen_api.middleware.logging import RequestLoggingMiddleware
from canteen_api.middleware.request_id import RequestIDMiddleware, request_id_var
from canteen_api.routes import canteens, health, menus
from canteen_api.schemas.common import ValidationErrorResponse, error_response

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(settings: Settings) -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during startup, before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),  # Docker captures stdout
        ],
        force=True,
    )

    # Third-party loggers are chatty at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup sequence:
        1. Setup logging
        2. Validate configuration (logged, not fatal, so /health still answers)
        3. Create tables when AUTO_CREATE_TABLES is on

    Shutdown sequence:
        1. Dispose the engine (close all pooled connections)
    """
    settings: Settings = app.state.settings

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(settings)
    logger.info("=" * 60)
    logger.info("Canteen API %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))
        logger.error("Fix the configuration and restart the server.")

    if settings.auto_create_tables:
        await init_db(app.state.engine)

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Canteen API shutting down...")
    await dispose_engine(app.state.engine)
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to envelope responses.

    Handler hierarchy:
        RequestValidationError  → 400 (schema / path constraint failures)
        StarletteHTTPException  → its own status (unknown path, wrong method)
        NotFoundError           → 404
        DatabaseError           → 500, generic message, kind logged
        CanteenAPIError (base)  → 500
        Exception (fallback)    → 500

    Unexpected errors inside a request are answered by RequestIDMiddleware so
    the response keeps its X-Request-ID; the fallback here only sees errors
    raised outside it.

    Responses NEVER carry stack traces, SQL or error kinds; those are logged.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        errors = [
            {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
            for err in exc.errors()
        ]
        logger.warning("[%s] Request validation failed: %s", rid, errors)
        body = ValidationErrorResponse(
            status=False,
            status_code=400,
            message="Invalid request",
            errors=errors,
        )
        return JSONResponse(
            status_code=400,
            content=jsonable_encoder(body.model_dump(by_alias=True, exclude_unset=True)),
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        response = error_response(exc.status_code, str(exc.detail))
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return error_response(404, exc.message)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = request_id_var.get("")
        logger.error(
            "[%s] Database error (%s): %s | Context: %s",
            rid,
            exc.kind.value,
            exc.message,
            exc.context,
        )
        return error_response(500, INTERNAL_ERROR_MESSAGE)

    @app.exception_handler(CanteenAPIError)
    async def handle_app_error(request: Request, exc: CanteenAPIError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error("Unexpected error outside the request scope: %s", str(exc), exc_info=True)
        return error_response(500, INTERNAL_ERROR_MESSAGE)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Explicit configuration. Defaults to `get_settings()`.

    The engine is created here rather than in the lifespan so that the
    connection handle exists even when the ASGI server skips lifespan events
    (httpx's ASGITransport does). Creating an engine does not connect.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Canteen API",
        description="CRUD backend for canteens and their menus.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Connection Handle ─────────────────────────────────────────────────
    app.state.settings = settings
    app.state.engine = create_engine(settings)
    app.state.session_factory = create_session_factory(app.state.engine)

    # ── Register Middleware ───────────────────────────────────────────────
    # Executes in REVERSE order of addition: RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(canteens.router)
    app.include_router(menus.router)
    app.include_router(health.router)

    return app


# uvicorn expects `canteen_api.main:app` to be importable
app = create_app()
