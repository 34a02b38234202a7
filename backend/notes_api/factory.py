"""
Notes API - FastAPI Application Factory
=======================================

What:  Builds the bare FastAPI instance: middleware, exception handlers and
       lifespan. Feature routers are NOT mounted here; the Application
       wrapper mounts them once the global prefix is known.
Who:   application.create_application(); tests that need an HTTP app.

Lifecycle:
    Startup:
    1. Log startup banner
    Shutdown:
    1. Dispose database engine (close all pooled connections)
    2. Log shutdown complete

Logging is configured by setup_logging() before the bootstrap runs, so the
lifespan does not touch it.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from notes_api import __version__
from notes_api.config import Settings
from notes_api.database import dispose_engine
from notes_api.exceptions import (
    DatabaseError,
    NotesApiError,
    NotFoundError,
    ValidationError,
)
from notes_api.middleware.logging import RequestLoggingMiddleware
from notes_api.middleware.request_id import RequestIDMiddleware, request_id_var
from notes_api.modules import DOCS_OWNER, HealthModule

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure process-wide logging.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s

    uvicorn is started with log_config=None, so its own loggers propagate
    to the root handler installed here.
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party loggers that are noisy at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    logger.info("Notes API %s starting up...", __version__)

    yield

    logger.info("Notes API shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map application exceptions to JSON error responses.

    Handler table:
        ValidationError  → 400 Bad Request
        NotFoundError    → 404 Not Found
        DatabaseError    → 500 Internal Server Error (generic message)
        NotesApiError    → 500 Internal Server Error
        Exception        → 500 Internal Server Error (stack trace logged)

    Responses never include stack traces, SQL or file paths.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        """Client sent input that breaks a business rule."""
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": exc.message,
                "details": exc.context,
                "request_id": rid,
            },
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        rid = request_id_var.get("")
        return JSONResponse(
            status_code=404,
            content={
                "error": "not_found",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        """Generic message to the client, details to the server log."""
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": "An internal error occurred. Please try again later.",
                "request_id": rid,
            },
        )

    @app.exception_handler(NotesApiError)
    async def handle_app_error(request: Request, exc: NotesApiError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred. Please try again or contact support.",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_http_app(settings: Settings) -> FastAPI:
    """
    Create the FastAPI instance shared by all feature modules.

    FastAPI's built-in /docs, /redoc and /openapi.json are disabled: the
    API documentation is generated and published by the bootstrap
    procedure instead (see docs.py).
    """
    app = FastAPI(
        title="Notes API",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )

    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "X-Total-Count"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(
        RequestLoggingMiddleware,
        quiet_owners=(HealthModule.name, DOCS_OWNER),
    )
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    return app
