"""
MarkNotes Backend — FastAPI Application Factory
===================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn marknotes.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────┐ ┌──────┐ ┌──────┐         │
    │  │  Req ID  │→│ Logging │→│ GZip │→│ CORS │         │
    │  └──────────┘ └─────────┘ └──────┘ └──────┘         │
    │                                                     │
    │  Routes:                                            │
    │  ┌────────────┐ ┌──────────────┐ ┌─────────────┐    │
    │  │ /notes     │ │ /api/notes   │ │ GET /health │    │
    │  │ (HTML)     │ │ (JSON)       │ │             │    │
    │  └────────────┘ └──────────────┘ └─────────────┘    │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ NotFound→404 │ Storage→503 │ Render→500      │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Error responses are JSON for /api and /health, and an HTML page everywhere else.

Lifecycle:
    Startup:  logging → create missing tables (AUTO_CREATE_SCHEMA) → ready
    Shutdown: dispose database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse, Response
from sqlalchemy.exc import SQLAlchemyError

from marknotes import __version__
from marknotes.config import settings
from marknotes.database import dispose_engine, init_models
from marknotes.exceptions import (
    MarkNotesError,
    NotFoundError,
    RenderError,
    StorageError,
)
from marknotes.middleware.logging import RequestLoggingMiddleware
from marknotes.middleware.request_id import RequestIDMiddleware, request_id_var
from marknotes.routes import health, notes, pages
from marknotes.templating import templates

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during app startup, before any other initialization.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party loggers are chatty at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("MARKDOWN").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: logging and schema creation. Shutdown: close pooled connections."""
    setup_logging()
    logger.info("MarkNotes %s starting up...", __version__)

    if settings.auto_create_schema:
        try:
            await init_models()
            logger.info("Database schema ready")
        except (SQLAlchemyError, OSError) as e:
            # Keep serving: /health reports the outage and requests get 503s
            logger.error("Could not create database schema: %s", str(e))

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    logger.info("MarkNotes shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def wants_json(request: Request) -> bool:
    """API and health clients get JSON errors; browsers get HTML pages."""
    path = request.url.path
    return path.startswith("/api") or path == "/health"


def current_request_id(request: Request) -> str:
    """
    Request ID for logs and error bodies.

    The catch-all handler runs outside RequestIDMiddleware, after the
    ContextVar has been reset; request.state still carries the ID there.
    """
    return getattr(request.state, "request_id", "") or request_id_var.get("")


def error_response(
    request: Request,
    status_code: int,
    error: str,
    message: str,
    heading: str,
    details: Optional[Dict[str, Any]] = None,
) -> Response:
    """Build a JSON or HTML error response carrying the request ID."""
    rid = current_request_id(request)
    if wants_json(request):
        content: Dict[str, Any] = {"error": error, "message": message, "request_id": rid}
        if details:
            content["details"] = details
        return JSONResponse(status_code=status_code, content=content)
    return templates.TemplateResponse(
        request,
        "error.html",
        {"heading": heading, "message": message, "request_id": rid},
        status_code=status_code,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and response formats.

    Handler hierarchy:
        NotFoundError     → 404 Not Found
        StorageError      → 503 Service Unavailable
        RenderError       → 500 Internal Server Error
        MarkNotesError    → 500 Internal Server Error
        Exception         → 500 Internal Server Error

    Internal details (driver errors, stack traces) are logged, never returned.
    """

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return error_response(
            request, 404, "not_found", exc.message, heading="Note not found"
        )

    @app.exception_handler(StorageError)
    async def handle_storage_error(request: Request, exc: StorageError):
        rid = request_id_var.get("")
        logger.error("[%s] Storage error: %s | Context: %s", rid, exc.message, exc.context)
        return error_response(
            request, 503, "storage_unavailable", exc.message, heading="Service unavailable"
        )

    @app.exception_handler(RenderError)
    async def handle_render_error(request: Request, exc: RenderError):
        rid = request_id_var.get("")
        logger.error("[%s] Render error: %s | Context: %s", rid, exc.message, exc.context)
        return error_response(
            request, 500, "render_error", exc.message, heading="Rendering failed"
        )

    @app.exception_handler(MarkNotesError)
    async def handle_app_error(request: Request, exc: MarkNotesError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return error_response(
            request,
            500,
            "server_error",
            "An internal error occurred. Please try again later.",
            heading="Something went wrong",
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = current_request_id(request)
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return error_response(
            request,
            500,
            "internal_server_error",
            "An unexpected error occurred. Please try again later.",
            heading="Something went wrong",
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="MarkNotes",
        description="Write notes in Markdown, list them, and read them rendered as HTML.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added = first to execute
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=False,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "X-Total-Count", "Location"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(pages.router)
    app.include_router(notes.router)
    app.include_router(health.router)

    return app


app = create_app()
