"""
Notes API — FastAPI Application Factory
========================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn notes_api.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────────┐ ┌─────────────────┐               │
    │  │  Request ID  │→│  Logging        │               │
    │  └──────────────┘ └─────────────────┘               │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────┐ ┌──────────────┐ ┌─────────────┐  │
    │  │ GET /notes   │ │ POST /notes  │ │ GET /health │  │
    │  └──────────────┘ └──────────────┘ └─────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation→400 │ Auth→401 │ 405 │ Query→500  │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging → configuration check → Supabase client
    Shutdown: drop the client handle
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from notes_api import __version__
from notes_api.config import settings
from notes_api.database import close_client, init_client
from notes_api.exceptions import (
    NotesApiError,
    MissingAuthError,
    UnauthorizedError,
    MethodNotAllowedError,
    ValidationError,
    QueryError,
    InternalServerError,
)
from notes_api.middleware.request_id import RequestIDMiddleware, request_id_var
from notes_api.middleware.logging import RequestLoggingMiddleware
from notes_api.routes import health, notes

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s, to stdout.
    Called once during app startup, before any other initialization.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # supabase-py logs every HTTP exchange through httpx
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("hpack").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: configure logging, check configuration, build the Supabase client.
    Shutdown: drop the client handle.

    Missing configuration is logged, not fatal: /health keeps answering and
    reports the service as degraded.
    """
    setup_logging()
    logger.info("Notes API %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))

    try:
        init_client()
    except Exception as e:
        logger.error("Failed to initialize Supabase client: %s", str(e))

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    logger.info("Notes API shutting down...")
    close_client()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def error_response(status_code: int, message: str, headers=None) -> JSONResponse:
    """The single error body shape: {"error": message}. No CORS header."""
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        ValidationError          → 400
        MissingAuthError         → 401
        UnauthorizedError        → 401
        MethodNotAllowedError    → 405 (also Starlette's own 405)
        QueryError               → 500 (generic message, context logged)
        InternalServerError      → 500
        NotesApiError (base)     → exc.status_code
        Exception (fallback)     → 500 "Internal server error"

    Exception handlers never put `context`, store errors or stack traces in
    the response body.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s | Context: %s", rid, exc.message, exc.context)
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(MissingAuthError)
    async def handle_missing_auth(request: Request, exc: MissingAuthError):
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(UnauthorizedError)
    async def handle_unauthorized(request: Request, exc: UnauthorizedError):
        rid = request_id_var.get("")
        logger.info("[%s] Rejected token: %s", rid, exc.context)
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(MethodNotAllowedError)
    async def handle_method_not_allowed(request: Request, exc: MethodNotAllowedError):
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(QueryError)
    async def handle_query_error(request: Request, exc: QueryError):
        rid = request_id_var.get("")
        logger.error("[%s] Query error: %s | Context: %s", rid, exc.message, exc.context)
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(InternalServerError)
    async def handle_internal_error(request: Request, exc: InternalServerError):
        rid = request_id_var.get("")
        logger.error("[%s] Internal error | Context: %s", rid, exc.context)
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(NotesApiError)
    async def handle_notes_api_error(request: Request, exc: NotesApiError):
        rid = request_id_var.get("")
        logger.error("[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context)
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        """Router-level errors: unmatched path (404), unsupported verb (405)."""
        if exc.status_code == 405:
            return error_response(405, MethodNotAllowedError(request.method).message, headers=exc.headers)
        if exc.status_code == 404:
            return error_response(404, "Not found")
        return error_response(exc.status_code, str(exc.detail), headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Request validation failed: %s", rid, exc.errors())
        return error_response(400, "Invalid request")

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all for errors raised outside RequestLoggingMiddleware."""
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return error_response(500, InternalServerError().message)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="Notes API",
        description=(
            "Authenticated list and create endpoints for a user's notes, "
            "backed by Supabase Auth and the Supabase notes table."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Middleware executes in reverse order of addition:
    # RequestID → Logging → routes
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(notes.router)
    app.include_router(health.router)

    return app


app = create_app()
