"""
Happy Thoughts API - FastAPI Application Factory
==================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (uvicorn happy_thoughts.main:app) or the
       `happy-thoughts` console script.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌──────────┐ ┌───────┐ ┌──────────┐  │
    │  │  Req ID  │→│ Logging  │→│ GZip  │→│  CORS    │  │
    │  └──────────┘ └──────────┘ └───────┘ └──────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  /  /users  /sessions  /secrets  /thoughts  /health │
    │                                                     │
    │  Exception Handlers (all render the envelope):      │
    │  Validation→400 │ Auth→401 │ Owner→403 │ 404 │ 409  │
    │  Database / unexpected→500                          │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Create missing tables (DB_CREATE_TABLES)
    3. Reseed thoughts (RESET_DB)

    Shutdown:
    1. Dispose database engine (close all connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, List, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from happy_thoughts import __version__
from happy_thoughts.config import settings
from happy_thoughts.database import async_session_factory, create_tables, dispose_engine
from happy_thoughts.exceptions import (
    ConflictError,
    DatabaseError,
    HappyThoughtsError,
    ValidationError,
)
from happy_thoughts.middleware.logging import RequestLoggingMiddleware
from happy_thoughts.middleware.request_id import RequestIDMiddleware, request_id_var
from happy_thoughts.routes import health, root, thoughts, users
from happy_thoughts.services.seed import reset_thoughts

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during startup, before any other initialization.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("Happy Thoughts API starting up...")

    if settings.db_create_tables:
        await create_tables()

    if settings.reset_db:
        async with async_session_factory() as session:
            count = await reset_thoughts(session)
            await session.commit()
        logger.info("RESET_DB set: reseeded %d thoughts", count)

    logger.info("Server ready at http://%s:%d", settings.host, settings.port)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Happy Thoughts API shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def error_envelope(status_code: int, message: str, response: Any = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "response": response, "message": message},
    )


def _field_errors(exc: RequestValidationError) -> List[Dict[str, str]]:
    details = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ())]
        if error.get("type") == "json_invalid":
            # loc is ("body", <character offset>)
            field = "body"
        else:
            # Drop the "body"/"path"/"query" prefix
            field = ".".join(loc[1:]) if len(loc) > 1 else ".".join(loc)
        details.append({"field": field, "message": error.get("msg", "Invalid value")})
    return details


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to HTTP status codes and the response envelope.

    Handler hierarchy:
        RequestValidationError  → 400 with per-field details
        ValidationError         → 400 with the offending field
        ConflictError           → 409 with the duplicated fields
        DatabaseError           → 500 with a generic message
        HappyThoughtsError      → its own status_code (401, 403, 404)
        HTTPException           → its status code (unknown route, wrong method)
        Exception (fallback)    → 500
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        details = _field_errors(exc)
        summary = "; ".join(f"{d['field']}: {d['message']}" for d in details)
        logger.warning("[%s] Request validation failed: %s", request_id_var.get(""), summary)
        return error_envelope(400, f"Validation failed: {summary}", details)

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return error_envelope(400, exc.message, exc.context or None)

    @app.exception_handler(ConflictError)
    async def handle_conflict(request: Request, exc: ConflictError):
        logger.warning("[%s] Conflict: %s", request_id_var.get(""), exc.message)
        return error_envelope(409, exc.message, exc.context or None)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error(
            "[%s] Database error: %s | Context: %s",
            request_id_var.get(""), exc.message, exc.context,
        )
        return error_envelope(500, exc.message)

    @app.exception_handler(HappyThoughtsError)
    async def handle_app_error(request: Request, exc: HappyThoughtsError):
        return error_envelope(exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        message: Optional[str] = exc.detail if isinstance(exc.detail, str) else None
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "response": None, "message": message or "Request failed"},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            request_id_var.get(""),
            str(exc),
            exc_info=True,
        )
        return error_envelope(500, "An unexpected error occurred. Please try again later.")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    app = FastAPI(
        title="Happy Thoughts API",
        description="Post, like and browse short happy thoughts.",
        version=__version__,
        lifespan=lifespan,
    )

    # Middleware executes in reverse order of addition:
    # RequestID → Logging → GZip → CORS → route
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

    register_exception_handlers(app)

    app.include_router(root.router)
    app.include_router(users.router)
    app.include_router(thoughts.router)
    app.include_router(health.router)

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app on HOST:PORT."""
    uvicorn.run("happy_thoughts.main:app", host=settings.host, port=settings.port)
