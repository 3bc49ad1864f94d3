"""
Versioned User API: FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes app configuration, middleware registration, route mounting,
       and lifecycle management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn app.main:app).

Application Architecture:
    ┌──────────────────────────────────────────────────────┐
    │                    FastAPI App                       │
    │                                                      │
    │  Middleware: CORS → Request ID → Logging → Version   │
    │                                                      │
    │  Routes:                                             │
    │    POST /User?api-version=1   (users_v1)             │
    │    POST /User?api-version=2   (users_v2)             │
    │    GET  /swagger[/{group}/swagger.json]  (dev only)  │
    │    GET  /health                                      │
    │                                                      │
    │  Exception Handlers:                                 │
    │    NotFound→404 │ UserApiError │ other→500         │
    └──────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.httpsredirect import HTTPSRedirectMiddleware

from app import __version__
from app.config import settings
from app.exceptions import UserApiError, NotFoundError
from app.middleware.api_version import ApiVersionMiddleware
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.request_id import RequestIDMiddleware, request_id_var
from app.routes import docs, health, users_v1, users_v2
from app.versioning import VersionedRouter

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during app startup, before anything else logs.
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

    # Our access log replaces uvicorn's
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("=" * 60)
    logger.info("Versioned User API starting up (environment=%s)...", settings.environment)

    versions: VersionedRouter = app.state.api_versions
    for description in versions.describe(settings.deprecated_api_versions_list):
        logger.info(
            "API version %s mounted as group %s%s",
            description.api_version,
            description.group_name,
            " (deprecated)" if description.deprecated else "",
        )
    logger.info(
        "Default API version: %s (assumed when unspecified: %s)",
        settings.default_api_version,
        settings.assume_default_version_when_unspecified,
    )

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    if settings.is_development:
        logger.info("API docs: http://%s:%d/swagger", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and the error envelope.

    Handler hierarchy:
        NotFoundError    → 404 Not Found
        UserApiError     → its status_code (catch-all for custom)
        Exception        → 500 Internal Server Error

    Payload validation failures never reach these handlers; the user
    routes return their versioned 400 body directly. ApiVersionError is
    raised before routing and rendered by ApiVersionMiddleware.
    """

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        rid = request_id_var.get("")
        return JSONResponse(status_code=404, content=exc.to_content(rid))

    @app.exception_handler(UserApiError)
    async def handle_user_api_error(request: Request, exc: UserApiError):
        rid = request_id_var.get("")
        logger.error("[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context)
        return JSONResponse(status_code=exc.status_code, content=exc.to_content(rid))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Generic 500; the stack trace is logged server-side only."""
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

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    FastAPI's own /docs and /openapi.json are disabled: one document cannot
    describe two versions of POST /User. Per-version documents are served
    by routes.docs instead.
    """
    app = FastAPI(
        title="Versioned User API",
        description="Greets users; demonstrates query-string API versioning.",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )

    # ── API Versions ──────────────────────────────────────────────────────
    versions = VersionedRouter([users_v1.router, users_v2.router])
    app.state.api_versions = versions

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition (last added = outermost)
    app.add_middleware(ApiVersionMiddleware, versions=versions)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    if settings.https_redirect:
        app.add_middleware(HTTPSRedirectMiddleware)

    # CORS outermost: version errors answered by ApiVersionMiddleware still
    # need Access-Control-Allow-Origin to be readable by browser clients
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[
            "X-Request-ID",
            "api-supported-versions",
            "api-deprecated-versions",
        ],
    )

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    versions.include_in(app)
    app.include_router(health.router)
    if settings.is_development:
        app.include_router(docs.router)

    return app


# uvicorn expects `app.main:app` to be importable
app = create_app()
