"""
Greeter Backend - FastAPI Application Factory
===============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   server.py (python -m app), or uvicorn directly:
       uvicorn app.main:create_app --factory
When:  Once at server startup; the returned app handles all subsequent requests.

Application Architecture:
    ┌─────────────────────────────────────────────┐
    │                 FastAPI App                 │
    │                                             │
    │  Middleware Chain:                          │
    │  ┌──────────────┐ ┌──────────────────────┐  │
    │  │   Req ID     │→│  Logging             │  │
    │  └──────────────┘ └──────────────────────┘  │
    │                                             │
    │  Routes:                                    │
    │  ┌──────────────┐ ┌──────────────────────┐  │
    │  │ GET /hello   │ │ GET /goodbye         │  │
    │  └──────────────┘ └──────────────────────┘  │
    │                                             │
    │  Exception Handlers:                        │
    │  ┌───────────────────────────────────────┐  │
    │  │ GreeterError→500 │ Exception→500      │  │
    │  └───────────────────────────────────────┘  │
    └─────────────────────────────────────────────┘

The interactive docs (/docs, /redoc, /openapi.json) are disabled: the two
greeting routes are the entire public surface.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app import __version__
from app.config import Settings, get_settings
from app.exceptions import GreeterError
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware, request_id_var
from app.routes import greetings

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    What:    Root logger to stdout with a single consistent format.
    When:    Called by server.py before binding, and again from the lifespan
             when the app is started directly by uvicorn. Safe to repeat.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # RequestLoggingMiddleware already writes one line per request
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Log startup and shutdown.

    No resources are acquired here: the handlers share no state, and the
    listening socket belongs to the server process.
    """
    settings: Settings = app.state.settings
    setup_logging(settings.log_level)

    logger.info("Greeter %s starting up...", __version__)
    logger.info("Serving GET /hello and GET /goodbye at %s", settings.base_url)

    yield

    logger.info("Greeter shutting down...")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def current_request_id(request: Request) -> str:
    """
    The request ID for an error response.

    The fallback handler runs outside RequestIDMiddleware, after its
    ContextVar has been reset, so request.state (shared through the ASGI
    scope) is checked first.
    """
    return getattr(request.state, "request_id", "") or request_id_var.get("")


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        GreeterError (base)     → 500 Internal Server Error
        Exception (fallback)    → 500 Internal Server Error

    404 and 405 are left to the framework. Handlers never expose stack traces
    or context in the response body; details are logged server-side.
    """

    @app.exception_handler(GreeterError)
    async def handle_greeter_error(request: Request, exc: GreeterError):
        rid = current_request_id(request)
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": "An internal error occurred. Please try again later.",
                "request_id": rid,
            },
            headers={REQUEST_ID_HEADER: rid} if rid else None,
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all: generic 500, full stack trace in the server log only."""
        rid = current_request_id(request)
        logger.error(
            "[%s] Unexpected error: %s",
            rid,
            str(exc),
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred.",
                "request_id": rid,
            },
            headers={REQUEST_ID_HEADER: rid} if rid else None,
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Explicit settings (tests, command-line overrides). Defaults
                  to the process-wide settings from the environment.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Greeter",
        description="Says hello and goodbye over HTTP.",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        # Exact path match: "/hello/" is a 404, not a redirect to "/hello"
        redirect_slashes=False,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added = first to execute: RequestID → Logging → route
    if settings.access_log:
        app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(greetings.build_router())

    return app
