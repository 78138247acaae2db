"""
ContactBook Backend — FastAPI Application Factory (Composition Root)
======================================================================

What:  Creates and wires the FastAPI application.
Why:   One place constructs the engine, repository, service and routers and
       connects them; no module holds a live app, engine or service instance.
How:   create_app(settings) returns a configured FastAPI instance.
Who:   uvicorn (`uvicorn app.main:create_app --factory`), the `contactbook`
       console script, and the test fixtures.

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
    │  ┌──────────────────────┐ ┌───────────────────────┐ │
    │  │ /contact[/{id}] CRUD │ │ GET / , GET /health   │ │
    │  └──────────────────────┘ └───────────────────────┘ │
    │           │                         │               │
    │   ContactService ──▶ ContactRepository ──▶ engine   │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ ValidationError→400 │ DatabaseError→500      │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, create missing tables (if enabled)
    Shutdown: dispose the engine (close all pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from app import __version__
from app.config import Settings, settings as default_settings
from app.database import create_engine, create_session_factory, dispose_engine, init_schema
from app.exceptions import ContactBookError, DatabaseError, ValidationError
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware, request_id_var
from app.repositories.contact_repository import ContactRepository
from app.routes.contacts import create_contacts_router
from app.routes.health import create_health_router
from app.services.contact_service import ContactService

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(settings: Settings) -> None:
    """
    Configure logging for the entire application.

    When:    Called once during app startup (before any other initialization).
    Format:  %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),  # Docker captures stdout
        ],
        force=True,  # Override any existing logging config
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    if settings.log_level != "DEBUG":
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _request_id(request: Request) -> str:
    # request.state shares the ASGI scope, so it is readable from any layer
    return getattr(request.state, "request_id", "") or request_id_var.get("")


def _error_body(
    request: Request, error: str, message: str, details: Optional[dict] = None
) -> dict:
    body = {"error": error, "message": message, "request_id": _request_id(request)}
    if details:
        body["details"] = details
    return body


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        ValidationError         → 400 Bad Request
        DatabaseError           → 500 Internal Server Error (generic message)
        ContactBookError (base) → 500 Internal Server Error
        Exception (fallback)    → 500 Internal Server Error

    Each handler produces the one and only response for the request.
    Security: Store error details are logged server-side, never returned.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", _request_id(request), exc.message)
        return JSONResponse(
            status_code=400,
            content=_error_body(request, "validation_error", exc.message, exc.context),
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error(
            "[%s] Database error: %s | Context: %s",
            _request_id(request), exc.message, exc.context,
        )
        return JSONResponse(
            status_code=500,
            content=_error_body(
                request, "server_error", "An internal error occurred. Please try again later."
            ),
        )

    @app.exception_handler(ContactBookError)
    async def handle_app_error(request: Request, exc: ContactBookError):
        logger.error(
            "[%s] Application error: %s | Context: %s",
            _request_id(request), exc.message, exc.context,
        )
        return JSONResponse(
            status_code=500,
            content=_error_body(request, "server_error", exc.message),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all: stack trace goes to the log, a request ID goes to the client."""
        rid = _request_id(request)
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content=_error_body(
                request, "internal_server_error",
                "An unexpected error occurred. Please try again or contact support.",
            ),
            headers={REQUEST_ID_HEADER: rid} if rid else None,
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and wire the FastAPI application.

    Construction order:
        engine → session factory → ContactRepository → ContactService → routers

    The engine, repository and service are also exposed on app.state for
    the lifespan handler and for tests.
    """
    settings = settings or default_settings

    engine = create_engine(settings)
    repository = ContactRepository(create_session_factory(engine))
    contact_service = ContactService(repository)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        # ── Startup ───────────────────────────────────────────────────────
        setup_logging(settings)
        logger.info("ContactBook Backend %s starting up...", __version__)

        if settings.db_auto_create_schema:
            await init_schema(engine)

        logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

        yield  # Application runs here

        # ── Shutdown ──────────────────────────────────────────────────────
        logger.info("ContactBook Backend shutting down...")
        await dispose_engine(engine)
        logger.info("Shutdown complete.")

    app = FastAPI(
        title="ContactBook API",
        description="Minimal CRUD API for schemaless contact documents.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.contact_repository = repository
    app.state.contact_service = contact_service

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → GZip → CORS → route
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(create_health_router(repository))
    app.include_router(create_contacts_router(contact_service))

    return app


def run() -> None:
    """Console entry point: serve create_app() with uvicorn."""
    import uvicorn

    uvicorn.run(
        "app.main:create_app",
        factory=True,
        host=default_settings.backend_host,
        port=default_settings.backend_port,
        log_level=default_settings.log_level.lower(),
    )
