"""
Influencer Network Backend: FastAPI Application Factory
========================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() registers middleware, exception handlers and routers;
       uvicorn serves the module-level `app` (influencer_network.main:app).

Application Architecture:
    ┌──────────────────────────────────────────────────────────────┐
    │                        FastAPI App                           │
    │                                                              │
    │  Middleware: Rate Limit → Request ID → Access Log → GZip → CORS
    │                                                              │
    │  Routers (/api):                                             │
    │    auth  users  clients  leads  people  rate-cards           │
    │    invoices  payments  payment-terms  projects  stats        │
    │    uploads  health                                           │
    │                                                              │
    │  Exception handlers → error envelope:                        │
    │    PortalError subclasses → their status (400/401/403/404/   │
    │                             409/429/500)                     │
    │    RequestValidationError → 400   unknown route → 404        │
    │    SQLAlchemyError / anything else → 500                     │
    └──────────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging, settings validation, bootstrap admin (when configured)
    Shutdown: dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from influencer_network import __version__
from influencer_network.config import settings
from influencer_network.database import async_session_factory, dispose_engine
from influencer_network.exceptions import (
    DatabaseError,
    PortalError,
    RateLimitExceededError,
)
from influencer_network.middleware.auth import UserRateLimiter
from influencer_network.middleware.errors import current_request_id, error_response
from influencer_network.middleware.logging import RequestLoggingMiddleware
from influencer_network.middleware.rate_limit import RateLimitMiddleware
from influencer_network.middleware.request_id import RequestIDMiddleware
from influencer_network.routes import (
    auth,
    clients,
    health,
    invoices,
    leads,
    payment_terms,
    payments,
    people,
    projects,
    rate_cards,
    stats,
    uploads,
    users,
)
from influencer_network.services.auth_service import auth_service

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure the root logger once for the whole process.

    Format: 2026-10-19T10:00:00 [INFO] influencer_network.services.invoice_service: ...
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
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

async def bootstrap_admin() -> None:
    """Create the ADMIN_EMAIL account when it does not exist yet."""
    if not (settings.admin_email and settings.admin_password):
        return
    try:
        async with async_session_factory() as session:
            await auth_service.ensure_admin(
                session,
                settings.admin_email,
                settings.admin_password,
                settings.admin_first_name,
                settings.admin_last_name,
            )
            await session.commit()
    except (SQLAlchemyError, PortalError) as e:
        logger.error("Admin bootstrap failed: %s", str(e))


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("=" * 60)
    logger.info("Influencer Network API %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Keep serving so health checks and error responses still work
        logger.error("Configuration error: %s", str(e))

    await bootstrap_admin()

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("Influencer Network API shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to the error envelope.

    Server-side failures (5xx) never expose internal details; their context
    is logged with the request id instead.
    """

    @app.exception_handler(PortalError)
    async def handle_portal_error(request: Request, exc: PortalError):
        rid = current_request_id(request)
        headers = None
        details = exc.context

        if isinstance(exc, RateLimitExceededError):
            headers = {"Retry-After": str(exc.retry_after)}

        if exc.status_code >= 500:
            logger.error("[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context)
            details = None
            message = (
                "An internal error occurred. Please try again later."
                if isinstance(exc, DatabaseError)
                else exc.message
            )
        else:
            logger.warning("[%s] %s: %s", rid, type(exc).__name__, exc.message)
            message = exc.message

        return error_response(
            request,
            status_code=exc.status_code,
            error=exc.error_code,
            message=message,
            details=details,
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        errors = [
            {
                "field": ".".join(str(part) for part in error["loc"] if part != "body"),
                "message": error["msg"],
            }
            for error in exc.errors()
        ]
        logger.warning("[%s] Request validation failed: %s", current_request_id(request), errors)
        return error_response(
            request,
            status_code=400,
            error="validation_error",
            message="Invalid request data",
            details={"errors": errors},
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            message = f"Route {request.method} {request.url.path} not found"
            error = "not_found"
        else:
            message = str(exc.detail)
            error = "http_error"
        return error_response(
            request,
            status_code=exc.status_code,
            error=error,
            message=message,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(SQLAlchemyError)
    async def handle_sqlalchemy_error(request: Request, exc: SQLAlchemyError):
        logger.error("[%s] Database error: %s", current_request_id(request), str(exc), exc_info=True)
        return error_response(
            request,
            status_code=500,
            error="server_error",
            message="An internal error occurred. Please try again later.",
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error("[%s] Unexpected error: %s", current_request_id(request), str(exc), exc_info=True)
        return error_response(
            request,
            status_code=500,
            error="internal_server_error",
            message="An unexpected error occurred. Please try again or contact support.",
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """Assemble a fresh application; tests build one per test."""
    app = FastAPI(
        title="Influencer Network API",
        description=(
            "Back office for an influencer-marketing agency: clients, leads, "
            "influencers, rate cards, campaigns, invoices and payments."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Last added runs first: RateLimit → RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "X-Total-Count", "Retry-After"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(RateLimitMiddleware)

    app.state.user_rate_limiter = UserRateLimiter(
        max_requests=settings.user_rate_limit_requests,
        window_seconds=settings.user_rate_limit_window,
    )

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(clients.router)
    app.include_router(leads.router)
    app.include_router(people.router)
    app.include_router(rate_cards.router)
    app.include_router(invoices.router)
    app.include_router(payments.router)
    app.include_router(payment_terms.router)
    app.include_router(projects.router)
    app.include_router(stats.router)
    app.include_router(uploads.router)

    return app


app = create_app()
