# perks_api/main.py
from __future__ import annotations

import time
from contextlib import asynccontextmanager

import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator
from sentry_sdk.integrations.asyncio import AsyncioIntegration
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration

from perks_api import __version__
from perks_api.core.config import settings
from perks_api.core.exceptions import BaseAPIException, ErrorKind, error_response
from perks_api.core.logging import configure_structlog, get_structlog_logger
from perks_api.db.session import create_database_engine, dispose_engine
from perks_api.middleware.logging import LoggingMiddleware
from perks_api.middleware.request_id import RequestIdMiddleware
from perks_api.routes import health, perks
from perks_api.schemas.perk import format_validation_errors


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    logger.info("application.starting", environment=settings.environment)

    if settings.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            environment=settings.environment,
            integrations=[
                AsyncioIntegration(),
                FastApiIntegration(),
                StarletteIntegration(),
            ],
            traces_sample_rate=1.0 if settings.is_development else 0.1,
            send_default_pii=False,
        )
        logger.info("sentry.initialized")

    create_database_engine()

    logger.info("application.started")
    yield

    logger.info("application.shutting_down")
    await dispose_engine()
    logger.info("database.connection_closed")


# Configure logging before creating app
configure_structlog()
logger = get_structlog_logger(__name__)

app = FastAPI(
    title="Perks API",
    version=__version__,
    description="CRUD resource API for merchant perks",
    docs_url="/docs" if settings.is_development else None,
    redoc_url="/redoc" if settings.is_development else None,
    openapi_url="/openapi.json" if settings.is_development else None,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.origins(),
    allow_credentials=True,
    allow_methods=settings.methods(),
    allow_headers=settings.headers(),
    expose_headers=["X-Request-ID", "X-Response-Time"],
)
# Added last so it runs first and the logging middleware sees the id
app.add_middleware(LoggingMiddleware)
app.add_middleware(RequestIdMiddleware)


def unclassified_response(request: Request, exc: Exception):
    error_id = f"err_{int(time.time())}_{hash(str(exc)) % 10000:04d}"

    logger.error(
        "unhandled.exception",
        error_id=error_id,
        error_type=type(exc).__name__,
        error=str(exc),
        path=request.url.path,
        method=request.method,
        exc_info=exc,
    )

    message = "Internal server error"
    if settings.is_development:
        message = f"Internal server error: {exc}"

    return error_response(
        ErrorKind.UNCLASSIFIED,
        message,
        headers={"X-Error-ID": error_id},
    )


@app.exception_handler(BaseAPIException)
async def api_exception_handler(request: Request, exc: BaseAPIException):
    """Map handled error kinds to their status and message."""
    if exc.kind is ErrorKind.UNCLASSIFIED:
        return unclassified_response(request, exc)

    logger.warning(
        "api.exception",
        status_code=exc.status_code,
        code=exc.code,
        message=exc.message,
        details=exc.details,
        path=request.url.path,
        method=request.method,
    )
    return error_response(exc.kind, exc.message)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report framework-level request validation failures as HTTP 400."""
    message = format_validation_errors(exc.errors())

    logger.warning(
        "validation.error",
        path=request.url.path,
        method=request.method,
        message=message,
    )
    return error_response(ErrorKind.VALIDATION, message)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    return unclassified_response(request, exc)


app.include_router(health.router, prefix=settings.api_prefix)
app.include_router(perks.router, prefix=settings.api_prefix)

if not settings.is_testing:
    Instrumentator().instrument(app).expose(app, endpoint="/metrics", include_in_schema=False)


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Perks API",
        "version": app.version,
        "environment": settings.environment,
        "docs": "/docs" if settings.is_development else None,
        "health": "/health/live",
    }


logger.info("application.configured", environment=settings.environment)
