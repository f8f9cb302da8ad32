"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures exception handlers and lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from psycopg_pool import ConnectionPool

from src.adapters.repository.json_file import JsonFileAccountStore
from src.adapters.repository.postgres import PostgresAccountStore, run_migrations
from src.adapters.smtp.console import ConsoleVerificationNotifier
from src.adapters.smtp.sender import SmtpVerificationNotifier
from src.api.v1 import router as v1_router
from src.config.settings import Settings, get_settings
from src.domain.exceptions import InfrastructureError
from src.domain.ports import VerificationNotifier

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "v1",
        "description": "Account API v1 - Register, verify email and log in",
    },
]


def build_notifier(settings: Settings) -> VerificationNotifier:
    """Select the verification notifier named by settings."""
    if settings.notifier == "smtp":
        return SmtpVerificationNotifier(
            host=settings.smtp_host,
            port=settings.smtp_port,
            username=settings.smtp_user,
            password=settings.smtp_password,
            sender=settings.smtp_from,
            public_base_url=settings.public_base_url,
            timeout=settings.smtp_timeout_seconds,
        )
    return ConsoleVerificationNotifier(public_base_url=settings.public_base_url)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Opens the configured account store (pool + migrations for Postgres)
    - Builds the verification notifier
    - Closes the connection pool on shutdown
    """
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    logger.info("Starting application...")
    pool: ConnectionPool | None = None

    if settings.store_backend == "postgres":
        logger.info("Connecting to database...")
        pool = ConnectionPool(
            conninfo=settings.database_url,
            min_size=settings.pool_min_size,
            max_size=settings.pool_max_size,
        )
        logger.info("Running database migrations...")
        run_migrations(pool)
        app.state.store = PostgresAccountStore(pool)
    else:
        logger.info(f"Using account file: {settings.accounts_file}")
        app.state.store = JsonFileAccountStore(settings.accounts_file)

    app.state.notifier = build_notifier(settings)

    logger.info("Application startup complete")

    yield

    # Shutdown
    logger.info("Shutting down application...")
    if pool is not None:
        pool.close()
        logger.info("Database connection pool closed")


app = FastAPI(
    title="account-lifecycle",
    description="Account API - Registration with single-use email verification tokens and login",
    version="0.1.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

# Include v1 API routes
app.include_router(v1_router, prefix="/v1")


@app.exception_handler(InfrastructureError)
async def infrastructure_error_handler(request: Request, exc: InfrastructureError) -> JSONResponse:
    """Log infrastructure faults in full and answer with a generic 500."""
    logger.error(f"Infrastructure failure on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


@app.get("/health")
async def health_check(request: Request) -> dict[str, str]:
    """
    Health check endpoint with store validation.

    Returns 200 OK if application and store are healthy.
    """
    await run_in_threadpool(request.app.state.store.ping)
    return {"status": "healthy"}


def run() -> None:
    """Serve the application with uvicorn using host and port from settings."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port)
