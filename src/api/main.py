"""
FastAPI application factory.

create_app() assembles the account API: v1 routes, the health probe and
a lifespan that owns the PostgreSQL pool. The module-level ``app`` is
what uvicorn serves (``uvicorn src.api.main:app``).
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import run_migrations
from src.api.v1 import router as v1_router
from src.config.logging import configure_logging
from src.config.settings import Settings, get_settings

logger = logging.getLogger(__name__)

API_VERSION = "0.1.0"

tags_metadata = [
    {
        "name": "v1",
        "description": "Accounts v1 - Registration, login and the authenticated profile",
    },
]


def open_pool(settings: Settings) -> ConnectionPool:
    """Open the connection pool and bring the schema up to date."""
    logger.info(
        "Opening database pool (min=%d, max=%d)",
        settings.pool_min_size,
        settings.pool_max_size,
    )
    pool = ConnectionPool(
        conninfo=settings.database_url,
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
    )
    run_migrations(pool)
    return pool


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup and shutdown hooks.

    Startup configures logging, warns about an unset signing secret and
    stores the pool on app.state for get_pool(). Shutdown closes the pool.
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    if settings.uses_default_jwt_secret:
        logger.warning("JWT_SECRET is not set; tokens are signed with the development default")

    app.state.pool = open_pool(settings)
    logger.info("Accounts API ready")

    try:
        yield
    finally:
        app.state.pool.close()
        logger.info("Database pool closed")


async def health_check(request: Request) -> dict[str, str]:
    """
    Liveness probe that also round-trips to the database.

    A failing connection propagates and surfaces as a 500.
    """
    with request.app.state.pool.connection() as conn:
        conn.execute("SELECT 1")
    return {"status": "healthy"}


def create_app() -> FastAPI:
    """Build the application with its routes and lifespan."""
    application = FastAPI(
        title="accounts",
        description=(
            "Account Registration and Authentication API - "
            "Validated sign-up, login and bearer tokens"
        ),
        version=API_VERSION,
        openapi_tags=tags_metadata,
        lifespan=lifespan,
    )
    application.include_router(v1_router, prefix="/v1")
    application.add_api_route("/health", health_check, methods=["GET"], tags=["health"])
    return application


app = create_app()
