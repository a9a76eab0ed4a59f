"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures logging, the credential store, and lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from psycopg_pool import ConnectionPool

from simple_auth.adapters.repository import (
    InMemoryCredentialStore,
    PostgresCredentialStore,
    create_pool,
    run_migrations,
)
from simple_auth.api.dependencies import get_pool
from simple_auth.api.v1 import router as v1_router
from simple_auth.config.settings import get_settings

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "v1",
        "description": "Registration API v1 - Create username/password credentials",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Configures logging at the configured level
    - Creates database connection pool and runs migrations (postgres backend)
    - Closes connection pool on shutdown
    """
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    logger.info("Starting application...")

    pool = None
    if settings.store_backend == "memory":
        logger.warning("Using in-memory credential store; records are not durable")
        app.state.store = InMemoryCredentialStore()
    else:
        logger.info(
            "Connecting to database %s:%s/%s...",
            settings.db_host,
            settings.db_port,
            settings.db_name,
        )
        pool = create_pool(settings)

        logger.info("Running database migrations...")
        try:
            run_migrations(pool)
        except Exception:
            pool.close()
            logger.error("Startup aborted; database connection pool closed")
            raise

        app.state.store = PostgresCredentialStore(pool)

    # Store pool in app state for dependency injection
    app.state.pool = pool

    logger.info("Application startup complete")

    yield

    # Shutdown
    logger.info("Shutting down application...")
    if pool is not None:
        pool.close()
        logger.info("Database connection pool closed")


app = FastAPI(
    title="simple-auth",
    description="Registration API - username/password credentials with bcrypt hashing",
    version="0.1.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

# Include v1 API routes
app.include_router(v1_router, prefix="/v1")


@app.get("/health")
def health_check(pool: ConnectionPool | None = Depends(get_pool)) -> dict[str, str]:
    """
    Health check endpoint with database validation.

    Returns 200 OK if application and database are healthy.
    Raises exception if database connection fails.
    """
    if pool is not None:
        with pool.connection() as conn:
            conn.execute("SELECT 1")

    return {"status": "healthy"}
