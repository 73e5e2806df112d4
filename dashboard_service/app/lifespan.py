"""Application lifespan management.

Startup Order:
1. Logging
2. Database (configured server, or local SQLite tables)

Shutdown Order: Reverse of startup.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
import logging
from typing import TYPE_CHECKING

from dashboard_service.core.settings import (
    get_app_settings,
    get_db_settings,
    get_logging_settings,
    get_pagination_settings,
)
from dashboard_service.infra.logging.config import setup_logging
from dashboard_service.infra.logging.config import shutdown as shutdown_logging

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import FastAPI

logger = logging.getLogger(__name__)


async def _startup_core() -> None:
    """Configure logging and announce the service."""
    app = get_app_settings()
    setup_logging(log_settings=get_logging_settings(), force=True)

    pagination = get_pagination_settings()
    logger.info(
        "Application starting",
        extra={
            "service": app.service_name,
            "environment": app.environment,
            "default_limit": pagination.default_limit,
            "max_limit": pagination.max_limit,
        },
    )


async def _startup_database() -> None:
    """Check the database, or create tables on the local SQLite fallback."""
    from dashboard_service.infra.database.session import create_all, init_database

    db = get_db_settings()

    if not db.is_configured:
        await create_all()
        logger.info("Using local SQLite database", extra={"url": db.fallback_url})
        return

    try:
        await init_database()
    except ConnectionError as e:
        if db.startup_require_db:
            logger.exception(
                "Database required but unavailable, failing startup",
                extra={"error": str(e), "startup_require_db": True},
            )
            raise
        logger.warning(
            "Database unavailable, continuing in degraded mode",
            extra={"error": str(e), "startup_require_db": False},
        )


async def _shutdown_database() -> None:
    """Dispose the engine and its pool."""
    from dashboard_service.infra.database.session import close_database

    await close_database()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifecycle.

    Args:
        app: FastAPI application instance.

    Yields:
        None during application runtime.
    """
    _ = app

    await _startup_core()
    await _startup_database()
    logger.info("Application startup complete")

    try:
        yield
    finally:
        logger.info("Application shutting down")
        await _shutdown_database()
        shutdown_logging()
