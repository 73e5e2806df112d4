"""Database session management for the async SQLAlchemy engine."""

from __future__ import annotations

from contextlib import asynccontextmanager
import logging
import time
from typing import TYPE_CHECKING, Any

from opentelemetry import trace
from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.ext.asyncio import async_sessionmaker as _async_sessionmaker
from sqlalchemy.ext.asyncio import create_async_engine as _create_async_engine

from dashboard_service.core.settings import get_app_settings, get_db_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from sqlalchemy.ext.asyncio import AsyncEngine

logger = logging.getLogger(__name__)


def _unicode_lower(value: Any) -> Any:
    return value.lower() if isinstance(value, str) else value


def configure_sqlite_engine(target: AsyncEngine) -> AsyncEngine:
    """Make SQLite transactions span reads and fold case beyond ASCII.

    The sqlite3 driver only issues ``BEGIN`` ahead of writes, so two
    SELECTs in one session would otherwise read different states of the
    database. Driver-level transaction handling is switched off and
    ``BEGIN`` is emitted whenever SQLAlchemy starts a transaction.

    SQLite's built-in ``lower()`` only folds ASCII letters; it is replaced
    with Python's ``str.lower``.

    No-op for other dialects.

    Example:
        engine = configure_sqlite_engine(create_async_engine("sqlite+aiosqlite:///./dashboard.db"))
    """
    if target.dialect.name != "sqlite":
        return target

    @event.listens_for(target.sync_engine, "connect")
    def _sqlite_connect(dbapi_conn: Any, connection_record: Any) -> None:
        _ = connection_record
        dbapi_conn.isolation_level = None
        dbapi_conn.create_function("lower", 1, _unicode_lower, deterministic=True)

    @event.listens_for(target.sync_engine, "begin")
    def _sqlite_begin(conn: Any) -> None:
        conn.exec_driver_sql("BEGIN")

    return target


db_settings = get_db_settings()
app_settings = get_app_settings()

engine = configure_sqlite_engine(
    _create_async_engine(
        db_settings.get_sqlalchemy_url(),
        **{**db_settings.sqlalchemy_engine_kwargs(), "echo": db_settings.echo or app_settings.debug},
    )
)

AsyncSessionLocal = _async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


@event.listens_for(engine.sync_engine, "before_cursor_execute")
def _before_cursor_execute(
    conn: Any, cursor: Any, statement: str, parameters: Any, context: Any, executemany: Any
) -> None:
    """Record query start time before execution."""
    _ = conn, cursor, statement, parameters, executemany
    context._query_start_time = time.perf_counter()


@event.listens_for(engine.sync_engine, "after_cursor_execute")
def _after_cursor_execute(
    conn: Any, cursor: Any, statement: str, parameters: Any, context: Any, executemany: Any
) -> None:
    """Log statements slower than the configured threshold with the current trace id."""
    _ = conn, cursor, parameters, executemany
    started = getattr(context, "_query_start_time", None)
    if started is None:
        return
    duration = time.perf_counter() - started
    if duration < db_settings.slow_query_threshold:
        return

    operation = statement.strip().split(None, 1)[0].upper() if statement and statement.strip() else "UNKNOWN"
    extra: dict[str, Any] = {"operation": operation, "duration_ms": round(duration * 1000, 2)}
    span_context = trace.get_current_span().get_span_context()
    if span_context.is_valid:
        extra["trace_id"] = format(span_context.trace_id, "032x")
    logger.warning("Slow query", extra=extra)


@asynccontextmanager
async def get_async_session() -> AsyncGenerator[AsyncSession]:
    """Get async database session.

    Yields:
        Database session that is automatically closed.

    Example:
        async with get_async_session() as session:
            result = await session.execute(select(Dummy))
            dummies = result.scalars().all()
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


async def init_database() -> None:
    """Verify the database answers ``SELECT 1``.

    Raises:
        ConnectionError: If the database cannot be reached.
    """
    url = engine.url.render_as_string(hide_password=True)
    logger.info("Initializing database connection", extra={"url": url})
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(
            "Failed to connect to database",
            extra={"url": url, "error": str(e), "error_type": type(e).__name__},
        )
        raise ConnectionError(f"Database unavailable at {url}") from e
    logger.info("Database connection established successfully", extra={"url": url})


async def create_all(bind: AsyncEngine | None = None) -> None:
    """Create every table registered on ``Base.metadata`` that does not exist.

    Used for local SQLite setups and tests; deployed databases go through
    Alembic migrations.
    """
    from dashboard_service.core.database.base import Base
    import dashboard_service.features.dummies.models  # noqa: F401

    target = bind or engine
    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created", extra={"tables": sorted(Base.metadata.tables)})


async def close_database() -> None:
    """Close database connection and cleanup resources.

    This should be called during application shutdown.
    """
    logger.info("Closing database connection")

    try:
        await engine.dispose()
        logger.info("Database connection closed successfully")
    except Exception as e:
        logger.exception("Error closing database connection", extra={"error": str(e)})


# Re-export for convenience
create_async_engine = _create_async_engine
async_sessionmaker = _async_sessionmaker

__all__ = [
    "AsyncSessionLocal",
    "async_sessionmaker",
    "close_database",
    "configure_sqlite_engine",
    "create_all",
    "create_async_engine",
    "engine",
    "get_async_session",
    "init_database",
]
