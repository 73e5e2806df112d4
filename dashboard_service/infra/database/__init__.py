"""Database infrastructure package.

Async SQLAlchemy engine, session factory and lifecycle helpers.

Example:
    from dashboard_service.infra.database import get_async_session

    async with get_async_session() as session:
        result = await session.execute(...)
"""

from .alembic import AlembicCommandConfig, AlembicCommands, get_alembic_commands
from .session import (
    AsyncSessionLocal,
    close_database,
    configure_sqlite_engine,
    create_all,
    engine,
    get_async_session,
    init_database,
)

__all__ = [
    "AlembicCommandConfig",
    "AlembicCommands",
    "AsyncSessionLocal",
    "close_database",
    "configure_sqlite_engine",
    "create_all",
    "engine",
    "get_alembic_commands",
    "get_async_session",
    "init_database",
]
