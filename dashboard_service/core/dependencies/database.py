"""Database dependencies for FastAPI route handlers.

Two session getters exist:

1. ``get_db_session()`` (this module) - FastAPI dependency, one session
   per request, used by create/read/update/delete handlers.
2. ``get_async_session()`` (infra.database) - framework-agnostic context
   manager for CLI commands and scripts.

List endpoints do not take a request session. They receive the session
factory and open their own snapshot transaction per call through
``SQLAlchemyStorage``.

Tests swap the database by overriding ``get_session_factory``; both
dependencies follow.

Usage:
    @router.get("/dummies/{dummy_id}")
    async def get_dummy(session: DBSessionDep, dummy_id: UUID):
        ...
"""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from dashboard_service.infra.database import AsyncSessionLocal


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """FastAPI dependency returning the application session factory."""
    return AsyncSessionLocal


async def get_db_session(
    factory: Annotated[async_sessionmaker[AsyncSession], Depends(get_session_factory)],
) -> AsyncGenerator[AsyncSession]:
    """FastAPI dependency for database session.

    Yields:
        Database session that is automatically closed after request.
    """
    async with factory() as session:
        yield session


SessionFactoryDep = Annotated[async_sessionmaker[AsyncSession], Depends(get_session_factory)]
DBSessionDep = Annotated[AsyncSession, Depends(get_db_session)]
