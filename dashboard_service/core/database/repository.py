"""Minimal generic repository for SQLAlchemy models.

Basic CRUD with an explicit session argument. Listing goes through
``PaginatedQueryExecutor`` with ``SQLAlchemyStorage``; anything else can
use the session directly.

Example:
    from dashboard_service.core.database import BaseRepository
    from dashboard_service.features.dummies.models import Dummy

    class DummyRepository(BaseRepository[Dummy]):
        async def find_by_name(self, session: AsyncSession, name: str) -> Dummy | None:
            result = await session.execute(select(Dummy).where(Dummy.name == name))
            return result.scalar_one_or_none()

    repo = DummyRepository(Dummy)
    dummy = await repo.get_or_raise(session, dummy_id)
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy.exc import IntegrityError

from dashboard_service.core.database.exceptions import ConflictError, NotFoundError
from dashboard_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


class BaseRepository[T]:
    """Minimal generic repository for CRUD operations.

    Provides:
        - get(session, id) -> T | None
        - get_or_raise(session, id) -> T (raises NotFoundError)
        - create(session, instance) -> T (raises ConflictError)
        - create_many(session, instances) -> Sequence[T]
        - update(session, instance, values) -> T (raises ConflictError)
        - delete(session, instance) -> None

    The caller owns the transaction; methods only flush.
    """

    __slots__ = ("model", "_logger", "_lazy")

    def __init__(self, model: type[T]) -> None:
        self.model = model
        self._logger = logging.getLogger(f"repository.{model.__name__}")
        self._lazy = get_lazy_logger(f"repository.{model.__name__}")

    async def get(self, session: AsyncSession, id: Any) -> T | None:  # noqa: A002
        """Get entity by primary key, or None."""
        instance = await session.get(self.model, id)
        self._lazy.debug(
            lambda: f"db.get: {self.model.__name__}({id}) -> {'found' if instance else 'not found'}"
        )
        return instance

    async def get_or_raise(self, session: AsyncSession, id: Any) -> T:  # noqa: A002
        """Get entity by primary key.

        Raises:
            NotFoundError: If no row has this key.
        """
        instance = await self.get(session, id)
        if instance is None:
            self._logger.info(
                "Entity not found",
                extra={"entity": self.model.__name__, "id": str(id), "operation": "db.get_or_raise"},
            )
            raise NotFoundError(self.model.__name__, {"id": id})
        return instance

    async def create(self, session: AsyncSession, instance: T) -> T:
        """Persist a new entity and refresh generated columns.

        Raises:
            ConflictError: If a constraint rejects the row.
        """
        session.add(instance)
        await self._flush(session, "db.create")
        await session.refresh(instance)

        entity_id = getattr(instance, "id", None)
        self._lazy.debug(lambda: f"db.create: {self.model.__name__}(id={entity_id})")
        return instance

    async def create_many(self, session: AsyncSession, instances: Iterable[T]) -> Sequence[T]:
        """Persist several entities in one flush."""
        instances_list = list(instances)
        session.add_all(instances_list)
        await self._flush(session, "db.create_many")
        for instance in instances_list:
            await session.refresh(instance)

        self._lazy.debug(lambda: f"db.create_many: {self.model.__name__} -> {len(instances_list)} created")
        return instances_list

    async def update(self, session: AsyncSession, instance: T, values: Mapping[str, Any]) -> T:
        """Apply ``values`` to ``instance`` and flush.

        Raises:
            ConflictError: If a constraint rejects the new values.
        """
        for key, value in values.items():
            setattr(instance, key, value)
        await self._flush(session, "db.update")
        await session.refresh(instance)

        self._lazy.debug(lambda: f"db.update: {self.model.__name__} fields={sorted(values)}")
        return instance

    async def delete(self, session: AsyncSession, instance: T) -> None:
        """Delete an entity."""
        entity_id = getattr(instance, "id", None)
        await session.delete(instance)
        await session.flush()

        self._logger.info(
            "Entity deleted",
            extra={"entity": self.model.__name__, "id": str(entity_id), "operation": "db.delete"},
        )

    async def _flush(self, session: AsyncSession, operation: str) -> None:
        try:
            await session.flush()
        except IntegrityError as exc:
            await session.rollback()
            self._logger.warning(
                "Constraint violation",
                extra={"entity": self.model.__name__, "operation": operation, "error": str(exc.orig)},
            )
            raise ConflictError(self.model.__name__, str(exc.orig)) from exc
