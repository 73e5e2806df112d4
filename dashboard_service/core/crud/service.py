"""Generic create/read/update/delete service.

Owns the transaction for single-record writes and turns repository errors
into HTTP-facing exceptions.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from dashboard_service.core.database.exceptions import ConflictError, NotFoundError
from dashboard_service.core.exceptions import ConflictException, NotFoundException
from dashboard_service.core.services.base import BaseService

if TYPE_CHECKING:
    from pydantic import BaseModel
    from sqlalchemy.ext.asyncio import AsyncSession

    from dashboard_service.core.database.repository import BaseRepository


class CrudService[ModelT](BaseService):
    """CRUD operations for one mapped model on a request-scoped session.

    Example:
        service = CrudService(session, BaseRepository(Dummy), resource_name="dummies")
        dummy = await service.create(DummyCreate(name="alpha"))
    """

    def __init__(
        self,
        session: AsyncSession,
        repository: BaseRepository[ModelT],
        *,
        resource_name: str | None = None,
    ) -> None:
        super().__init__()
        self._session = session
        self._repository = repository
        self.resource_name = resource_name or repository.model.__name__

    async def create(self, payload: BaseModel) -> ModelT:
        """Insert a record built from ``payload`` and commit.

        Raises:
            ConflictException: If the row violates a constraint.
        """
        instance = self._repository.model(**payload.model_dump(exclude_none=True))
        try:
            created = await self._repository.create(self._session, instance)
        except ConflictError as exc:
            raise self._conflict(exc) from exc
        await self._session.commit()

        self.logger.info(
            "Record created",
            extra={"resource": self.resource_name, "id": str(getattr(created, "id", None))},
        )
        return created

    async def get(self, record_id: Any) -> ModelT:
        """Fetch one record.

        Raises:
            NotFoundException: If no record has this id.
        """
        try:
            return await self._repository.get_or_raise(self._session, record_id)
        except NotFoundError as exc:
            raise NotFoundException(
                detail=f"{self.resource_name} with id={record_id} does not exist",
                extra={"resource": self.resource_name, "id": str(record_id)},
            ) from exc

    async def update(self, record_id: Any, payload: BaseModel) -> ModelT:
        """Apply the fields set in ``payload`` and commit."""
        instance = await self.get(record_id)
        values = payload.model_dump(exclude_unset=True)
        try:
            updated = await self._repository.update(self._session, instance, values)
        except ConflictError as exc:
            raise self._conflict(exc) from exc
        await self._session.commit()

        self.logger.info(
            "Record updated",
            extra={"resource": self.resource_name, "id": str(record_id), "fields": sorted(values)},
        )
        return updated

    async def delete(self, record_id: Any) -> None:
        """Delete one record and commit."""
        instance = await self.get(record_id)
        await self._repository.delete(self._session, instance)
        await self._session.commit()

    def _conflict(self, exc: ConflictError) -> ConflictException:
        return ConflictException(
            detail=f"{self.resource_name} conflicts with existing data",
            extra={"resource": self.resource_name, "reason": exc.reason},
        )


__all__ = ["CrudService"]
