"""Repository for the dummies feature."""

from __future__ import annotations

from dashboard_service.core.database import BaseRepository
from dashboard_service.features.dummies.models import Dummy


class DummyRepository(BaseRepository[Dummy]):
    """Repository for Dummy model.

    Inherits from BaseRepository:
        - get(session, id) -> Dummy | None
        - get_or_raise(session, id) -> Dummy
        - create(session, instance) -> Dummy
        - create_many(session, instances) -> Sequence[Dummy]
        - update(session, instance, values) -> Dummy
        - delete(session, instance) -> None
    """

    def __init__(self) -> None:
        super().__init__(Dummy)


# Factory function for dependency injection
_dummy_repository: DummyRepository | None = None


def get_dummy_repository() -> DummyRepository:
    """Get the shared DummyRepository instance."""
    global _dummy_repository
    if _dummy_repository is None:
        _dummy_repository = DummyRepository()
    return _dummy_repository


__all__ = ["DummyRepository", "get_dummy_repository"]
