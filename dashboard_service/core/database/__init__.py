"""Core database package: declarative base, mixins, repository and list storage.

Base Classes and Mixins:
    - Base: Declarative base with constraint naming and auto table naming
    - IntegerPKMixin, UUIDPKMixin: Primary key strategies
    - TimestampMixin: created_at, updated_at tracking

Repository:
    - BaseRepository[T]: Generic CRUD with explicit session passing

Listing:
    - SQLAlchemyStorage[T]: Snapshot delegate for PaginatedQueryExecutor

Example:
    from dashboard_service.core.database import Base, TimestampMixin, UUIDPKMixin

    class Dummy(Base, UUIDPKMixin, TimestampMixin):
        __tablename__ = "dummies"
        name: Mapped[str] = mapped_column(String(255))
"""

from .base import NAMING_CONVENTION, Base, IntegerPKMixin, TimestampMixin, UUIDPKMixin
from .exceptions import ConflictError, NotFoundError, RepositoryError
from .pagination import SQLAlchemyReader, SQLAlchemyStorage, escape_like
from .repository import BaseRepository

__all__ = [
    "NAMING_CONVENTION",
    "Base",
    "BaseRepository",
    "ConflictError",
    "IntegerPKMixin",
    "NotFoundError",
    "RepositoryError",
    "SQLAlchemyReader",
    "SQLAlchemyStorage",
    "TimestampMixin",
    "UUIDPKMixin",
    "escape_like",
]
