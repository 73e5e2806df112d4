"""SQLAlchemy models for the dummies feature."""

from __future__ import annotations

from sqlalchemy import Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from dashboard_service.core.database import Base, TimestampMixin, UUIDPKMixin


class Dummy(Base, UUIDPKMixin, TimestampMixin):
    """Sample resource exercising every list feature.

    Both text columns are filterable and searchable; ``description`` is
    nullable so orderings have NULLs to place.
    """

    __tablename__ = "dummies"
    # Backs the default listing order (created_at desc, id asc)
    __table_args__ = (Index("ix_dummies_created_at_id", "created_at", "id"),)

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text(), nullable=True)

    def __repr__(self) -> str:
        return f"Dummy(id={self.id!s}, name={self.name!r})"
