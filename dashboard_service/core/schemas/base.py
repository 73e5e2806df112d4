"""Base schema classes for API payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class CustomBase(BaseModel):
    """Base model with common configuration for all schemas.

    Example:
        class DummyResponse(CustomBase):
            id: UUID
            name: str
            created_at: datetime
    """

    model_config = ConfigDict(
        # Allow creation from ORM models (SQLAlchemy)
        from_attributes=True,
        validate_assignment=True,
        use_enum_values=True,
        populate_by_name=True,
        # Silently drop unexpected data
        extra="ignore",
        str_strip_whitespace=True,
    )


__all__ = ["CustomBase"]
