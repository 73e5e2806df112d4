"""Pagination dependencies for FastAPI routes.

    @router.get("/dummies")
    async def list_dummies(settings: PaginationSettingsDep):
        ...
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from dashboard_service.core.settings import PaginationSettings, get_pagination_settings


def get_pagination_config() -> PaginationSettings:
    """Return pagination limits and timeout from settings."""
    return get_pagination_settings()


PaginationSettingsDep = Annotated[PaginationSettings, Depends(get_pagination_config)]
