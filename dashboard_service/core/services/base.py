"""Base service class for business logic."""

from __future__ import annotations

import logging

from dashboard_service.infra.logging import get_lazy_logger


class BaseService:
    """Base class for all service classes.

    Loggers:
        - self.logger: Standard logger for INFO/WARNING/ERROR (always evaluated)
        - self._lazy: Lazy logger for DEBUG (zero overhead when DEBUG disabled)

    Example:
        class DummyService(BaseService):
            async def rename(self, dummy: Dummy, name: str) -> Dummy:
                self.logger.info("Renaming dummy", extra={"dummy_id": str(dummy.id)})
                self._lazy.debug(lambda: f"rename: {dummy.name!r} -> {name!r}")
                ...
    """

    def __init__(self) -> None:
        class_name = self.__class__.__name__
        self.logger = logging.getLogger(class_name)
        self._lazy = get_lazy_logger(class_name)
