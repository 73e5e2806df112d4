"""Core service base classes."""

from dashboard_service.core.services.base import BaseService

__all__ = ["BaseService"]
