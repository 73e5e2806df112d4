"""CLI helpers: the async command bridge and status output."""

from dashboard_service.cli.utils.async_runner import coro
from dashboard_service.cli.utils.formatters import (
    error,
    header,
    info,
    success,
    warning,
)

__all__ = [
    "coro",
    "error",
    "header",
    "info",
    "success",
    "warning",
]
