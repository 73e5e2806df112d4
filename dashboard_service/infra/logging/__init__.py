"""Logging infrastructure.

Basic usage:
    import logging

    from dashboard_service.infra.logging import get_lazy_logger, set_log_context

    logger = logging.getLogger(__name__)

    set_log_context(request_id="abc-123")
    logger.info("Listing dummies")  # record includes request_id

    lazy_logger = get_lazy_logger(__name__)
    lazy_logger.debug(lambda: f"Plan: {describe(plan)}")  # built only if DEBUG
"""

from dashboard_service.infra.logging.config import configure_logging, setup_logging, shutdown
from dashboard_service.infra.logging.context import (
    ContextInjectingFilter,
    clear_log_context,
    get_log_context,
    remove_from_log_context,
    set_log_context,
)
from dashboard_service.infra.logging.formatters import JSONFormatter
from dashboard_service.infra.logging.lazy import (
    LazyLoggerAdapter,
    LazyString,
    get_lazy_logger,
    lazy,
)

__all__ = [
    "ContextInjectingFilter",
    "JSONFormatter",
    "LazyLoggerAdapter",
    "LazyString",
    "clear_log_context",
    "configure_logging",
    "get_lazy_logger",
    "get_log_context",
    "lazy",
    "remove_from_log_context",
    "set_log_context",
    "setup_logging",
    "shutdown",
]
