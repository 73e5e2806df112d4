"""Middleware configuration for FastAPI application.

Execution order (outermost first):

1. RequestIDMiddleware - assigns ``request_id`` and puts it in the log context
2. RequestLoggingMiddleware - one access log record per request
3. CORSMiddleware - when origins are configured or in debug mode

Middleware is applied in REVERSE order (last added = first to execute),
so ``configure_middleware`` adds them innermost first.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi.middleware.cors import CORSMiddleware

from dashboard_service.app.middleware.base import HeaderContextMiddleware
from dashboard_service.app.middleware.constants import EXEMPT_PATHS
from dashboard_service.app.middleware.request_id import RequestIDMiddleware
from dashboard_service.app.middleware.request_logging import RequestLoggingMiddleware

if TYPE_CHECKING:
    from fastapi import FastAPI

    from dashboard_service.core.settings import AppSettings, LoggingSettings

logger = logging.getLogger(__name__)


def configure_middleware(app: FastAPI, app_settings: AppSettings, log_settings: LoggingSettings) -> None:
    """Configure all middleware for the FastAPI application.

    Environment Variables:
        APP_DEBUG: Enables permissive CORS when no origins are configured
        APP_CORS_ORIGINS: Allowed origins (JSON array)
        LOG_INCLUDE_REQUEST_ID: Enable request id propagation (default: true)
        LOG_LOG_REQUESTS: Enable access logging (default: true)
    """
    if app_settings.cors_origins or app_settings.debug:
        cors_origins = app_settings.cors_origins or ["*"]
        app.add_middleware(
            CORSMiddleware,
            allow_origins=cors_origins,
            allow_credentials=app_settings.cors_allow_credentials,
            allow_methods=app_settings.cors_allow_methods,
            allow_headers=app_settings.cors_allow_headers,
            max_age=app_settings.cors_max_age,
        )
        logger.info("CORSMiddleware enabled", extra={"origins": cors_origins})

    if log_settings.log_requests:
        exempt_paths = [f"{app_settings.api_prefix}/health", *EXEMPT_PATHS]
        app.add_middleware(RequestLoggingMiddleware, exempt_paths=exempt_paths)
        logger.debug("RequestLoggingMiddleware enabled")

    if log_settings.include_request_id:
        app.add_middleware(RequestIDMiddleware)
        logger.debug("RequestIDMiddleware enabled")


__all__ = [
    "HeaderContextMiddleware",
    "RequestIDMiddleware",
    "RequestLoggingMiddleware",
    "configure_middleware",
]
