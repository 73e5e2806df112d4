"""Logging configuration setup.

Root logger configuration is applied with ``logging.config.dictConfig``.
Records go through a ``QueueHandler`` to a ``QueueListener`` thread that
owns the real console/file handlers, so request handlers never block on
log I/O. Application loggers only need ``logging.getLogger(__name__)``.
"""

from __future__ import annotations

import atexit
import logging
import logging.config
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler
from pathlib import Path
from queue import Queue
from typing import TYPE_CHECKING, Any

from .formatters import JSONFormatter

if TYPE_CHECKING:
    from dashboard_service.core.settings.logs import LoggingSettings

_log_queue: Queue[logging.LogRecord] | None = None
_listener: QueueListener | None = None
_LOGGING_INITIALIZED = False

TEXT_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
TEXT_DATEFMT = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger(__name__)


def shutdown() -> None:
    """Stop the queue listener, flushing pending records."""
    global _log_queue, _listener

    if _listener is not None:
        _listener.stop()
        _listener = None
    _log_queue = None


def setup_logging(
    log_settings: LoggingSettings | None = None,
    *,
    force: bool = False,
    **overrides: Any,
) -> None:
    """Configure logging once per process.

    Args:
        log_settings: Settings to apply; loaded via ``get_logging_settings()`` when omitted.
        force: Reconfigure even if logging was already set up.
        **overrides: Explicit ``configure_logging`` arguments taking precedence.
    """
    global _LOGGING_INITIALIZED

    if _LOGGING_INITIALIZED and not force:
        return

    if log_settings is None:
        from dashboard_service.core.settings import get_logging_settings

        log_settings = get_logging_settings()

    configure_logging(**{**log_settings.to_logging_kwargs(), **overrides})
    _LOGGING_INITIALIZED = True


def _build_formatter(json_logs: bool, service_name: str, include_function_name: bool) -> logging.Formatter:
    if json_logs:
        fmt_keys = {"level": "levelname", "logger": "name", "message": "message"}
        if include_function_name:
            fmt_keys["function"] = "funcName"
        return JSONFormatter(fmt_keys=fmt_keys, static={"service": service_name})
    fmt = TEXT_FORMAT
    if include_function_name:
        fmt = "%(asctime)s - %(levelname)s - %(name)s - %(funcName)s - %(message)s"
    return logging.Formatter(fmt=fmt, datefmt=TEXT_DATEFMT)


def configure_logging(
    log_level: str = "INFO",
    console_level: str | None = None,
    file_level: str | None = None,
    file_path: str | Path | None = None,
    json_logs: bool = True,
    console_enabled: bool = True,
    include_context: bool = True,
    capture_warnings: bool = True,
    include_function_name: bool = False,
    file_max_bytes: int = 10 * 1024 * 1024,
    file_backup_count: int = 5,
    service_name: str = "dashboard-service",
) -> None:
    """Configure the root logger.

    Args:
        log_level: Root logger level.
        console_level: Console handler level, defaults to ``log_level``.
        file_level: File handler level, defaults to ``log_level``.
        file_path: Rotating log file; ``None`` disables file logging.
        json_logs: Emit JSON Lines instead of text.
        console_enabled: Write to stderr.
        include_context: Attach ``ContextInjectingFilter`` to the root logger.
        capture_warnings: Route ``warnings`` through logging.
        include_function_name: Add the function name to each record.
        file_max_bytes: Rotation size of the log file.
        file_backup_count: Rotated files to keep.
        service_name: Static ``service`` field in JSON records.

    Example:
        configure_logging(log_level="DEBUG", json_logs=False)
    """
    global _log_queue, _listener

    shutdown()
    logging.captureWarnings(capture_warnings)

    filters: dict[str, Any] = {}
    if include_context:
        filters["context"] = {
            "()": "dashboard_service.infra.logging.context.ContextInjectingFilter",
        }

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "filters": filters,
            "root": {
                "level": log_level.upper(),
                "handlers": [],
                "filters": list(filters),
            },
        }
    )

    formatter = _build_formatter(json_logs, service_name, include_function_name)
    handlers: list[logging.Handler] = []

    if console_enabled:
        console_handler = logging.StreamHandler()
        console_handler.setLevel((console_level or log_level).upper())
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    if file_path:
        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            path,
            maxBytes=file_max_bytes,
            backupCount=file_backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel((file_level or log_level).upper())
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    if not handlers:
        return

    _log_queue = Queue()
    _listener = QueueListener(_log_queue, *handlers, respect_handler_level=True)
    _listener.start()
    atexit.register(shutdown)

    logging.getLogger().addHandler(QueueHandler(_log_queue))
    logger.debug(
        "Logging configured",
        extra={"json_logs": json_logs, "file_path": str(file_path) if file_path else None},
    )
