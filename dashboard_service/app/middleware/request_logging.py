"""Access logging middleware.

Logs one record per HTTP request with method, path, status and duration.
Health and documentation paths are skipped.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from dashboard_service.app.middleware.constants import EXEMPT_PATHS

if TYPE_CHECKING:
    from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware:
    """Pure ASGI access logger.

    Example:
        app.add_middleware(RequestLoggingMiddleware, slow_request_threshold=2.0)
    """

    def __init__(
        self,
        app: ASGIApp,
        exempt_paths: list[str] | None = None,
        log_level: int = logging.INFO,
        slow_request_threshold: float = 1.0,
    ) -> None:
        self.app = app
        self.exempt_paths = exempt_paths if exempt_paths is not None else EXEMPT_PATHS
        self.log_level = log_level
        self.slow_request_threshold = slow_request_threshold

    def _is_exempt(self, path: str) -> bool:
        return any(path == exempt or path.startswith(f"{exempt}/") for exempt in self.exempt_paths)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or self._is_exempt(scope["path"]):
            await self.app(scope, receive, send)
            return

        start = time.perf_counter()
        status_code = 500

        async def send_with_status(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
            await send(message)

        try:
            await self.app(scope, receive, send_with_status)
        except Exception:
            logger.error(
                "Request failed",
                extra=self._log_data(scope, status_code, start),
                exc_info=True,
            )
            raise

        data = self._log_data(scope, status_code, start)
        level = self.log_level
        if data["duration_ms"] >= self.slow_request_threshold * 1000:
            level = max(level, logging.WARNING)
        logger.log(level, "HTTP Request", extra=data)

    @staticmethod
    def _log_data(scope: Scope, status_code: int, start: float) -> dict[str, Any]:
        query = scope.get("query_string", b"").decode("latin-1")
        client = scope.get("client")
        return {
            "event": "request",
            "method": scope["method"],
            "path": scope["path"],
            "query": query or None,
            "status_code": status_code,
            "duration_ms": round((time.perf_counter() - start) * 1000, 2),
            "client_ip": client[0] if client else None,
        }
