"""
Request Logging Middleware for FastAPI.

Logs every request with its method, path, status code and duration, adds an
``X-Process-Time`` header, and warns about slow requests.
"""

import time
from typing import Callable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
from starlette.types import ASGIApp

from taskboard.core.logging_config import get_logger

logger = get_logger(__name__)

SLOW_REQUEST_THRESHOLD_MS = 1000.0


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for logging API requests."""

    def __init__(self, app: ASGIApp, slow_request_threshold_ms: float = SLOW_REQUEST_THRESHOLD_MS) -> None:
        super().__init__(app)
        self.slow_request_threshold_ms = slow_request_threshold_ms

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """
        Process the request and log its outcome.

        Args:
            request: The incoming HTTP request
            call_next: The next middleware/handler

        Returns:
            The HTTP response
        """
        start_time = time.perf_counter()
        method = request.method
        path = request.url.path

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                f"API request failed: {method} {path}",
                exc_info=True,
                extra={"method": method, "path": path, "duration_ms": duration_ms, "error": str(e)},
            )
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.info(f"{method} {path} -> {response.status_code} ({duration_ms:.2f}ms)")
        response.headers["X-Process-Time"] = f"{duration_ms:.2f}"

        if duration_ms > self.slow_request_threshold_ms:
            logger.warning(
                f"Slow API request: {method} {path} took {duration_ms:.2f}ms",
                extra={
                    "method": method,
                    "path": path,
                    "duration_ms": duration_ms,
                    "status_code": response.status_code,
                },
            )

        return response
