"""
Request timing middleware.

Every request is timed and reported through ``log_api_request``. The elapsed
time in milliseconds is returned to clients in ``X-Process-Time``, and slow
requests (photo uploads, large report queries) get a warning in the server log.
"""

import time
from typing import Callable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
from starlette.types import ASGIApp

from jobdispatch.core.logging_config import get_logger
from jobdispatch.core.monitoring import log_api_request

logger = get_logger(__name__)

SLOW_REQUEST_THRESHOLD_MS = 1000


class LogfireMiddleware(BaseHTTPMiddleware):
    """Times requests and reports them to Logfire."""

    def __init__(self, app: ASGIApp, slow_request_threshold_ms: float = SLOW_REQUEST_THRESHOLD_MS) -> None:
        super().__init__(app)
        self.slow_request_threshold_ms = slow_request_threshold_ms

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        method = request.method
        path = request.url.path
        started = time.perf_counter()
        # Stays 500 when the handler raises
        status_code = 500

        try:
            response = await call_next(request)
            status_code = response.status_code
        except Exception as e:
            logger.error(f"API request failed: {method} {path}: {e}", exc_info=True)
            raise
        finally:
            duration_ms = (time.perf_counter() - started) * 1000
            log_api_request(method=method, path=path, status_code=status_code, duration_ms=duration_ms)

        response.headers["X-Process-Time"] = f"{duration_ms:.2f}"
        if duration_ms > self.slow_request_threshold_ms:
            logger.warning(
                f"Slow API request: {method} {path} took {duration_ms:.2f}ms",
                extra={"method": method, "path": path, "status_code": status_code, "duration_ms": duration_ms},
            )
        return response
