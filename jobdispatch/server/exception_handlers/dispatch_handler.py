"""
Handler for domain errors raised by services.

``DispatchError`` subclasses carry their own HTTP status; this handler turns
them into ``{"detail": ..., **extra}`` JSON responses.
"""

from fastapi import Request
from fastapi.responses import JSONResponse

from jobdispatch.core.errors import DispatchError
from jobdispatch.core.logging_config import get_logger

logger = get_logger(__name__)


async def dispatch_error_handler(request: Request, exc: DispatchError) -> JSONResponse:
    logger.info(
        f"{type(exc).__name__} in {request.method} {request.url.path}: {exc.detail}",
        extra={"status_code": exc.status_code, "path": request.url.path},
    )
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code,
        content={**exc.extra, "detail": exc.detail},
        headers=headers,
    )
