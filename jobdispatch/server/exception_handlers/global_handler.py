"""
Catch-all handler for exceptions no route or domain handler dealt with.

Clients get a bare 500 with a short ``error_id``; the same id is written to
the server log (with the traceback) and to Logfire, so a support request can
be matched to the failure.
"""

import uuid

from fastapi import Request
from fastapi.responses import JSONResponse

from jobdispatch.core.logging_config import get_logger
from jobdispatch.core.monitoring import log_error

logger = get_logger(__name__)


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    error_id = uuid.uuid4().hex[:12]
    error_type = type(exc).__name__
    route = f"{request.method} {request.url.path}"

    logger.error(
        f"Unhandled exception [{error_id}] in {route}: {error_type}: {exc}",
        exc_info=exc,
        extra={
            "error_id": error_id,
            "error_type": error_type,
            "query_params": dict(request.query_params),
            "client": request.client.host if request.client else "unknown",
        },
    )
    log_error(error_type, str(exc), {"error_id": error_id, "path": request.url.path})

    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error", "error_id": error_id, "error_type": error_type},
    )
