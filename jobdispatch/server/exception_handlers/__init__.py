"""
Exception handlers for the JobDispatch server.

This package contains custom exception handlers for different error types
and a setup function to register them with the FastAPI application.
"""

from fastapi import FastAPI

from jobdispatch.core.errors import DispatchError
from jobdispatch.core.logging_config import get_logger

from .dispatch_handler import dispatch_error_handler
from .global_handler import global_exception_handler

logger = get_logger(__name__)


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI application.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(DispatchError, dispatch_error_handler)
    app.add_exception_handler(Exception, global_exception_handler)
    logger.debug("Exception handlers registered successfully")


__all__ = ["dispatch_error_handler", "global_exception_handler", "setup_exception_handlers"]
