"""
Monitoring and Tracing Configuration Module.

Optional Pydantic Logfire integration for the JobDispatch server. When
``LOGFIRE_ENABLED`` is set and a token is present, FastAPI routes and
SQLAlchemy queries are instrumented, and the helpers below emit structured
events for requests, job card status changes and unhandled errors.

Monitoring is never allowed to break a request: every helper falls back to a
debug log line when Logfire is off or its exporter fails.
"""

import logging
import os
from typing import Any, Optional

import logfire
from fastapi import FastAPI

logger = logging.getLogger(__name__)


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


LOGFIRE_ENABLED = _env_flag("LOGFIRE_ENABLED", "false")
LOGFIRE_TOKEN = os.getenv("LOGFIRE_TOKEN", "")
LOGFIRE_PROJECT_NAME = os.getenv("LOGFIRE_PROJECT_NAME", "jobdispatch")
LOGFIRE_ENVIRONMENT = os.getenv("LOGFIRE_ENVIRONMENT", "development")
LOGFIRE_SERVICE_NAME = os.getenv("LOGFIRE_SERVICE_NAME", "jobdispatch-server")
LOGFIRE_SERVICE_VERSION = os.getenv("LOGFIRE_SERVICE_VERSION", "0.0.0")

LOGFIRE_TRACE_SQLALCHEMY = _env_flag("LOGFIRE_TRACE_SQLALCHEMY", "true")
LOGFIRE_TRACE_FASTAPI = _env_flag("LOGFIRE_TRACE_FASTAPI", "true")


def _instrument(app: Optional[FastAPI]) -> None:
    if LOGFIRE_TRACE_SQLALCHEMY:
        try:
            logfire.instrument_sqlalchemy()
            logger.info("Logfire: SQLAlchemy instrumentation enabled")
        except Exception as e:
            logger.warning(f"Failed to instrument SQLAlchemy: {e}")

    if not LOGFIRE_TRACE_FASTAPI:
        return
    if app is None:
        logger.debug("No FastAPI app given, skipping route instrumentation")
        return
    try:
        logfire.instrument_fastapi(app=app)
        logger.info("Logfire: FastAPI instrumentation enabled")
    except Exception as e:
        logger.warning(f"Failed to instrument FastAPI: {e}")


def initialize_logfire(app: Optional[FastAPI] = None) -> None:
    """
    Configure Logfire and instrument the server.

    Args:
        app: Application to instrument. SQLAlchemy is instrumented either way.
    """
    if not LOGFIRE_ENABLED:
        logger.info("Logfire monitoring is disabled. Set LOGFIRE_ENABLED=true to enable.")
        return
    if not LOGFIRE_TOKEN:
        logger.warning("Logfire is enabled but LOGFIRE_TOKEN is not set; job dispatch events will not be exported.")
        return

    try:
        logfire.configure(
            token=LOGFIRE_TOKEN,
            service_name=LOGFIRE_SERVICE_NAME,
            service_version=LOGFIRE_SERVICE_VERSION,
            environment=LOGFIRE_ENVIRONMENT,
        )
    except Exception as e:
        logger.error(f"Failed to initialize Logfire: {e}", exc_info=True)
        return

    _instrument(app)
    logger.info(
        f"Logfire monitoring initialized: project={LOGFIRE_PROJECT_NAME}, "
        f"environment={LOGFIRE_ENVIRONMENT}, service={LOGFIRE_SERVICE_NAME}"
    )


def _emit(level: str, event: str, **attributes: Any) -> None:
    try:
        getattr(logfire, level)(event, **attributes)
    except Exception:
        logger.debug(f"Could not send '{event}' to Logfire")


def log_api_request(method: str, path: str, status_code: int, duration_ms: float) -> None:
    _emit("info", "API request", method=method, path=path, status_code=status_code, duration_ms=duration_ms)


def log_job_card_transition(job_card_id: str, previous_status: str, new_status: str, actor_id: str) -> None:
    """Record a provider moving a job card between lifecycle states."""
    _emit(
        "info",
        "Job card status changed",
        job_card_id=job_card_id,
        previous_status=previous_status,
        new_status=new_status,
        actor_id=actor_id,
    )


def log_error(error_type: str, error_message: str, context: Optional[dict] = None) -> None:
    """
    Record an unhandled error.

    Args:
        error_type: Exception class name
        error_message: Exception text
        context: Extra attributes such as the error id returned to the client
    """
    _emit("error", "Error occurred", error_type=error_type, error_message=error_message, **(context or {}))
