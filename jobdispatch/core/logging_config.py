"""
Logging Configuration Module.

Central place where the JobDispatch server wires up the standard ``logging``
package. The root logger receives everything; handlers decide what to keep:

- a console handler at the configured level (``JOBDISPATCH_LOG_LEVEL``)
- an optional file handler under ``LOG_FILE_DIR`` that keeps DEBUG records
- per-package levels so SQL, HTTP client and password-hashing chatter stays quiet
"""

import logging
import logging.config
import os
from pathlib import Path
from typing import Any, Optional


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


def _default_level() -> str:
    # Fall back to the raw environment when server settings fail to load
    try:
        from jobdispatch.server.core.config import settings

        return settings.log_level
    except Exception:
        return os.getenv("JOBDISPATCH_LOG_LEVEL", "INFO")


LOG_LEVEL = _default_level().upper()
LOG_FORMAT = os.getenv("LOG_FORMAT", "detailed")
LOG_FILE_DIR = os.getenv("LOG_FILE_DIR", "logs")
LOG_FILE_NAME = "jobdispatch.log"
ENABLE_FILE_LOGGING = _env_flag("ENABLE_FILE_LOGGING", "true")
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


SIMPLE_FORMAT = "%(levelname)s - %(name)s - %(message)s"

DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(funcName)s() - %(message)s"

JSON_FORMAT = (
    '{"timestamp": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", '
    '"module": "%(filename)s", "function": "%(funcName)s", "line": %(lineno)d, '
    '"message": "%(message)s"}'
)

_FORMATS = {"simple": SIMPLE_FORMAT, "detailed": DETAILED_FORMAT, "json": JSON_FORMAT}


MODULE_LOG_LEVELS = {
    "jobdispatch.core": "INFO",
    "jobdispatch.core.database": "INFO",
    "jobdispatch.server": "INFO",
    "jobdispatch.server.core": "INFO",
    # Job card, provider and notification handlers
    "jobdispatch.server.api": "DEBUG",
    "jobdispatch.server.services": "DEBUG",
    "sqlalchemy": "WARNING",
    "sqlalchemy.engine": "WARNING",
    "sqlalchemy.pool": "WARNING",
    "aiosqlite": "WARNING",
    "httpx": "WARNING",
    "asyncio": "WARNING",
    "passlib": "WARNING",
    "multipart": "WARNING",
    "uvicorn": "INFO",
    "uvicorn.access": "INFO",
}


def _build_config(level: str, fmt: str, log_file: Optional[Path]) -> dict[str, Any]:
    handlers: dict[str, Any] = {
        "console": {
            "class": "logging.StreamHandler",
            "level": level,
            "formatter": "default",
        }
    }
    if log_file is not None:
        handlers["file"] = {
            "class": "logging.FileHandler",
            "level": "DEBUG",
            "formatter": "default",
            "filename": str(log_file),
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"format": _FORMATS.get(fmt, DETAILED_FORMAT), "datefmt": DATE_FORMAT},
        },
        "handlers": handlers,
        "root": {"level": "DEBUG", "handlers": list(handlers)},
        "loggers": {name: {"level": module_level} for name, module_level in MODULE_LOG_LEVELS.items()},
    }


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    enable_file: bool = True,
) -> None:
    """
    Configure logging for the server process.

    Calling it again replaces the previous handlers, so tests and reloads do
    not stack duplicate output.

    Args:
        log_level: Console level, overriding ``JOBDISPATCH_LOG_LEVEL``
        log_format: One of ``simple``, ``detailed`` or ``json``; anything else means detailed
        enable_file: Set to False to skip the file handler even when ``ENABLE_FILE_LOGGING`` is on
    """
    level = (log_level or LOG_LEVEL).upper()
    fmt = log_format or LOG_FORMAT

    log_file = None
    if enable_file and ENABLE_FILE_LOGGING:
        log_dir = Path(LOG_FILE_DIR)
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / LOG_FILE_NAME

    logging.config.dictConfig(_build_config(level, fmt, log_file))
    logging.getLogger(__name__).info(
        f"Logging configured: level={level}, format={fmt}, log_file={log_file or 'disabled'}"
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
