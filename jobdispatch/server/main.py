"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware (CORS,
request monitoring), registers exception handlers, mounts the job photo
storage and includes all API routers. It serves as the root of the web server.
"""

from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from jobdispatch.core.database import init_db
from jobdispatch.core.logging_config import get_logger, setup_logging
from jobdispatch.core.monitoring import initialize_logfire

from .api.v1 import (
    admin,
    auth,
    company,
    dashboard,
    health,
    notifications,
    provider,
    storage,
)
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .middleware import LogfireMiddleware

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Handles startup and shutdown events for the FastAPI application.
    """
    # Startup
    logger.info(f"Starting up {constant.PROJECT_NAME} Server ({settings.environment})...")
    Path(settings.storage.directory).mkdir(parents=True, exist_ok=True)
    try:
        await init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}", exc_info=True)

    yield

    # Shutdown
    logger.info(f"Shutting down {constant.PROJECT_NAME} Server...")


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    JobDispatch Server API

    Multi-tenant job dispatch: companies register and are approved by admins,
    dispatch job cards to their service providers, and follow progress through
    a polled notification feed. Providers accept, decline, start and complete
    job cards with photo evidence.
    """,
    version=constant.VERSION,
    openapi_url=f"{constant.API_V1_STR}/openapi.json",
    docs_url=f"{constant.API_V1_STR}/docs",
    redoc_url=f"{constant.API_V1_STR}/redoc",
    lifespan=lifespan,
)

# Set all CORS enabled origins
cors = settings.cors
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors.origins,
    allow_credentials=cors.allow_credentials,
    allow_methods=cors.allow_methods,
    allow_headers=cors.allow_headers,
)
app.add_middleware(LogfireMiddleware)

setup_exception_handlers(app)
initialize_logfire(app)

app.include_router(health.router, tags=["health"])
app.include_router(auth.router, prefix=f"{constant.API_V1_STR}/auth", tags=["auth"])
app.include_router(admin.router, prefix=f"{constant.API_V1_STR}/admin", tags=["admin"])
app.include_router(company.router, prefix=f"{constant.API_V1_STR}/company", tags=["company"])
app.include_router(provider.router, prefix=f"{constant.API_V1_STR}/provider", tags=["provider"])
app.include_router(notifications.router, prefix=f"{constant.API_V1_STR}/notifications", tags=["notifications"])
app.include_router(storage.router, prefix=f"{constant.API_V1_STR}/storage", tags=["storage"])
app.include_router(dashboard.router, prefix=f"{constant.API_V1_STR}/dashboard", tags=["dashboard"])

app.mount(
    "/" + settings.storage.media_url_prefix.strip("/"),
    StaticFiles(directory=settings.storage.directory, check_dir=False),
    name="media",
)


def run() -> None:
    """Run the server with uvicorn using the configured host, port and log level."""
    uvicorn.run(
        "jobdispatch.server.main:app",
        host=settings.server_host,
        port=settings.server_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
