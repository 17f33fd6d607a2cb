"""Liveness and version endpoints for load balancers and deploy checks."""

from fastapi import APIRouter

from jobdispatch.server.core import constant

router = APIRouter()


@router.get("/health", summary="Health Check", description="Returns `ok` while the server process is up.")
async def health_check() -> dict[str, str]:
    return {"status": "ok"}


@router.get(
    "/version",
    summary="Get Version",
    description="Server release and the database schema revision it expects.",
)
async def version() -> dict[str, str]:
    return {"version": constant.VERSION, "schema_version": constant.SCHEMA_VERSION}
