from __future__ import annotations

import os
from pathlib import Path

# Settings, the default engine and logging are built at import time, so the
# test environment must be in place before anything from jobdispatch loads.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ.setdefault("ENABLE_FILE_LOGGING", "false")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOGFIRE_ENABLED", "false")
os.environ.setdefault("JOBDISPATCH_JWT_SECRET", "test-secret-key")

import httpx
import pytest
from dotenv import load_dotenv

# Local overrides, e.g. a Postgres DATABASE_URL; never overrides the values above
load_dotenv(Path(__file__).resolve().parent / ".env", override=False)

LOCAL_URL_PREFIXES = ("http://localhost", "http://127.0.0.1", "http://mock", "https://mock", "/")


@pytest.fixture(autouse=True)
def _global_offline_http_guard(monkeypatch: pytest.MonkeyPatch):
    """Fail any test that lets an httpx client leave the machine."""

    def _check(url) -> None:
        if not str(url).startswith(LOCAL_URL_PREFIXES):
            raise RuntimeError(f"External HTTP blocked in tests: {url}")

    sync_request = httpx.Client.request
    async_request = httpx.AsyncClient.request

    def guarded_sync(self, method, url, *args, **kwargs):
        _check(url)
        return sync_request(self, method, url, *args, **kwargs)

    async def guarded_async(self, method, url, *args, **kwargs):
        _check(url)
        return await async_request(self, method, url, *args, **kwargs)

    monkeypatch.setattr(httpx.Client, "request", guarded_sync)
    monkeypatch.setattr(httpx.AsyncClient, "request", guarded_async)
