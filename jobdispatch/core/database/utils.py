"""
Engine and session factories for the job dispatch database.

Production runs on Postgres through asyncpg; tests and local runs can point
``DATABASE_URL`` at ``sqlite+aiosqlite``. Schema changes in production go
through Alembic, ``create_all`` exists for tests and throwaway databases.
"""

from __future__ import annotations

import re
from typing import Any, Callable

from sqlalchemy.engine import Connection, make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from .base import Base

_POSTGRES_SCHEME = re.compile(r"^postgres(?:ql)?(?:\+[a-z0-9_]+)?://")


def normalize_database_url(db_url: str) -> str:
    """Force the asyncpg driver on any Postgres URL.

    Hosting providers hand out ``postgres://`` URLs and operators often paste
    ``postgresql+psycopg2://`` ones; both are rewritten. Other backends pass
    through untouched.
    """
    return _POSTGRES_SCHEME.sub("postgresql+asyncpg://", db_url, count=1)


def create_engine(db_url: str, **engine_kwargs: Any) -> AsyncEngine:
    url = normalize_database_url(db_url)
    if make_url(url).get_backend_name() == "sqlite":
        # aiosqlite hands the connection between threads
        connect_args = engine_kwargs.setdefault("connect_args", {})
        connect_args.setdefault("check_same_thread", False)
    else:
        engine_kwargs.setdefault("pool_pre_ping", True)
    return create_async_engine(url, **engine_kwargs)


def create_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory whose objects stay readable after commit.

    Route handlers serialize entities after the repository has committed,
    so attributes must not be expired.
    """
    return async_sessionmaker(engine, expire_on_commit=False)


async def _run_on_metadata(engine: AsyncEngine, operation: Callable[[Connection], None]) -> None:
    # Registers every table on Base.metadata
    from . import entities  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(operation)


async def create_all(engine: AsyncEngine) -> None:
    await _run_on_metadata(engine, Base.metadata.create_all)


async def drop_all(engine: AsyncEngine) -> None:
    await _run_on_metadata(engine, Base.metadata.drop_all)
