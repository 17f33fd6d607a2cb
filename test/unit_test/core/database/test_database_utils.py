"""Unit tests for database engine and session helpers."""

import pytest
from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession
from sqlmodel.pool import StaticPool

from jobdispatch.core.database.utils import (
    create_all,
    create_engine,
    create_sessionmaker,
    drop_all,
    normalize_database_url,
)

EXPECTED_TABLES = {"companies", "users", "service_providers", "job_cards", "activity_logs"}


class TestNormalizeDatabaseUrl:
    @pytest.mark.parametrize(
        "url,expected",
        [
            ("postgres://u:p@db:5432/app", "postgresql+asyncpg://u:p@db:5432/app"),
            ("postgresql://u:p@db:5432/app", "postgresql+asyncpg://u:p@db:5432/app"),
            ("postgresql+psycopg2://u:p@db/app", "postgresql+asyncpg://u:p@db/app"),
            ("postgresql+asyncpg://u:p@db/app", "postgresql+asyncpg://u:p@db/app"),
            ("sqlite+aiosqlite:///:memory:", "sqlite+aiosqlite:///:memory:"),
        ],
    )
    def test_normalize(self, url, expected):
        assert normalize_database_url(url) == expected


class TestEngineAndSchema:
    def test_create_engine_returns_async_engine(self):
        engine = create_engine("sqlite+aiosqlite:///:memory:")
        assert isinstance(engine, AsyncEngine)
        assert engine.url.drivername == "sqlite+aiosqlite"

    @pytest.mark.asyncio
    async def test_create_all_and_drop_all(self):
        engine = create_engine(
            "sqlite+aiosqlite:///:memory:",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        try:
            await create_all(engine)
            async with engine.connect() as conn:
                tables = await conn.run_sync(lambda sync_conn: set(inspect(sync_conn).get_table_names()))
            assert EXPECTED_TABLES <= tables

            await drop_all(engine)
            async with engine.connect() as conn:
                tables = await conn.run_sync(lambda sync_conn: set(inspect(sync_conn).get_table_names()))
            assert not (EXPECTED_TABLES & tables)
        finally:
            await engine.dispose()

    @pytest.mark.asyncio
    async def test_sessionmaker_keeps_objects_loaded_after_commit(self, engine):
        maker = create_sessionmaker(engine)
        assert maker.kw["expire_on_commit"] is False
        async with maker() as session:
            assert isinstance(session, AsyncSession)
