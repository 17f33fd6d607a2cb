from __future__ import annotations

from typing import AsyncGenerator

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel.pool import StaticPool

from jobdispatch.core.database.repositories import RepoBundle, build_repos
from jobdispatch.core.database.utils import create_all, create_engine, create_sessionmaker


@pytest_asyncio.fixture
async def engine():
    engine = create_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_all(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session(engine) -> AsyncGenerator[AsyncSession, None]:
    async with create_sessionmaker(engine)() as session:
        yield session


@pytest_asyncio.fixture
async def repos(session: AsyncSession) -> RepoBundle:
    return build_repos(session=session)
