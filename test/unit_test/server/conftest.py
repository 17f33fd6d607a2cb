from __future__ import annotations

from datetime import date, datetime
from typing import AsyncGenerator, Dict, Optional, Tuple

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel.pool import StaticPool

from jobdispatch.core.database.utils import create_all, create_engine, create_sessionmaker

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_PASSWORD = "Str0ng!Pass"


@pytest_asyncio.fixture
async def test_engine():
    """Create a fresh in-memory database for each test."""
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_all(engine)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(name="session")
async def session_fixture(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a new session for each test."""
    async with create_sessionmaker(test_engine)() as session:
        yield session


@pytest.fixture
def photo_storage(tmp_path):
    from jobdispatch.server.core.config import StorageConfig
    from jobdispatch.server.services.storage import LocalPhotoStorage

    return LocalPhotoStorage(StorageConfig(directory=str(tmp_path / "storage")))


@pytest_asyncio.fixture(name="client")
async def client_fixture(session: AsyncSession, photo_storage) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client with overridden dependencies."""
    from jobdispatch.core.database import get_session
    from jobdispatch.server.main import app
    from jobdispatch.server.services.storage import get_storage

    async def get_session_override() -> AsyncGenerator[AsyncSession, None]:
        yield session

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_storage] = lambda: photo_storage

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
        yield client

    app.dependency_overrides.clear()


class Seeder:
    """Inserts records directly through the session for API tests."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self._counter = 0

    def _next(self) -> int:
        self._counter += 1
        return self._counter

    async def _add(self, *entities):
        for entity in entities:
            self.session.add(entity)
        await self.session.commit()
        for entity in entities:
            await self.session.refresh(entity)

    async def admin(self, email: str = "admin@example.com"):
        from jobdispatch.core.database.entities import User
        from jobdispatch.core.security import hash_password

        user = User(email=email, password_hash=hash_password(TEST_PASSWORD), role="admin", full_name="Site Admin")
        await self._add(user)
        return user

    async def company(self, status: str = "approved", name: Optional[str] = None) -> Tuple:
        """Create a company and its manager account."""
        from jobdispatch.core.database.entities import Company, User
        from jobdispatch.core.security import hash_password

        n = self._next()
        company = Company(
            name=name or f"Acme Plumbing {n}",
            email=f"office{n}@acme-example.com",
            contact_person="Jane Doe",
            phone="5551234567",
            status=status,
        )
        manager = User(
            email=f"manager{n}@acme-example.com",
            password_hash=hash_password(TEST_PASSWORD),
            role="company",
            company_id=company.id,
            full_name="Jane Doe",
        )
        await self._add(company, manager)
        return company, manager

    async def provider(self, company, status: str = "active", name: Optional[str] = None) -> Tuple:
        """Create a provider login and its provider record."""
        from jobdispatch.core.database.entities import ServiceProvider, User
        from jobdispatch.core.security import hash_password

        n = self._next()
        user = User(
            email=f"tech{n}@acme-example.com",
            password_hash=hash_password(TEST_PASSWORD),
            role="provider",
            company_id=company.id,
            full_name=name or f"Tech {n}",
        )
        provider = ServiceProvider(
            id=user.id,
            company_id=company.id,
            name=name or f"Tech {n}",
            email=user.email,
            phone="5559876543",
            status=status,
        )
        await self._add(user, provider)
        return provider, user

    async def job_card(
        self,
        company,
        provider=None,
        status: str = "pending",
        priority: str = "medium",
        title: Optional[str] = None,
        due_date: Optional[date] = None,
        created_at: Optional[datetime] = None,
        completed_at: Optional[datetime] = None,
    ):
        from jobdispatch.core.database.entities import JobCard

        n = self._next()
        card = JobCard(
            company_id=company.id,
            provider_id=provider.id if provider else None,
            title=title or f"Fix leaking pipe {n}",
            description="Kitchen sink pipe is leaking under the cabinet",
            status=status,
            priority=priority,
            location="12 Main Street",
            due_date=due_date,
            completed_at=completed_at,
        )
        if created_at is not None:
            card.created_at = created_at
        await self._add(card)
        return card


@pytest_asyncio.fixture
async def seed(session: AsyncSession) -> Seeder:
    return Seeder(session)


def auth_headers(user) -> Dict[str, str]:
    from jobdispatch.core.security import create_access_token

    return {"Authorization": f"Bearer {create_access_token(user.id, user.role).token}"}


@pytest.fixture
def headers_for():
    """Build bearer headers for a user."""
    return auth_headers
