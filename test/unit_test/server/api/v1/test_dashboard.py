"""Tests for dashboard statistics endpoints."""

from datetime import datetime, timedelta

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio

DASHBOARD = "/api/v1/dashboard"


class TestAdminStats:
    async def test_platform_totals(self, client: AsyncClient, seed, headers_for):
        admin = await seed.admin()
        acme, _ = await seed.company()
        await seed.company(status="pending")
        await seed.company(status="pending")
        now = datetime.utcnow()
        await seed.job_card(acme, status="pending")
        await seed.job_card(acme, status="in_progress")
        await seed.job_card(acme, status="completed", completed_at=now)
        await seed.job_card(acme, status="completed", completed_at=now - timedelta(days=62))

        response = await client.get(f"{DASHBOARD}/admin-stats", headers=headers_for(admin))
        assert response.status_code == 200
        assert response.json() == {
            "total_companies": 3,
            "pending_approvals": 2,
            "active_job_cards": 2,
            "completed_this_month": 1,
        }

    async def test_admin_only(self, client: AsyncClient, seed, headers_for):
        _, manager = await seed.company()
        response = await client.get(f"{DASHBOARD}/admin-stats", headers=headers_for(manager))
        assert response.status_code == 403


class TestCompanyStats:
    async def test_company_totals(self, client: AsyncClient, seed, headers_for):
        acme, manager = await seed.company()
        other, _ = await seed.company()
        provider, _ = await seed.provider(acme)
        await seed.provider(acme, status="inactive")
        await seed.job_card(acme, provider, status="pending")
        await seed.job_card(acme, provider, status="completed", completed_at=datetime.utcnow())
        await seed.job_card(other, status="pending")

        response = await client.get(f"{DASHBOARD}/company-stats", headers=headers_for(manager))
        assert response.status_code == 200
        assert response.json() == {
            "total_providers": 2,
            "active_job_cards": 1,
            "completed_today": 1,
            "pending_jobs": 1,
            "completion_rate": 50,
        }


class TestProviderStats:
    async def test_provider_totals(self, client: AsyncClient, seed, headers_for):
        acme, _ = await seed.company()
        me, me_user = await seed.provider(acme)
        colleague, _ = await seed.provider(acme)
        await seed.job_card(acme, me, status="pending")
        await seed.job_card(acme, me, status="accepted")
        await seed.job_card(acme, me, status="completed", completed_at=datetime.utcnow() - timedelta(days=3))
        await seed.job_card(acme, colleague, status="completed", completed_at=datetime.utcnow())

        response = await client.get(f"{DASHBOARD}/provider-stats", headers=headers_for(me_user))
        assert response.status_code == 200
        assert response.json() == {
            "pending": 1,
            "accepted": 1,
            "in_progress": 0,
            "completed": 1,
            "total": 3,
            "completed_today": 0,
            "completion_rate": 33,
        }
