"""Tests for the notification feed endpoints."""

from datetime import datetime, timedelta

import pytest
from httpx import AsyncClient

from jobdispatch.core.database.entities import ActivityLog

pytestmark = pytest.mark.asyncio

NOTIFICATIONS = "/api/v1/notifications"
BASE_TIME = datetime(2026, 10, 1, 8, 0)


async def add_log(session, company_id=None, provider_id=None, minutes=0, read=False, title="Event") -> ActivityLog:
    log = ActivityLog(
        type="job_card",
        title=title,
        message=f"{title} message",
        actor_type="company",
        actor_id="actor",
        actor_name="Acme",
        company_id=company_id,
        provider_id=provider_id,
        read=read,
        created_at=BASE_TIME + timedelta(minutes=minutes),
    )
    session.add(log)
    await session.commit()
    return log


class TestListNotifications:
    async def test_scopes_by_role(self, client: AsyncClient, seed, headers_for, session):
        admin = await seed.admin()
        acme, manager = await seed.company()
        other, _ = await seed.company()
        provider, provider_user = await seed.provider(acme)

        await add_log(session, company_id=acme.id, minutes=1, title="Company news")
        await add_log(session, company_id=acme.id, provider_id=provider.id, minutes=2, title="For provider")
        await add_log(session, company_id=other.id, minutes=3, title="Other company")

        admin_feed = (await client.get(NOTIFICATIONS, headers=headers_for(admin))).json()
        assert [n["title"] for n in admin_feed["notifications"]] == ["Other company", "For provider", "Company news"]
        assert admin_feed["unread_count"] == 3

        company_feed = (await client.get(NOTIFICATIONS, headers=headers_for(manager))).json()
        assert [n["title"] for n in company_feed["notifications"]] == ["For provider", "Company news"]
        assert company_feed["unread_count"] == 2

        provider_feed = (await client.get(NOTIFICATIONS, headers=headers_for(provider_user))).json()
        assert [n["title"] for n in provider_feed["notifications"]] == ["For provider"]
        assert provider_feed["unread_count"] == 1

    async def test_since_and_limit(self, client: AsyncClient, seed, headers_for, session):
        acme, manager = await seed.company()
        for minute in range(5):
            await add_log(session, company_id=acme.id, minutes=minute, title=f"Event {minute}")

        since = (BASE_TIME + timedelta(minutes=2)).isoformat()
        newer = (await client.get(NOTIFICATIONS, params={"since": since}, headers=headers_for(manager))).json()
        assert [n["title"] for n in newer["notifications"]] == ["Event 4", "Event 3"]
        # The unread count always covers the whole scope
        assert newer["unread_count"] == 5

        limited = (await client.get(NOTIFICATIONS, params={"limit": 2}, headers=headers_for(manager))).json()
        assert len(limited["notifications"]) == 2

    async def test_since_with_timezone_offset(self, client: AsyncClient, seed, headers_for, session):
        acme, manager = await seed.company()
        await add_log(session, company_id=acme.id, minutes=0, title="Old")
        await add_log(session, company_id=acme.id, minutes=90, title="New")

        # 10:00+01:00 is 09:00 UTC
        response = await client.get(
            NOTIFICATIONS, params={"since": "2026-10-01T10:00:00+01:00"}, headers=headers_for(manager)
        )
        assert [n["title"] for n in response.json()["notifications"]] == ["New"]

    async def test_limit_is_capped(self, client: AsyncClient, seed, headers_for, session):
        acme, manager = await seed.company()
        for minute in range(105):
            session.add(
                ActivityLog(
                    type="system",
                    title=f"Event {minute}",
                    message="m",
                    actor_type="admin",
                    actor_id="a",
                    actor_name="Admin",
                    company_id=acme.id,
                    created_at=BASE_TIME + timedelta(minutes=minute),
                )
            )
        await session.commit()

        response = await client.get(NOTIFICATIONS, params={"limit": 500}, headers=headers_for(manager))
        assert len(response.json()["notifications"]) == 100

    async def test_requires_authentication(self, client: AsyncClient):
        response = await client.get(NOTIFICATIONS)
        assert response.status_code == 401

    async def test_metadata_exposed(self, client: AsyncClient, seed, headers_for, session):
        acme, manager = await seed.company()
        log = ActivityLog(
            type="approval",
            title="Company approved",
            message="Approved",
            actor_type="admin",
            actor_id="a",
            actor_name="Admin",
            company_id=acme.id,
        )
        log.set_metadata_dict({"status": "approved"})
        session.add(log)
        await session.commit()

        response = await client.get(NOTIFICATIONS, headers=headers_for(manager))
        assert response.json()["notifications"][0]["metadata"] == {"status": "approved"}


class TestMarkRead:
    async def test_mark_single_read(self, client: AsyncClient, seed, headers_for, session):
        acme, manager = await seed.company()
        log = await add_log(session, company_id=acme.id)

        response = await client.post(f"{NOTIFICATIONS}/{log.id}/read", headers=headers_for(manager))
        assert response.status_code == 200
        assert response.json()["updated"] == 1

        feed = (await client.get(NOTIFICATIONS, headers=headers_for(manager))).json()
        assert feed["unread_count"] == 0
        assert feed["notifications"][0]["read"] is True

    async def test_cannot_mark_other_company_notification(self, client: AsyncClient, seed, headers_for, session):
        _, manager = await seed.company()
        other, _ = await seed.company()
        log = await add_log(session, company_id=other.id)

        response = await client.post(f"{NOTIFICATIONS}/{log.id}/read", headers=headers_for(manager))
        assert response.status_code == 404
        assert response.json()["detail"] == "Notification not found"

    async def test_mark_all_read_within_scope(self, client: AsyncClient, seed, headers_for, session):
        acme, manager = await seed.company()
        other, _ = await seed.company()
        await add_log(session, company_id=acme.id, minutes=1)
        await add_log(session, company_id=acme.id, minutes=2)
        await add_log(session, company_id=acme.id, minutes=3, read=True)
        await add_log(session, company_id=other.id, minutes=4)

        response = await client.post(f"{NOTIFICATIONS}/read-all", headers=headers_for(manager))
        assert response.status_code == 200
        assert response.json() == {"message": "All notifications marked as read", "updated": 2}

        admin = await seed.admin()
        feed = (await client.get(NOTIFICATIONS, headers=headers_for(admin))).json()
        assert feed["unread_count"] == 1
