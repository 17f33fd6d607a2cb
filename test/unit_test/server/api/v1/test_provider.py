"""Tests for provider endpoints."""

from unittest.mock import patch

import pytest
from httpx import AsyncClient
from sqlmodel import select

from jobdispatch.core.database.entities import ActivityLog, User

pytestmark = pytest.mark.asyncio

PROVIDER = "/api/v1/provider"


class TestListJobCards:
    async def test_only_assigned_cards_with_company_name(self, client: AsyncClient, seed, headers_for):
        acme, _ = await seed.company(name="Acme Plumbing")
        me, me_user = await seed.provider(acme)
        colleague, _ = await seed.provider(acme)
        mine = await seed.job_card(acme, me)
        await seed.job_card(acme, colleague)

        response = await client.get(f"{PROVIDER}/job-cards", headers=headers_for(me_user))
        assert response.status_code == 200
        rows = response.json()
        assert [row["id"] for row in rows] == [mine.id]
        assert rows[0]["company_name"] == "Acme Plumbing"

    async def test_status_filter(self, client: AsyncClient, seed, headers_for):
        acme, _ = await seed.company()
        me, me_user = await seed.provider(acme)
        await seed.job_card(acme, me, status="pending")
        accepted = await seed.job_card(acme, me, status="accepted")

        response = await client.get(
            f"{PROVIDER}/job-cards", params={"status": "accepted"}, headers=headers_for(me_user)
        )
        assert [row["id"] for row in response.json()] == [accepted.id]

    async def test_company_manager_forbidden(self, client: AsyncClient, seed, headers_for):
        _, manager = await seed.company()
        response = await client.get(f"{PROVIDER}/job-cards", headers=headers_for(manager))
        assert response.status_code == 403

    async def test_provider_without_record(self, client: AsyncClient, session, headers_for):
        ghost = User(email="ghost@example.com", password_hash="x", role="provider")
        session.add(ghost)
        await session.commit()

        response = await client.get(f"{PROVIDER}/job-cards", headers=headers_for(ghost))
        assert response.status_code == 404
        assert response.json()["detail"] == "Provider record not found"


class TestUpdateStatus:
    async def test_full_lifecycle(self, client: AsyncClient, seed, headers_for, session):
        acme, _ = await seed.company()
        me, me_user = await seed.provider(acme, name="Bob Smith")
        card = await seed.job_card(acme, me)
        url = f"{PROVIDER}/job-cards/{card.id}"

        accepted = await client.put(url, json={"status": "accepted"}, headers=headers_for(me_user))
        assert accepted.status_code == 200
        assert accepted.json()["status"] == "accepted"

        started = await client.put(url, json={"status": "in_progress"}, headers=headers_for(me_user))
        assert started.json()["status"] == "in_progress"

        images = ["/media/job-photos/x/1.jpg", "/media/job-photos/x/2.jpg"]
        completed = await client.put(
            url,
            json={"status": "completed", "notes": "Replaced the trap", "images": images},
            headers=headers_for(me_user),
        )
        assert completed.status_code == 200
        data = completed.json()
        assert data["status"] == "completed"
        assert data["completion_notes"] == "Replaced the trap"
        assert data["completion_images"] == images
        assert data["completed_at"] is not None

        logs = (await session.execute(select(ActivityLog).order_by(ActivityLog.created_at))).scalars().all()
        assert len(logs) == 3
        assert all(log.company_id == acme.id and log.provider_id is None for log in logs)
        assert all(log.actor_type == "provider" for log in logs)
        assert logs[0].message == f'Provider Bob Smith accepted job card "{card.title}"'
        assert logs[2].message.endswith("with notes with 2 image(s)")
        assert logs[2].get_metadata_dict() == {
            "previous_status": "in_progress",
            "new_status": "completed",
            "has_notes": True,
            "images_count": 2,
        }

    async def test_decline(self, client: AsyncClient, seed, headers_for):
        acme, _ = await seed.company()
        me, me_user = await seed.provider(acme)
        card = await seed.job_card(acme, me)

        response = await client.put(
            f"{PROVIDER}/job-cards/{card.id}", json={"status": "declined"}, headers=headers_for(me_user)
        )
        assert response.json()["status"] == "declined"

    async def test_transition_reported_to_monitoring(self, client: AsyncClient, seed, headers_for):
        acme, _ = await seed.company()
        me, me_user = await seed.provider(acme)
        card = await seed.job_card(acme, me)

        with patch("jobdispatch.server.api.v1.provider.log_job_card_transition") as mock_transition:
            await client.put(
                f"{PROVIDER}/job-cards/{card.id}", json={"status": "accepted"}, headers=headers_for(me_user)
            )
        mock_transition.assert_called_once_with(card.id, "pending", "accepted", me.id)

    async def test_invalid_transition(self, client: AsyncClient, seed, headers_for):
        acme, _ = await seed.company()
        me, me_user = await seed.provider(acme)
        card = await seed.job_card(acme, me, status="pending")

        response = await client.put(
            f"{PROVIDER}/job-cards/{card.id}", json={"status": "completed", "notes": "done"}, headers=headers_for(me_user)
        )
        assert response.status_code == 400
        body = response.json()
        assert body["current_status"] == "pending"
        assert body["requested_status"] == "completed"

    async def test_completion_requires_notes(self, client: AsyncClient, seed, headers_for):
        acme, _ = await seed.company()
        me, me_user = await seed.provider(acme)
        card = await seed.job_card(acme, me, status="in_progress")

        response = await client.put(
            f"{PROVIDER}/job-cards/{card.id}", json={"status": "completed", "notes": "  "}, headers=headers_for(me_user)
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Completion notes are required"

    async def test_other_providers_card_forbidden(self, client: AsyncClient, seed, headers_for):
        acme, _ = await seed.company()
        _, me_user = await seed.provider(acme)
        colleague, _ = await seed.provider(acme)
        card = await seed.job_card(acme, colleague)

        response = await client.put(
            f"{PROVIDER}/job-cards/{card.id}", json={"status": "accepted"}, headers=headers_for(me_user)
        )
        assert response.status_code == 403

    async def test_unknown_card(self, client: AsyncClient, seed, headers_for):
        acme, _ = await seed.company()
        _, me_user = await seed.provider(acme)
        response = await client.put(
            f"{PROVIDER}/job-cards/missing", json={"status": "accepted"}, headers=headers_for(me_user)
        )
        assert response.status_code == 404
