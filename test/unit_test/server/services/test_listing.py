"""Unit tests for list decoration helpers."""

import pytest

from jobdispatch.core.database.repositories import build_repos
from jobdispatch.server.services.listing import ROLE_LABELS, job_card_items, role_from_label, user_items


class TestRoleLabels:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("service_provider", "provider"),
            ("provider", "provider"),
            ("company_manager", "company"),
            ("company", "company"),
            ("admin", "admin"),
            ("unknown", "unknown"),
        ],
    )
    def test_role_from_label(self, value, expected):
        assert role_from_label(value) == expected

    def test_labels(self):
        assert ROLE_LABELS == {"admin": "admin", "company": "company_manager", "provider": "service_provider"}


class TestDecoration:
    @pytest.mark.asyncio
    async def test_job_card_items_attach_names(self, session, seed):
        company, _ = await seed.company(name="Acme Plumbing")
        provider, _ = await seed.provider(company, name="Bob Smith")
        assigned = await seed.job_card(company, provider)
        unassigned = await seed.job_card(company)

        items = await job_card_items([assigned, unassigned], build_repos(session=session))

        assert items[0].company_name == "Acme Plumbing"
        assert items[0].provider_name == "Bob Smith"
        assert items[1].provider_name == "Unassigned"

    @pytest.mark.asyncio
    async def test_user_items_use_labels_and_last_login_fallback(self, session, seed):
        admin = await seed.admin()
        company, manager = await seed.company(name="Acme Plumbing")

        items = {item.id: item for item in await user_items([admin, manager], build_repos(session=session))}

        assert items[admin.id].role == "admin"
        assert items[admin.id].company_name is None
        assert items[admin.id].last_login == admin.created_at
        assert items[manager.id].role == "company_manager"
        assert items[manager.id].company_name == "Acme Plumbing"
        assert items[manager.id].name == "Jane Doe"
