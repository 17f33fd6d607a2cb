"""
Helpers that decorate fetched rows with related names for list endpoints.
"""

from __future__ import annotations

from typing import List, Sequence

from jobdispatch.core.database.entities import JobCard, User
from jobdispatch.core.database.repositories import RepoBundle
from jobdispatch.core.models.domain import UserRole
from jobdispatch.core.models.io import JobCardListItem, UserListItem

UNASSIGNED_PROVIDER = "Unassigned"

ROLE_LABELS = {
    UserRole.admin.value: "admin",
    UserRole.company.value: "company_manager",
    UserRole.provider.value: "service_provider",
}


def role_from_label(value: str) -> str:
    """Accept either a stored role or its display label and return the stored role."""
    for role, label in ROLE_LABELS.items():
        if value in (role, label):
            return role
    return value


async def job_card_items(cards: Sequence[JobCard], repos: RepoBundle) -> List[JobCardListItem]:
    """Attach company and provider names to job cards."""
    company_names = await repos.companies.get_names(card.company_id for card in cards)
    provider_names = await repos.providers.get_names(card.provider_id for card in cards if card.provider_id)
    items = []
    for card in cards:
        item = JobCardListItem.model_validate(card)
        item.company_name = company_names.get(card.company_id)
        item.provider_name = provider_names.get(card.provider_id, UNASSIGNED_PROVIDER) if card.provider_id else UNASSIGNED_PROVIDER
        items.append(item)
    return items


async def user_items(users: Sequence[User], repos: RepoBundle) -> List[UserListItem]:
    company_names = await repos.companies.get_names(user.company_id for user in users if user.company_id)
    return [
        UserListItem(
            id=user.id,
            email=user.email,
            name=user.display_name,
            role=ROLE_LABELS.get(user.role, user.role),
            company_id=user.company_id,
            company_name=company_names.get(user.company_id) if user.company_id else None,
            last_login=user.last_sign_in_at or user.created_at,
            created_at=user.created_at,
        )
        for user in users
    ]
