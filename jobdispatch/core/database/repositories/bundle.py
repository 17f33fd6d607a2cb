"""
Repository bundle for dependency injection.

This module provides a convenience bundle of all repository instances
sharing one session, for easy dependency injection in services and routes.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from .activity_logs import ActivityLogRepository
from .companies import CompanyRepository
from .job_cards import JobCardRepository
from .service_providers import ServiceProviderRepository
from .users import UserRepository


@dataclass(frozen=True)
class RepoBundle:
    """Convenience bundle of all SQL repositories for dependency injection."""

    session: AsyncSession
    companies: CompanyRepository
    users: UserRepository
    providers: ServiceProviderRepository
    job_cards: JobCardRepository
    activity_logs: ActivityLogRepository


def build_repos(*, session: AsyncSession) -> RepoBundle:
    """Build a RepoBundle from an existing session.

    Args:
        session: Existing async session

    Returns:
        Bundle containing all repository instances
    """
    return RepoBundle(
        session=session,
        companies=CompanyRepository(session),
        users=UserRepository(session),
        providers=ServiceProviderRepository(session),
        job_cards=JobCardRepository(session),
        activity_logs=ActivityLogRepository(session),
    )
