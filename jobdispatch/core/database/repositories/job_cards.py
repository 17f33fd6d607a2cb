"""
Job card repository.

Besides CRUD this repository provides the aggregate counts used by the
admin company list, the provider list and the dashboards.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Tuple

from sqlalchemy import case, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from jobdispatch.core.models.domain import JobCardStatus

from ..entities.job_cards import JobCard
from .base import AsyncBaseRepository, QueryBuilder


class JobCardRepository(AsyncBaseRepository[JobCard]):
    """Repository for job card data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, JobCard)

    async def list(
        self,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        filters: Optional[Dict[str, Any]] = None,
    ) -> List[JobCard]:
        """List job cards newest first.

        Args:
            limit: Maximum records to return
            offset: Records to skip
            filters: Field filters (company_id, provider_id, status, priority)
                and ``search`` over title, description and location

        Returns:
            List of JobCard instances
        """
        filters = dict(filters or {})
        search = filters.pop("search", None)

        stmt = select(JobCard)
        stmt = QueryBuilder.apply_filters(stmt, JobCard, filters)
        stmt = QueryBuilder.apply_search(stmt, [JobCard.title, JobCard.description, JobCard.location], search)
        stmt = stmt.order_by(JobCard.created_at.desc())
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)

        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count(
        self,
        *,
        company_id: Optional[str] = None,
        status: Optional[str] = None,
        exclude_status: Optional[str] = None,
        completed_since: Optional[datetime] = None,
    ) -> int:
        """Count job cards matching all of the given conditions."""
        stmt = select(func.count()).select_from(JobCard)
        if company_id is not None:
            stmt = stmt.where(JobCard.company_id == company_id)
        if status is not None:
            stmt = stmt.where(JobCard.status == status)
        if exclude_status is not None:
            stmt = stmt.where(JobCard.status != exclude_status)
        if completed_since is not None:
            stmt = stmt.where(
                JobCard.status == JobCardStatus.completed.value,
                JobCard.completed_at >= completed_since,
            )
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def counts_by_company(self, company_ids: Iterable[str]) -> Dict[str, Tuple[int, int]]:
        """Map company ids to ``(total, active)`` job card counts.

        Active means any status other than completed.
        """
        ids = set(company_ids)
        if not ids:
            return {}
        active = func.sum(case((JobCard.status != JobCardStatus.completed.value, 1), else_=0))
        stmt = (
            select(JobCard.company_id, func.count(), active)
            .where(JobCard.company_id.in_(ids))
            .group_by(JobCard.company_id)
        )
        result = await self.session.execute(stmt)
        return {company_id: (int(total), int(active_count or 0)) for company_id, total, active_count in result.all()}

    async def completed_counts_by_provider(self, provider_ids: Iterable[str]) -> Dict[str, int]:
        ids = set(provider_ids)
        if not ids:
            return {}
        stmt = (
            select(JobCard.provider_id, func.count())
            .where(JobCard.provider_id.in_(ids), JobCard.status == JobCardStatus.completed.value)
            .group_by(JobCard.provider_id)
        )
        result = await self.session.execute(stmt)
        return {provider_id: int(total) for provider_id, total in result.all()}
