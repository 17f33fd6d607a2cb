"""
Company repository.

Data access for registered companies, including the approval queue and the
name lookups used when listing users and job cards.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from jobdispatch.core.models.domain import CompanyStatus

from ..entities.companies import Company
from .base import AsyncBaseRepository, QueryBuilder


class CompanyRepository(AsyncBaseRepository[Company]):
    """Repository for company data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Company)

    async def get_by_name(self, name: str) -> Optional[Company]:
        """Get a company by name, ignoring case and surrounding whitespace."""
        stmt = select(Company).where(func.lower(Company.name) == name.strip().lower())
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def get_names(self, company_ids: Iterable[str]) -> Dict[str, str]:
        """Map company ids to names for the given ids."""
        ids = {company_id for company_id in company_ids if company_id}
        if not ids:
            return {}
        stmt = select(Company.id, Company.name).where(Company.id.in_(ids))
        result = await self.session.execute(stmt)
        return {row.id: row.name for row in result.all()}

    async def list(
        self,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        filters: Optional[Dict[str, Any]] = None,
    ) -> List[Company]:
        """List companies newest first.

        Args:
            limit: Maximum records to return
            offset: Records to skip
            filters: Field filters (status) and ``search`` over name, email and contact person

        Returns:
            List of Company instances
        """
        filters = dict(filters or {})
        search = filters.pop("search", None)

        stmt = select(Company)
        stmt = QueryBuilder.apply_filters(stmt, Company, filters)
        stmt = QueryBuilder.apply_search(stmt, [Company.name, Company.email, Company.contact_person], search)
        stmt = stmt.order_by(Company.created_at.desc())
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)

        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_pending(self, limit: int) -> List[Company]:
        return await self.list(limit=limit, filters={"status": CompanyStatus.pending.value})

    async def count(self, status: Optional[str] = None) -> int:
        stmt = select(func.count()).select_from(Company)
        if status is not None:
            stmt = stmt.where(Company.status == status)
        result = await self.session.execute(stmt)
        return int(result.scalar_one())
