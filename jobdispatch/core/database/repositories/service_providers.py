"""
Service provider repository.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.service_providers import ServiceProvider
from .base import AsyncBaseRepository, QueryBuilder


class ServiceProviderRepository(AsyncBaseRepository[ServiceProvider]):
    """Repository for service provider data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, ServiceProvider)

    async def get_for_company(self, provider_id: str, company_id: str) -> Optional[ServiceProvider]:
        """Get a provider only if it belongs to the given company."""
        stmt = select(ServiceProvider).where(
            ServiceProvider.id == provider_id,
            ServiceProvider.company_id == company_id,
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def get_names(self, provider_ids: Iterable[str]) -> Dict[str, str]:
        ids = {provider_id for provider_id in provider_ids if provider_id}
        if not ids:
            return {}
        stmt = select(ServiceProvider.id, ServiceProvider.name).where(ServiceProvider.id.in_(ids))
        result = await self.session.execute(stmt)
        return {row.id: row.name for row in result.all()}

    async def list(
        self,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        filters: Optional[Dict[str, Any]] = None,
    ) -> List[ServiceProvider]:
        """List providers newest first.

        Args:
            limit: Maximum records to return
            offset: Records to skip
            filters: Field filters (company_id, status) and ``search`` over name, email and phone

        Returns:
            List of ServiceProvider instances
        """
        filters = dict(filters or {})
        search = filters.pop("search", None)

        stmt = select(ServiceProvider)
        stmt = QueryBuilder.apply_filters(stmt, ServiceProvider, filters)
        stmt = QueryBuilder.apply_search(
            stmt, [ServiceProvider.name, ServiceProvider.email, ServiceProvider.phone], search
        )
        stmt = stmt.order_by(ServiceProvider.created_at.desc())
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)

        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count(self, company_id: Optional[str] = None, status: Optional[str] = None) -> int:
        stmt = select(func.count()).select_from(ServiceProvider)
        if company_id is not None:
            stmt = stmt.where(ServiceProvider.company_id == company_id)
        if status is not None:
            stmt = stmt.where(ServiceProvider.status == status)
        result = await self.session.execute(stmt)
        return int(result.scalar_one())
