"""
Activity log repository.

Queries here take an optional ``company_id`` / ``provider_id`` scope. With
neither given the query covers every row, which is what admins see.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import func, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.activity_logs import ActivityLog
from .base import AsyncBaseRepository, QueryBuilder


def _scoped(stmt, company_id: Optional[str], provider_id: Optional[str]):
    if company_id is not None:
        stmt = stmt.where(ActivityLog.company_id == company_id)
    if provider_id is not None:
        stmt = stmt.where(ActivityLog.provider_id == provider_id)
    return stmt


class ActivityLogRepository(AsyncBaseRepository[ActivityLog]):
    """Repository for activity log data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, ActivityLog)

    async def list(
        self,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        filters: Optional[Dict[str, Any]] = None,
    ) -> List[ActivityLog]:
        stmt = select(ActivityLog)
        if filters:
            stmt = QueryBuilder.apply_filters(stmt, ActivityLog, filters)
        stmt = stmt.order_by(ActivityLog.created_at.desc())
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_visible(
        self,
        *,
        company_id: Optional[str] = None,
        provider_id: Optional[str] = None,
        since: Optional[datetime] = None,
        limit: int = 50,
    ) -> List[ActivityLog]:
        """List the newest entries within a scope.

        Args:
            company_id: Restrict to entries for this company
            provider_id: Restrict to entries addressed to this provider
            since: Only entries created strictly after this time
            limit: Maximum records to return

        Returns:
            List of ActivityLog instances, newest first
        """
        stmt = _scoped(select(ActivityLog), company_id, provider_id)
        if since is not None:
            stmt = stmt.where(ActivityLog.created_at > since)
        stmt = stmt.order_by(ActivityLog.created_at.desc()).limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_visible(
        self, log_id: str, *, company_id: Optional[str] = None, provider_id: Optional[str] = None
    ) -> Optional[ActivityLog]:
        stmt = _scoped(select(ActivityLog).where(ActivityLog.id == log_id), company_id, provider_id)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def count_unread(self, *, company_id: Optional[str] = None, provider_id: Optional[str] = None) -> int:
        stmt = _scoped(select(func.count()).select_from(ActivityLog), company_id, provider_id)
        stmt = stmt.where(ActivityLog.read.is_(False))
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def mark_all_read(self, *, company_id: Optional[str] = None, provider_id: Optional[str] = None) -> int:
        """Mark every unread entry within a scope as read.

        Returns:
            Number of entries updated
        """
        stmt = update(ActivityLog).where(ActivityLog.read.is_(False)).values(read=True)
        stmt = _scoped(stmt, company_id, provider_id)
        result = await self.session.execute(stmt)
        await self.session.commit()
        return int(result.rowcount or 0)
