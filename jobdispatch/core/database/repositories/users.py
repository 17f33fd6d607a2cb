"""
User repository.

Data access for login accounts. Emails are stored lower-cased, so lookups
normalize their input the same way.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.users import User
from .base import AsyncBaseRepository, QueryBuilder


class UserRepository(AsyncBaseRepository[User]):
    """Repository for user data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, User)

    async def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(User).where(User.email == email.strip().lower())
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def exists_with_role(self, role: str) -> bool:
        stmt = select(func.count()).select_from(User).where(User.role == role)
        result = await self.session.execute(stmt)
        return int(result.scalar_one()) > 0

    async def list(
        self,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        filters: Optional[Dict[str, Any]] = None,
    ) -> List[User]:
        """List users newest first.

        Args:
            limit: Maximum records to return
            offset: Records to skip
            filters: Field filters (role, company_id) and ``search`` over email and full name

        Returns:
            List of User instances
        """
        filters = dict(filters or {})
        search = filters.pop("search", None)

        stmt = select(User)
        stmt = QueryBuilder.apply_filters(stmt, User, filters)
        stmt = QueryBuilder.apply_search(stmt, [User.email, User.full_name], search)
        stmt = stmt.order_by(User.created_at.desc())
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)

        result = await self.session.execute(stmt)
        return list(result.scalars().all())
