"""
Shared repository plumbing.

Every table repository wraps one ``AsyncSession`` and one SQLModel entity.
List screens all filter the same way (exact column filters, a free-text
"contains" search and limit/offset paging), so those pieces live in
``QueryBuilder``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, Sequence, Type, TypeVar

from sqlalchemy import or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

EntityType = TypeVar("EntityType", bound=SQLModel)

_LIKE_ESCAPE = "\\"


class AsyncBaseRepository(ABC, Generic[EntityType]):
    """CRUD over one entity.

    ``create`` and ``update`` commit by default. With ``commit=False`` they
    only flush, which lets a route write a job card and its activity log
    entry in a single transaction.
    """

    def __init__(self, session: AsyncSession, model: Type[EntityType]) -> None:
        self.session = session
        self.model = model

    async def _save(self, entity: EntityType, commit: bool) -> EntityType:
        self.session.add(entity)
        if not commit:
            await self.session.flush()
            return entity
        await self.session.commit()
        await self.session.refresh(entity)
        return entity

    async def create(self, entity: EntityType, *, commit: bool = True) -> EntityType:
        return await self._save(entity, commit)

    async def update(self, entity: EntityType, *, commit: bool = True) -> EntityType:
        return await self._save(entity, commit)

    async def get_by_id(self, entity_id: str) -> Optional[EntityType]:
        return await self.session.get(self.model, entity_id)

    async def delete(self, entity_id: str) -> bool:
        """Delete a row by id. Returns False when nothing matched."""
        entity = await self.get_by_id(entity_id)
        if entity is None:
            return False
        await self.session.delete(entity)
        await self.session.commit()
        return True

    @abstractmethod
    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[EntityType]:
        """Rows in the repository's default order, optionally filtered and paged."""


class QueryBuilder:
    """Statement helpers shared by the list endpoints."""

    @staticmethod
    def apply_filters(stmt, model: Type[EntityType], filters: Dict[str, Any]):
        """Add ``column == value`` clauses.

        ``None`` values and keys that are not columns of ``model`` are skipped,
        so query parameters can be passed through unchecked.
        """
        for key, value in filters.items():
            if value is not None and hasattr(model, key):
                stmt = stmt.where(getattr(model, key) == value)
        return stmt

    @staticmethod
    def apply_search(stmt, columns: Sequence[Any], term: Optional[str]):
        """Case-insensitive substring match on any of ``columns``.

        ``%`` and ``_`` in the term are matched literally. A blank term leaves
        the statement alone.
        """
        if not term or not term.strip():
            return stmt
        escaped = (
            term.strip()
            .replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
            .replace("%", _LIKE_ESCAPE + "%")
            .replace("_", _LIKE_ESCAPE + "_")
        )
        pattern = f"%{escaped}%"
        return stmt.where(or_(*(column.ilike(pattern, escape=_LIKE_ESCAPE) for column in columns)))

    @staticmethod
    def apply_pagination(stmt, limit: Optional[int], offset: Optional[int]):
        if limit is not None:
            stmt = stmt.limit(limit)
        if offset is not None:
            stmt = stmt.offset(offset)
        return stmt
