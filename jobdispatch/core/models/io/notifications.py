"""
Notification I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from jobdispatch.core.database.entities.activity_logs import ActivityLog


class NotificationRead(BaseModel):
    """Schema for reading an activity log entry as a notification."""

    id: str
    type: str
    title: str
    message: str
    entity_type: Optional[str] = None
    entity_id: Optional[str] = None
    actor_type: str
    actor_id: str
    actor_name: str
    company_id: Optional[str] = None
    provider_id: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)
    read: bool
    created_at: datetime

    @classmethod
    def from_entity(cls, log: ActivityLog) -> "NotificationRead":
        return cls(
            id=log.id,
            type=log.type,
            title=log.title,
            message=log.message,
            entity_type=log.entity_type,
            entity_id=log.entity_id,
            actor_type=log.actor_type,
            actor_id=log.actor_id,
            actor_name=log.actor_name,
            company_id=log.company_id,
            provider_id=log.provider_id,
            metadata=log.get_metadata_dict(),
            read=log.read,
            created_at=log.created_at,
        )


class NotificationList(BaseModel):
    notifications: List[NotificationRead]
    unread_count: int


class MarkReadResponse(BaseModel):
    message: str
    updated: int = 1
