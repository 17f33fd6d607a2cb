"""
Activity log helpers.

Activity log rows are the notification feed. They are written in the same
transaction as the change they describe, and read back through a visibility
scope derived from the caller's role.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from jobdispatch.core.database.entities.activity_logs import ActivityLog
from jobdispatch.core.database.entities.users import User
from jobdispatch.core.database.repositories.activity_logs import ActivityLogRepository
from jobdispatch.core.logging_config import get_logger
from jobdispatch.core.models.domain import ActivityType, ActorType, UserRole

logger = get_logger(__name__)


async def record_activity(
    repo: ActivityLogRepository,
    *,
    type: ActivityType,
    title: str,
    message: str,
    actor_type: ActorType,
    actor_id: str,
    actor_name: str,
    entity_type: Optional[str] = None,
    entity_id: Optional[str] = None,
    company_id: Optional[str] = None,
    provider_id: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
    commit: bool = False,
) -> ActivityLog:
    """Add an activity log entry.

    By default the entry is only flushed so it commits together with the
    change it describes.

    Args:
        repo: Activity log repository bound to the current session
        type: Category of the entry
        title: Short headline shown in the notification list
        message: Full notification text
        actor_type: Kind of account that caused the entry
        actor_id: Id of the acting user
        actor_name: Display name of the actor
        entity_type: Kind of record the entry is about (e.g. ``job_card``)
        entity_id: Id of that record
        company_id: Company whose users can see the entry
        provider_id: Provider the entry is addressed to
        metadata: Extra structured details
        commit: Commit immediately instead of flushing

    Returns:
        The new ActivityLog entity
    """
    log = ActivityLog(
        type=type.value,
        title=title,
        message=message,
        entity_type=entity_type,
        entity_id=entity_id,
        actor_type=actor_type.value,
        actor_id=actor_id,
        actor_name=actor_name,
        company_id=company_id,
        provider_id=provider_id,
    )
    log.set_metadata_dict(metadata or {})
    await repo.create(log, commit=commit)
    logger.debug(f"Activity recorded: type={log.type} entity={entity_type}:{entity_id} company={company_id}")
    return log


@dataclass(frozen=True)
class NotificationScope:
    """Which activity log rows a user may see. Both fields unset means everything."""

    company_id: Optional[str] = None
    provider_id: Optional[str] = None


def scope_for(user: User) -> Optional[NotificationScope]:
    """Derive the notification scope for a user.

    Admins see every entry, company users see their company's entries and
    providers see entries addressed to them.

    Returns:
        The scope, or None when the user can see nothing (a company user without a company)
    """
    if user.role == UserRole.admin.value:
        return NotificationScope()
    if user.role == UserRole.provider.value:
        return NotificationScope(provider_id=user.id)
    if user.company_id:
        return NotificationScope(company_id=user.company_id)
    return None
