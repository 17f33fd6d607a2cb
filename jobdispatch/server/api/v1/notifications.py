"""
Notification Endpoints.

Clients poll the activity log for new notifications. Visibility follows the
caller's role: admins see everything, company users see their company's
entries and providers see entries addressed to them.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Query

from jobdispatch.core.errors import NotFoundError
from jobdispatch.core.logging_config import get_logger
from jobdispatch.core.models.io import MarkReadResponse, NotificationList, NotificationRead
from jobdispatch.server.core import constant
from jobdispatch.server.services.activity_log import scope_for
from jobdispatch.server.services.deps import CurrentUser, ReposDep

logger = get_logger(__name__)

router = APIRouter()


@router.get(
    "",
    response_model=NotificationList,
    summary="List Notifications",
    description=(
        "Newest notifications visible to the caller and the unread count. "
        f"Clients are expected to poll about every {constant.NOTIFICATION_POLL_INTERVAL_SECONDS} seconds; "
        "pass `since` to fetch only entries newer than the last poll."
    ),
)
async def list_notifications(
    user: CurrentUser,
    repos: ReposDep,
    limit: int = Query(default=constant.NOTIFICATION_DEFAULT_LIMIT, ge=1),
    since: Optional[datetime] = Query(default=None, description="Only entries created after this time (UTC)"),
) -> NotificationList:
    scope = scope_for(user)
    if scope is None:
        return NotificationList(notifications=[], unread_count=0)

    # Stored timestamps are naive UTC
    if since is not None and since.tzinfo is not None:
        since = since.astimezone(timezone.utc).replace(tzinfo=None)

    logs = await repos.activity_logs.list_visible(
        company_id=scope.company_id,
        provider_id=scope.provider_id,
        since=since,
        limit=min(limit, constant.NOTIFICATION_MAX_LIMIT),
    )
    unread = await repos.activity_logs.count_unread(company_id=scope.company_id, provider_id=scope.provider_id)
    return NotificationList(
        notifications=[NotificationRead.from_entity(log) for log in logs],
        unread_count=unread,
    )


@router.post(
    "/read-all",
    response_model=MarkReadResponse,
    summary="Mark All Notifications Read",
    description="Mark every unread notification visible to the caller as read.",
)
async def mark_all_read(user: CurrentUser, repos: ReposDep) -> MarkReadResponse:
    scope = scope_for(user)
    if scope is None:
        return MarkReadResponse(message="No notifications to update", updated=0)
    updated = await repos.activity_logs.mark_all_read(company_id=scope.company_id, provider_id=scope.provider_id)
    logger.debug(f"Marked {updated} notifications read for user {user.id}")
    return MarkReadResponse(message="All notifications marked as read", updated=updated)


@router.post(
    "/{notification_id}/read",
    response_model=MarkReadResponse,
    summary="Mark Notification Read",
    description="Mark one notification as read.",
    responses={404: {"description": "Notification not found or not visible"}},
)
async def mark_read(notification_id: str, user: CurrentUser, repos: ReposDep) -> MarkReadResponse:
    scope = scope_for(user)
    log = None
    if scope is not None:
        log = await repos.activity_logs.get_visible(
            notification_id, company_id=scope.company_id, provider_id=scope.provider_id
        )
    if log is None:
        raise NotFoundError("Notification not found")

    log.read = True
    await repos.activity_logs.update(log)
    return MarkReadResponse(message="Notification marked as read", updated=1)
