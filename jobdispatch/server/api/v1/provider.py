"""
Provider Endpoints.

Job cards assigned to the signed-in service provider and the status changes
that move them through their lifecycle.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Query

from jobdispatch.core.errors import NotFoundError, PermissionDeniedError
from jobdispatch.core.logging_config import get_logger
from jobdispatch.core.models.domain import ActivityType, ActorType, JobCardStatus
from jobdispatch.core.models.io import JobCardListItem, JobCardRead, JobCardStatusUpdate
from jobdispatch.core.monitoring import log_job_card_transition
from jobdispatch.server.services import lifecycle
from jobdispatch.server.services.activity_log import record_activity
from jobdispatch.server.services.deps import ProviderCtx, ReposDep
from jobdispatch.server.services.listing import job_card_items

logger = get_logger(__name__)

router = APIRouter()

STATUS_VERBS = {
    JobCardStatus.accepted.value: "accepted",
    JobCardStatus.declined.value: "declined",
    JobCardStatus.in_progress.value: "started working on",
    JobCardStatus.completed.value: "completed",
}


@router.get(
    "/job-cards",
    response_model=List[JobCardListItem],
    summary="List Assigned Job Cards",
    description="List job cards assigned to the signed-in provider, newest first, with company names.",
)
async def list_job_cards(
    ctx: ProviderCtx,
    repos: ReposDep,
    status: Optional[JobCardStatus] = None,
    search: Optional[str] = Query(default=None, description="Case-insensitive match on title, description or location"),
    limit: Optional[int] = Query(default=None, ge=1, le=500),
    offset: Optional[int] = Query(default=None, ge=0),
) -> List[JobCardListItem]:
    filters = {
        "provider_id": ctx.provider.id,
        "status": status.value if status else None,
        "search": search,
    }
    cards = await repos.job_cards.list(limit=limit, offset=offset, filters=filters)
    return await job_card_items(cards, repos)


@router.put(
    "/job-cards/{job_card_id}",
    response_model=JobCardRead,
    summary="Update Job Card Status",
    description=(
        "Move an assigned job card through its lifecycle: pending to accepted or declined, "
        "accepted to in_progress, in_progress to completed. Completing requires notes."
    ),
    responses={
        400: {"description": "Transition not allowed or completion notes missing"},
        403: {"description": "Job card is assigned to another provider"},
        404: {"description": "Job card not found"},
    },
)
async def update_job_card_status(
    job_card_id: str, payload: JobCardStatusUpdate, ctx: ProviderCtx, repos: ReposDep
) -> JobCardRead:
    """
    Update the status of an assigned job card.

    - **status**: accepted, declined, in_progress or completed.
    - **notes**: Required and non-blank when completing.
    - **images**: Public URLs of uploaded photos, stored when completing.
    """
    card = await repos.job_cards.get_by_id(job_card_id)
    if card is None:
        raise NotFoundError("Job card not found")
    if card.provider_id != ctx.provider.id:
        raise PermissionDeniedError("Unauthorized - You can only update your own job cards")

    requested = payload.status.value
    previous = lifecycle.apply_provider_status(card, requested, payload.notes, payload.images)
    await repos.job_cards.update(card, commit=False)

    verb = STATUS_VERBS.get(requested, "updated")
    message = f'Provider {ctx.provider.name} {verb} job card "{card.title}"'
    if payload.notes:
        message += " with notes"
    if payload.images:
        message += f" with {len(payload.images)} image(s)"

    await record_activity(
        repos.activity_logs,
        type=ActivityType.job_card,
        title=f"Job Card {verb}",
        message=message,
        entity_type="job_card",
        entity_id=card.id,
        actor_type=ActorType.provider,
        actor_id=ctx.provider.id,
        actor_name=ctx.provider.name,
        company_id=card.company_id,
        metadata={
            "previous_status": previous,
            "new_status": requested,
            "has_notes": bool(payload.notes and payload.notes.strip()),
            "images_count": len(payload.images),
        },
    )
    await repos.session.commit()
    await repos.session.refresh(card)

    log_job_card_transition(card.id, previous, requested, ctx.provider.id)
    logger.info(f"Job card {card.id} moved {previous} -> {requested} by provider {ctx.provider.id}")
    return JobCardRead.model_validate(card)
