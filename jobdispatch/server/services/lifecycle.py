"""
Job card lifecycle rules.

Pure functions that validate and apply status changes made by providers and
edits made by companies. They mutate the entity in place and never touch the
database, so callers decide when to persist.

Lifecycle::

    pending -> accepted | declined
    accepted -> in_progress
    in_progress -> completed
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, FrozenSet, List, Mapping, Optional

from jobdispatch.core.database.base import utc_now
from jobdispatch.core.database.entities.job_cards import JobCard
from jobdispatch.core.errors import ConflictError, InvalidRequestError, InvalidTransitionError
from jobdispatch.core.models.domain import JobCardStatus

ALLOWED_TRANSITIONS: Mapping[str, FrozenSet[str]] = {
    JobCardStatus.pending.value: frozenset({JobCardStatus.accepted.value, JobCardStatus.declined.value}),
    JobCardStatus.accepted.value: frozenset({JobCardStatus.in_progress.value}),
    JobCardStatus.in_progress.value: frozenset({JobCardStatus.completed.value}),
    JobCardStatus.declined.value: frozenset(),
    JobCardStatus.completed.value: frozenset(),
}

# Statuses in which a company may still hand the card to another provider
REASSIGNABLE_STATUSES: FrozenSet[str] = frozenset({JobCardStatus.pending.value, JobCardStatus.declined.value})

EDIT_SNAPSHOT_FIELDS = (
    "title",
    "description",
    "provider_id",
    "priority",
    "location",
    "due_date",
    "status",
    "updated_at",
)


def can_transition(current: str, requested: str) -> bool:
    return requested in ALLOWED_TRANSITIONS.get(current, frozenset())


def ensure_transition(current: str, requested: str) -> None:
    """Raise ``InvalidTransitionError`` unless ``current -> requested`` is allowed."""
    if not can_transition(current, requested):
        raise InvalidTransitionError(current, requested)


def apply_provider_status(
    card: JobCard,
    status: str,
    notes: Optional[str] = None,
    images: Optional[List[str]] = None,
    now: Optional[datetime] = None,
) -> str:
    """Move a job card to ``status`` on behalf of its provider.

    Completing a card requires non-blank notes. It records the completion
    time, the trimmed notes and any image URLs.

    Args:
        card: Job card to update in place
        status: Requested status
        notes: Provider notes; required when completing
        images: Public URLs of completion photos
        now: Completion timestamp override (naive UTC)

    Returns:
        The status the card had before the change

    Raises:
        InvalidTransitionError: If the lifecycle does not allow the change
        InvalidRequestError: If completion notes are missing
    """
    previous = card.status
    ensure_transition(previous, status)

    if status == JobCardStatus.completed.value:
        if not notes or not notes.strip():
            raise InvalidRequestError("Completion notes are required")
        card.completed_at = now or utc_now()
        card.completion_notes = notes.strip()
        if images:
            card.set_completion_images_list(list(images))

    card.status = status
    card.updated_at = now or utc_now()
    return previous


def snapshot_for_edit(card: JobCard) -> Dict[str, Any]:
    """Capture the fields a company edit can change, JSON friendly."""
    snapshot: Dict[str, Any] = {}
    for field in EDIT_SNAPSHOT_FIELDS:
        value = getattr(card, field)
        snapshot[field] = value.isoformat() if hasattr(value, "isoformat") else value
    return snapshot


@dataclass(frozen=True)
class EditOutcome:
    """Result of applying a company edit to a job card."""

    previous_version: Dict[str, Any]
    provider_changed: bool
    recalled: bool
    previous_provider_id: Optional[str]


def apply_company_edit(card: JobCard, changes: Mapping[str, Any], now: Optional[datetime] = None) -> EditOutcome:
    """Apply a company edit to a job card.

    The provider may only change while the card is pending or declined.
    Changing it recalls the card: the status goes back to ``pending`` so the
    new provider can accept or decline it.

    Args:
        card: Job card to update in place
        changes: New values for title, description, provider_id, priority, location and due_date
        now: Update timestamp override (naive UTC)

    Raises:
        InvalidRequestError: If the provider changes on a card that is already underway
    """
    previous_version = snapshot_for_edit(card)
    previous_provider_id = card.provider_id
    new_provider_id = changes.get("provider_id", card.provider_id)
    provider_changed = new_provider_id != card.provider_id

    if provider_changed and card.status not in REASSIGNABLE_STATUSES:
        raise InvalidRequestError(
            f"Provider cannot be changed. Job card is already {card.status}.",
            extra={"details": "Only pending or declined job cards can have their provider changed."},
        )

    for field, value in changes.items():
        if hasattr(value, "value"):
            value = value.value
        setattr(card, field, value)

    if provider_changed:
        card.status = JobCardStatus.pending.value

    card.set_previous_version_dict(previous_version)
    card.updated_at = now or utc_now()
    return EditOutcome(
        previous_version=previous_version,
        provider_changed=provider_changed,
        recalled=provider_changed,
        previous_provider_id=previous_provider_id,
    )


def mark_audited(card: JobCard, now: Optional[datetime] = None) -> None:
    """Record that the company reviewed a completed job card.

    Raises:
        InvalidRequestError: If the card is not completed
        ConflictError: If the card was already audited
    """
    if card.status != JobCardStatus.completed.value:
        raise InvalidRequestError(
            "Job card is not completed",
            extra={"details": "Only completed job cards can be audited."},
        )
    if card.audited_at is not None:
        raise ConflictError("Job card has already been audited")
    card.audited_at = now or utc_now()
    card.updated_at = card.audited_at
