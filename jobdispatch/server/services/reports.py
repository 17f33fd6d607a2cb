"""
Job card statistics for dashboards and company reports.

All functions are pure: they take already fetched job cards and a reference
time so they can be tested without a database.
"""

from __future__ import annotations

import math
from datetime import datetime, timedelta
from typing import Dict, Iterable, Optional, Sequence

from jobdispatch.core.database.base import utc_now
from jobdispatch.core.database.entities.job_cards import JobCard
from jobdispatch.core.models.domain import JobCardPriority, JobCardStatus
from jobdispatch.server.core import constant

SECONDS_PER_DAY = 60 * 60 * 24


def round_half_up(value: float, digits: int = 0) -> float:
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def percent(part: int, whole: int) -> int:
    """Integer percentage, 0 when ``whole`` is 0."""
    if whole <= 0:
        return 0
    return int(round_half_up(part / whole * 100))


def start_of_day(now: datetime) -> datetime:
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


def start_of_month(now: datetime) -> datetime:
    return start_of_day(now).replace(day=1)


def count_by_status(cards: Iterable[JobCard]) -> Dict[str, int]:
    counts = {status.value: 0 for status in JobCardStatus}
    for card in cards:
        if card.status in counts:
            counts[card.status] += 1
    return counts


def count_by_priority(cards: Iterable[JobCard]) -> Dict[str, int]:
    counts = {priority.value: 0 for priority in JobCardPriority}
    for card in cards:
        if card.priority in counts:
            counts[card.priority] += 1
    return counts


def completed_since(cards: Iterable[JobCard], since: datetime) -> int:
    return sum(
        1
        for card in cards
        if card.status == JobCardStatus.completed.value and card.completed_at is not None and card.completed_at >= since
    )


def average_completion_days(cards: Iterable[JobCard]) -> float:
    """Mean days from creation to completion over completed cards, one decimal."""
    durations = [
        (card.completed_at - card.created_at).total_seconds() / SECONDS_PER_DAY
        for card in cards
        if card.status == JobCardStatus.completed.value and card.completed_at and card.created_at
    ]
    if not durations:
        return 0.0
    return round_half_up(sum(durations) / len(durations), 1)


def is_overdue(card: JobCard, now: datetime) -> bool:
    if card.due_date is None:
        return False
    if card.status in (JobCardStatus.completed.value, JobCardStatus.declined.value):
        return False
    return card.due_date < now.date()


def build_company_report(cards: Sequence[JobCard], now: Optional[datetime] = None) -> dict:
    """Aggregate a company's job cards into report statistics.

    Args:
        cards: Every job card of the company
        now: Reference time (naive UTC), defaults to the current time

    Returns:
        Dict with total, by_status, by_priority, avg_completion_days,
        completion_rate, recent and overdue
    """
    now = now or utc_now()
    total = len(cards)
    by_status = count_by_status(cards)
    recent_cutoff = now - timedelta(days=constant.REPORT_RECENT_DAYS)

    completion_rate = round_half_up(by_status[JobCardStatus.completed.value] / total * 100, 1) if total else 0.0

    return {
        "total": total,
        "by_status": by_status,
        "by_priority": count_by_priority(cards),
        "avg_completion_days": average_completion_days(cards),
        "completion_rate": completion_rate,
        "recent": sum(1 for card in cards if card.created_at >= recent_cutoff),
        "overdue": sum(1 for card in cards if is_overdue(card, now)),
    }


def build_company_stats(cards: Sequence[JobCard], total_providers: int, now: Optional[datetime] = None) -> dict:
    now = now or utc_now()
    by_status = count_by_status(cards)
    return {
        "total_providers": total_providers,
        "active_job_cards": len(cards) - by_status[JobCardStatus.completed.value],
        "completed_today": completed_since(cards, start_of_day(now)),
        "pending_jobs": by_status[JobCardStatus.pending.value],
        "completion_rate": percent(by_status[JobCardStatus.completed.value], len(cards)),
    }


def build_provider_stats(cards: Sequence[JobCard], now: Optional[datetime] = None) -> dict:
    now = now or utc_now()
    by_status = count_by_status(cards)
    completed = by_status[JobCardStatus.completed.value]
    return {
        "pending": by_status[JobCardStatus.pending.value],
        "accepted": by_status[JobCardStatus.accepted.value],
        "in_progress": by_status[JobCardStatus.in_progress.value],
        "completed": completed,
        "total": len(cards),
        "completed_today": completed_since(cards, start_of_day(now)),
        "completion_rate": percent(completed, len(cards)),
    }

