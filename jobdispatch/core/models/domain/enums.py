"""Domain enums for job dispatch models."""

from __future__ import annotations

from enum import Enum


class UserRole(str, Enum):
    """Role attached to every login account."""

    admin = "admin"
    company = "company"
    provider = "provider"


class CompanyStatus(str, Enum):
    """Approval state of a registered company."""

    pending = "pending"  # Registered, waiting for an admin decision.
    approved = "approved"
    rejected = "rejected"


class ProviderStatus(str, Enum):
    """Availability of a service provider for new job cards."""

    active = "active"
    inactive = "inactive"


class JobCardStatus(str, Enum):
    """Lifecycle status of a job card."""

    pending = "pending"
    accepted = "accepted"
    declined = "declined"
    in_progress = "in_progress"
    completed = "completed"


class JobCardPriority(str, Enum):
    """Priority assigned to a job card by its company."""

    low = "low"
    medium = "medium"
    high = "high"


class ActivityType(str, Enum):
    """Category of an activity log entry."""

    job_card = "job_card"
    company = "company"
    provider = "provider"
    system = "system"
    approval = "approval"


class ActorType(str, Enum):
    """Kind of account that caused an activity log entry."""

    admin = "admin"
    company = "company"
    provider = "provider"
