"""Domain models shared by the database layer, services and API."""

from .enums import (
    ActivityType,
    ActorType,
    CompanyStatus,
    JobCardPriority,
    JobCardStatus,
    ProviderStatus,
    UserRole,
)

__all__ = [
    "ActivityType",
    "ActorType",
    "CompanyStatus",
    "JobCardPriority",
    "JobCardStatus",
    "ProviderStatus",
    "UserRole",
]
