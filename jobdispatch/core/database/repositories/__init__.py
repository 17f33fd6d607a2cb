"""
Repository layer.

One repository per table, all built on ``AsyncBaseRepository`` and grouped
into a ``RepoBundle`` that shares a single session.
"""

from .activity_logs import ActivityLogRepository
from .base import AsyncBaseRepository, QueryBuilder
from .bundle import RepoBundle, build_repos
from .companies import CompanyRepository
from .job_cards import JobCardRepository
from .service_providers import ServiceProviderRepository
from .users import UserRepository

__all__ = [
    "ActivityLogRepository",
    "AsyncBaseRepository",
    "CompanyRepository",
    "JobCardRepository",
    "QueryBuilder",
    "RepoBundle",
    "ServiceProviderRepository",
    "UserRepository",
    "build_repos",
]
