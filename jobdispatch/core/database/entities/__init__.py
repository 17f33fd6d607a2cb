"""
Database entity models.

Modules:
- companies: Registered tenant companies
- users: Login accounts for admins, company managers and providers
- service_providers: Field workers belonging to a company
- job_cards: Work orders and their lifecycle state
- activity_logs: Activity feed used for notifications
"""

from .activity_logs import ActivityLog
from .companies import Company
from .job_cards import JobCard
from .service_providers import ServiceProvider
from .users import User

__all__ = [
    "ActivityLog",
    "Company",
    "JobCard",
    "ServiceProvider",
    "User",
]
