"""
I/O models for API requests and responses.

These models define the contract between API endpoints and clients and are
kept separate from database entities.

Modules:
- auth: Registration, login and account models
- companies: Company read/update models
- users: Admin user list rows
- providers: Service provider models
- job_cards: Job card models and lifecycle requests
- notifications: Activity feed models
- dashboard: Dashboard statistics and company reports
- storage: Upload responses
"""

from .auth import (
    AuthUserRead,
    ChangePasswordRequest,
    CheckProfileRequest,
    CheckProfileResponse,
    CompanySummary,
    CreateAdminRequest,
    LoginRequest,
    LoginResponse,
    MeResponse,
    MessageResponse,
    RegisterRequest,
    RegisterResponse,
    SessionRead,
)
from .companies import CompanyRead, CompanySettingsUpdate, CompanyWithStats
from .dashboard import AdminStats, CompanyReport, CompanyStats, ProviderStats
from .job_cards import (
    JobCardAuditResponse,
    JobCardCreate,
    JobCardEditResponse,
    JobCardListItem,
    JobCardRead,
    JobCardStatusUpdate,
    JobCardUpdate,
)
from .notifications import MarkReadResponse, NotificationList, NotificationRead
from .providers import ProviderCreate, ProviderCreated, ProviderRead, ProviderUpdate, ProviderWithStats
from .storage import UploadResponse
from .users import UserListItem

__all__ = [
    "AdminStats",
    "AuthUserRead",
    "ChangePasswordRequest",
    "CheckProfileRequest",
    "CheckProfileResponse",
    "CompanyRead",
    "CompanyReport",
    "CompanySettingsUpdate",
    "CompanyStats",
    "CompanySummary",
    "CompanyWithStats",
    "CreateAdminRequest",
    "JobCardAuditResponse",
    "JobCardCreate",
    "JobCardEditResponse",
    "JobCardListItem",
    "JobCardRead",
    "JobCardStatusUpdate",
    "JobCardUpdate",
    "LoginRequest",
    "LoginResponse",
    "MarkReadResponse",
    "MeResponse",
    "MessageResponse",
    "NotificationList",
    "NotificationRead",
    "ProviderCreate",
    "ProviderCreated",
    "ProviderRead",
    "ProviderStats",
    "ProviderUpdate",
    "ProviderWithStats",
    "RegisterRequest",
    "RegisterResponse",
    "SessionRead",
    "UploadResponse",
    "UserListItem",
]
