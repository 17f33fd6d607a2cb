"""
Request dependencies.

Database sessions, repository bundles, the authenticated user and role
checks for API endpoints.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Callable, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from jobdispatch.core.database import get_session
from jobdispatch.core.database.entities import Company, ServiceProvider, User
from jobdispatch.core.database.repositories import RepoBundle, build_repos
from jobdispatch.core.errors import AuthenticationError, InvalidRequestError, NotFoundError, PermissionDeniedError
from jobdispatch.core.models.domain import UserRole
from jobdispatch.core.security import decode_access_token

from .storage import LocalPhotoStorage, get_storage

bearer_scheme = HTTPBearer(auto_error=False)

SessionDep = Annotated[AsyncSession, Depends(get_session)]


def get_repos(session: SessionDep) -> RepoBundle:
    return build_repos(session=session)


ReposDep = Annotated[RepoBundle, Depends(get_repos)]
StorageDep = Annotated[LocalPhotoStorage, Depends(get_storage)]


async def get_current_user(
    repos: ReposDep,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> User:
    """Resolve the bearer token to a user.

    Raises:
        AuthenticationError: If the token is missing, invalid or expired, or its user no longer exists
    """
    if credentials is None or credentials.scheme.lower() != "bearer" or not credentials.credentials:
        raise AuthenticationError("Unauthorized")
    claims = decode_access_token(credentials.credentials)
    user = await repos.users.get_by_id(claims.user_id)
    if user is None:
        raise AuthenticationError("Invalid or expired token")
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]


def require_role(*roles: UserRole) -> Callable:
    """Build a dependency that only lets users with one of ``roles`` through."""
    allowed = {role.value for role in roles}
    label = " or ".join(role.value.capitalize() for role in roles)

    async def _check(user: CurrentUser) -> User:
        if user.role not in allowed:
            raise PermissionDeniedError(f"Unauthorized - {label} role required")
        return user

    return _check


AdminUser = Annotated[User, Depends(require_role(UserRole.admin))]
CompanyUser = Annotated[User, Depends(require_role(UserRole.company))]
ProviderUser = Annotated[User, Depends(require_role(UserRole.provider))]


@dataclass(frozen=True)
class CompanyContext:
    user: User
    company: Company


@dataclass(frozen=True)
class ProviderContext:
    user: User
    provider: ServiceProvider


async def get_company_context(user: CompanyUser, repos: ReposDep) -> CompanyContext:
    """Load the company of a company manager.

    Raises:
        InvalidRequestError: If the user is not linked to a company
        NotFoundError: If the linked company no longer exists
    """
    if not user.company_id:
        raise InvalidRequestError("User is not associated with a company")
    company = await repos.companies.get_by_id(user.company_id)
    if company is None:
        raise NotFoundError("Company not found")
    return CompanyContext(user=user, company=company)


async def get_provider_context(user: ProviderUser, repos: ReposDep) -> ProviderContext:
    provider = await repos.providers.get_by_id(user.id)
    if provider is None:
        raise NotFoundError("Provider record not found")
    return ProviderContext(user=user, provider=provider)


CompanyCtx = Annotated[CompanyContext, Depends(get_company_context)]
ProviderCtx = Annotated[ProviderContext, Depends(get_provider_context)]
