"""
Authentication Endpoints.

Company self-registration, sign-in with bearer tokens, account profile and
password management, and admin bootstrap.
"""

from __future__ import annotations

import secrets

from fastapi import APIRouter, status
from sqlalchemy.exc import IntegrityError

from jobdispatch.core.database.base import utc_now
from jobdispatch.core.database.entities import Company, User
from jobdispatch.core.errors import (
    AuthenticationError,
    ConflictError,
    InvalidRequestError,
    PermissionDeniedError,
)
from jobdispatch.core.logging_config import get_logger
from jobdispatch.core.models.domain import CompanyStatus, UserRole
from jobdispatch.core.models.io import (
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
from jobdispatch.core.security import create_access_token, hash_password, verify_password
from jobdispatch.server.core.config import settings
from jobdispatch.server.services.deps import CurrentUser, ReposDep

logger = get_logger(__name__)

router = APIRouter()


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register Company",
    description="Register a new company and its manager account. The company stays pending until an admin approves it.",
    response_description="Ids of the created company and user.",
    responses={
        201: {"description": "Company registered, awaiting approval"},
        409: {"description": "Email or company name already in use"},
        422: {"description": "Invalid registration data"},
    },
)
async def register(payload: RegisterRequest, repos: ReposDep) -> RegisterResponse:
    """
    Register a company.

    Creates the company (status ``pending``) and its ``company`` user in a
    single transaction; if either insert fails neither is kept.

    - **company_name**: 2-100 characters, letters, digits, spaces and ``&.,'-``.
    - **contact_person**: 2-50 characters, letters, spaces, hyphens and apostrophes.
    - **email**: Login email, stored lower-cased.
    - **phone**: Exactly 10 digits once formatting is removed.
    - **password** / **confirm_password**: Strong password, entered twice.
    """
    if await repos.users.get_by_email(payload.email):
        raise ConflictError("An account with this email already exists.")
    if await repos.companies.get_by_name(payload.company_name):
        raise ConflictError("A company with this name already exists.")

    company = Company(
        name=payload.company_name,
        email=payload.email,
        contact_person=payload.contact_person,
        phone=payload.phone,
        status=CompanyStatus.pending.value,
    )
    user = User(
        email=payload.email,
        password_hash=hash_password(payload.password),
        role=UserRole.company.value,
        company_id=company.id,
        full_name=payload.contact_person,
        phone=payload.phone,
    )
    company.created_by = user.id

    try:
        await repos.companies.create(company, commit=False)
        await repos.users.create(user, commit=False)
        await repos.session.commit()
    except IntegrityError as e:
        # A concurrent registration took the email or company name after the checks above
        await repos.session.rollback()
        logger.warning(f"Registration conflict for {payload.email}: {e.orig}")
        raise ConflictError("An account with this email or company name already exists.") from e
    except Exception as e:
        await repos.session.rollback()
        logger.error(f"Registration failed for {payload.email}: {e}", exc_info=True)
        raise

    logger.info(f"Company registered: company_id={company.id} user_id={user.id}")
    return RegisterResponse(
        message="Registration successful! Your account is pending approval.",
        user_id=user.id,
        company_id=company.id,
        requires_approval=True,
    )


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Sign In",
    description="Exchange email and password for a bearer access token.",
    response_description="The signed-in user and a new session.",
    responses={
        401: {"description": "Invalid email or password"},
        403: {"description": "Company account is not approved"},
    },
)
async def login(payload: LoginRequest, repos: ReposDep) -> LoginResponse:
    """
    Sign in.

    Company managers can only sign in once their company is approved. The
    response for a blocked company carries ``requires_approval: true``.
    """
    user = await repos.users.get_by_email(payload.email)
    if user is None or not verify_password(payload.password, user.password_hash):
        raise AuthenticationError("Invalid email or password")

    if user.role == UserRole.company.value:
        company = await repos.companies.get_by_id(user.company_id) if user.company_id else None
        if company is None:
            raise PermissionDeniedError("User profile not found. Please contact support.")
        if company.status == CompanyStatus.rejected.value:
            raise PermissionDeniedError(
                "Your company registration was rejected. Please contact support.",
                extra={"requires_approval": True},
            )
        if not company.is_approved:
            raise PermissionDeniedError(
                "Your company account is pending approval. Please contact support.",
                extra={"requires_approval": True},
            )

    user.last_sign_in_at = utc_now()
    await repos.users.update(user)

    token = create_access_token(user.id, user.role)
    logger.info(f"User signed in: user_id={user.id} role={user.role}")
    return LoginResponse(
        user=AuthUserRead.model_validate(user),
        session=SessionRead(access_token=token.token, expires_at=token.expires_at),
    )


@router.get(
    "/me",
    response_model=MeResponse,
    summary="Current User",
    description="Return the signed-in user with a summary of their company.",
)
async def me(user: CurrentUser, repos: ReposDep) -> MeResponse:
    company = await repos.companies.get_by_id(user.company_id) if user.company_id else None
    return MeResponse(
        id=user.id,
        email=user.email,
        role=user.role,
        company_id=user.company_id,
        full_name=user.full_name,
        phone=user.phone,
        last_sign_in_at=user.last_sign_in_at,
        company=CompanySummary.model_validate(company) if company else None,
    )


@router.post(
    "/logout",
    response_model=MessageResponse,
    summary="Sign Out",
    description="Sign out. Tokens are stateless, so clients simply discard theirs.",
)
async def logout() -> MessageResponse:
    return MessageResponse(message="Logged out successfully")


@router.post(
    "/change-password",
    response_model=MessageResponse,
    summary="Change Password",
    description="Change the password of the signed-in user after verifying the current one.",
    responses={401: {"description": "Current password is incorrect"}},
)
async def change_password(payload: ChangePasswordRequest, user: CurrentUser, repos: ReposDep) -> MessageResponse:
    if not verify_password(payload.current_password, user.password_hash):
        raise AuthenticationError("Current password is incorrect")
    user.password_hash = hash_password(payload.new_password)
    await repos.users.update(user)
    logger.info(f"Password changed: user_id={user.id}")
    return MessageResponse(message="Password updated successfully")


@router.post(
    "/create-admin",
    response_model=AuthUserRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Admin",
    description=(
        "Create an admin account. When ADMIN_CREATION_KEY is configured the matching key is required; "
        "otherwise only the first admin can be created this way."
    ),
    responses={
        403: {"description": "Missing or wrong admin creation key"},
        409: {"description": "Email already in use"},
    },
)
async def create_admin(payload: CreateAdminRequest, repos: ReposDep) -> AuthUserRead:
    """
    Create an admin user.

    - **email**: Login email of the admin.
    - **password**: At least 8 characters.
    - **admin_key**: Required when ``ADMIN_CREATION_KEY`` is set.
    """
    configured_key = settings.auth.admin_creation_key
    if configured_key:
        if not payload.admin_key or not secrets.compare_digest(payload.admin_key, configured_key):
            raise PermissionDeniedError("Invalid admin creation key")
    elif await repos.users.exists_with_role(UserRole.admin.value):
        raise PermissionDeniedError(
            "An admin user already exists. Use the admin creation key to create additional admins.",
            extra={"requires_key": True},
        )

    if await repos.users.get_by_email(payload.email):
        raise ConflictError("A user with this email already exists.")

    admin = User(
        email=payload.email,
        password_hash=hash_password(payload.password),
        role=UserRole.admin.value,
    )
    await repos.users.create(admin)
    logger.info(f"Admin user created: user_id={admin.id}")
    return AuthUserRead.model_validate(admin)


@router.post(
    "/check-profile",
    response_model=CheckProfileResponse,
    summary="Check Profile",
    description="Diagnostic lookup of a user profile by id or email. Disabled in production.",
    responses={
        400: {"description": "Neither user_id nor email given"},
        403: {"description": "Not available in production"},
    },
)
async def check_profile(payload: CheckProfileRequest, repos: ReposDep) -> CheckProfileResponse:
    if settings.is_production:
        raise PermissionDeniedError("This endpoint is only available in development")
    if not payload.user_id and not payload.email:
        raise InvalidRequestError("Please provide user_id or email")

    if payload.user_id:
        user = await repos.users.get_by_id(payload.user_id)
    else:
        user = await repos.users.get_by_email(payload.email)

    if user is None:
        return CheckProfileResponse(exists=False)

    company = await repos.companies.get_by_id(user.company_id) if user.company_id else None
    return CheckProfileResponse(
        exists=True,
        user=AuthUserRead.model_validate(user),
        company=CompanySummary.model_validate(company) if company else None,
    )
