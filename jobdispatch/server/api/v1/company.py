"""
Company Endpoints.

Everything a company manager does: dispatching and editing job cards,
managing service providers, company settings and reports. All routes are
scoped to the caller's own company.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Query, status
from sqlalchemy.exc import IntegrityError

from jobdispatch.core.database.entities import JobCard, ServiceProvider, User
from jobdispatch.core.errors import ConflictError, NotFoundError
from jobdispatch.core.logging_config import get_logger
from jobdispatch.core.models.domain import (
    ActivityType,
    ActorType,
    JobCardPriority,
    JobCardStatus,
    ProviderStatus,
    UserRole,
)
from jobdispatch.core.models.io import (
    CompanyRead,
    CompanyReport,
    CompanySettingsUpdate,
    JobCardAuditResponse,
    JobCardCreate,
    JobCardEditResponse,
    JobCardListItem,
    JobCardRead,
    JobCardUpdate,
    ProviderCreate,
    ProviderCreated,
    ProviderUpdate,
    ProviderWithStats,
)
from jobdispatch.core.security import generate_temporary_password, hash_password
from jobdispatch.server.core import constant
from jobdispatch.server.services import lifecycle, reports
from jobdispatch.server.services.activity_log import record_activity
from jobdispatch.server.services.deps import CompanyCtx, ReposDep
from jobdispatch.server.services.listing import job_card_items

logger = get_logger(__name__)

router = APIRouter()


# =====================================================================
# Job cards
# =====================================================================


@router.get(
    "/job-cards",
    response_model=List[JobCardListItem],
    summary="List Company Job Cards",
    description="List this company's job cards, newest first, with provider names.",
)
async def list_job_cards(
    ctx: CompanyCtx,
    repos: ReposDep,
    status: Optional[JobCardStatus] = None,
    priority: Optional[JobCardPriority] = None,
    search: Optional[str] = Query(default=None, description="Case-insensitive match on title, description or location"),
    limit: Optional[int] = Query(default=None, ge=1, le=500),
    offset: Optional[int] = Query(default=None, ge=0),
) -> List[JobCardListItem]:
    filters = {
        "company_id": ctx.company.id,
        "status": status.value if status else None,
        "priority": priority.value if priority else None,
        "search": search,
    }
    cards = await repos.job_cards.list(limit=limit, offset=offset, filters=filters)
    return await job_card_items(cards, repos)


async def _active_provider(repos: ReposDep, provider_id: str, company_id: str) -> ServiceProvider:
    provider = await repos.providers.get_for_company(provider_id, company_id)
    if provider is None or not provider.is_active:
        raise NotFoundError("Provider not found, inactive, or does not belong to your company")
    return provider


@router.post(
    "/job-cards",
    response_model=JobCardRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Job Card",
    description="Create a job card and assign it to one of this company's active providers.",
    responses={404: {"description": "Provider not found, inactive, or from another company"}},
)
async def create_job_card(payload: JobCardCreate, ctx: CompanyCtx, repos: ReposDep) -> JobCardRead:
    """
    Create a job card.

    The card starts ``pending`` until the assigned provider accepts or declines it.

    - **title**: At least 3 characters.
    - **description**: At least 10 characters.
    - **provider_id**: Active provider of this company.
    - **priority**: low, medium or high.
    - **location**: At least 3 characters.
    - **due_date**: Optional due date (YYYY-MM-DD).
    """
    provider = await _active_provider(repos, payload.provider_id, ctx.company.id)

    card = JobCard(
        company_id=ctx.company.id,
        provider_id=provider.id,
        title=payload.title,
        description=payload.description,
        priority=payload.priority.value,
        location=payload.location,
        due_date=payload.due_date,
        status=JobCardStatus.pending.value,
    )
    await repos.job_cards.create(card, commit=False)
    await record_activity(
        repos.activity_logs,
        type=ActivityType.job_card,
        title=f'New job card "{card.title}"',
        message=f'{ctx.company.name} assigned job card "{card.title}" to {provider.name}',
        entity_type="job_card",
        entity_id=card.id,
        actor_type=ActorType.company,
        actor_id=ctx.user.id,
        actor_name=ctx.company.name,
        company_id=ctx.company.id,
        provider_id=provider.id,
        metadata={"priority": card.priority, "provider_id": provider.id},
    )
    await repos.session.commit()
    await repos.session.refresh(card)
    logger.info(f"Job card created: id={card.id} company={ctx.company.id} provider={provider.id}")
    return JobCardRead.model_validate(card)


async def _company_card(repos: ReposDep, job_card_id: str, company_id: str) -> JobCard:
    card = await repos.job_cards.get_by_id(job_card_id)
    if card is None or card.company_id != company_id:
        raise NotFoundError("Job card not found")
    return card


@router.put(
    "/job-cards/{job_card_id}",
    response_model=JobCardEditResponse,
    summary="Edit Job Card",
    description=(
        "Replace the details of a job card. Changing the provider is only allowed while the card is "
        "pending or declined and recalls it: the status goes back to pending for the new provider."
    ),
    responses={
        400: {"description": "Provider cannot be changed once the card is underway"},
        404: {"description": "Job card or provider not found"},
    },
)
async def edit_job_card(
    job_card_id: str, payload: JobCardUpdate, ctx: CompanyCtx, repos: ReposDep
) -> JobCardEditResponse:
    card = await _company_card(repos, job_card_id, ctx.company.id)
    new_provider = await repos.providers.get_for_company(payload.provider_id, ctx.company.id)
    if new_provider is None:
        raise NotFoundError("Provider not found or does not belong to your company")

    outcome = lifecycle.apply_company_edit(card, payload.model_dump())
    await repos.job_cards.update(card, commit=False)

    if outcome.recalled:
        names = await repos.providers.get_names([outcome.previous_provider_id] if outcome.previous_provider_id else [])
        old_name = names.get(outcome.previous_provider_id, "provider")
        title = f'Job card "{card.title}" recalled and reassigned'
        message = f"Job card was recalled from {old_name} and reassigned to {new_provider.name}"
    else:
        title = f'Job card "{card.title}" updated'
        message = f"Job card details were updated by {ctx.company.name}"

    await record_activity(
        repos.activity_logs,
        type=ActivityType.job_card,
        title=title,
        message=message,
        entity_type="job_card",
        entity_id=card.id,
        actor_type=ActorType.company,
        actor_id=ctx.user.id,
        actor_name=ctx.company.name,
        company_id=ctx.company.id,
        provider_id=card.provider_id,
        metadata={
            "previous_version": outcome.previous_version,
            "provider_changed": outcome.provider_changed,
            "recalled": outcome.recalled,
        },
    )
    await repos.session.commit()
    await repos.session.refresh(card)
    logger.info(f"Job card edited: id={card.id} recalled={outcome.recalled}")

    return JobCardEditResponse(
        job_card=JobCardRead.model_validate(card),
        recalled=outcome.recalled,
        previous_version=outcome.previous_version,
        message=(
            "Job card updated and recalled. New provider has been assigned."
            if outcome.recalled
            else "Job card updated successfully"
        ),
    )


@router.post(
    "/job-cards/{job_card_id}/audit",
    response_model=JobCardAuditResponse,
    summary="Audit Job Card",
    description="Record that the company reviewed and approved a completed job card. The provider is notified.",
    responses={
        400: {"description": "Job card is not completed"},
        404: {"description": "Job card not found"},
        409: {"description": "Job card already audited"},
    },
)
async def audit_job_card(job_card_id: str, ctx: CompanyCtx, repos: ReposDep) -> JobCardAuditResponse:
    card = await _company_card(repos, job_card_id, ctx.company.id)
    lifecycle.mark_audited(card)
    await repos.job_cards.update(card, commit=False)

    provider = await repos.providers.get_by_id(card.provider_id) if card.provider_id else None
    provider_name = provider.name if provider else "provider"

    await record_activity(
        repos.activity_logs,
        type=ActivityType.job_card,
        title=f'Job card "{card.title}" audited',
        message=(
            f"Company {ctx.company.name} has audited and approved the completion of "
            f'job card "{card.title}" by {provider_name}.'
        ),
        entity_type="job_card",
        entity_id=card.id,
        actor_type=ActorType.company,
        actor_id=ctx.user.id,
        actor_name=ctx.company.name,
        company_id=ctx.company.id,
        metadata={"audited": True, "provider_id": card.provider_id},
    )
    if provider is not None:
        await record_activity(
            repos.activity_logs,
            type=ActivityType.job_card,
            title=f'Your completion of "{card.title}" was audited',
            message=(
                f'Your completion of job card "{card.title}" has been audited and approved by {ctx.company.name}.'
            ),
            entity_type="job_card",
            entity_id=card.id,
            actor_type=ActorType.company,
            actor_id=ctx.user.id,
            actor_name=ctx.company.name,
            company_id=ctx.company.id,
            provider_id=provider.id,
            metadata={"audited": True, "provider_id": provider.id},
        )
    await repos.session.commit()
    await repos.session.refresh(card)
    logger.info(f"Job card audited: id={card.id}")
    return JobCardAuditResponse(
        job_card=JobCardRead.model_validate(card),
        message="Job card audited successfully. Provider has been notified.",
    )


# =====================================================================
# Providers
# =====================================================================


@router.get(
    "/providers",
    response_model=List[ProviderWithStats],
    summary="List Providers",
    description="List this company's service providers with their completed job card counts.",
)
async def list_providers(
    ctx: CompanyCtx,
    repos: ReposDep,
    status: Optional[ProviderStatus] = None,
    search: Optional[str] = Query(default=None, description="Case-insensitive match on name, email or phone"),
    limit: Optional[int] = Query(default=None, ge=1, le=500),
    offset: Optional[int] = Query(default=None, ge=0),
) -> List[ProviderWithStats]:
    providers = await repos.providers.list(
        limit=limit,
        offset=offset,
        filters={"company_id": ctx.company.id, "status": status.value if status else None, "search": search},
    )
    completed = await repos.job_cards.completed_counts_by_provider(provider.id for provider in providers)
    items = []
    for provider in providers:
        item = ProviderWithStats.model_validate(provider)
        item.job_cards_completed = completed.get(provider.id, 0)
        items.append(item)
    return items


@router.post(
    "/providers",
    response_model=ProviderCreated,
    status_code=status.HTTP_201_CREATED,
    summary="Add Provider",
    description=(
        "Add a service provider and create their login. When no password is supplied one is generated "
        "and returned once as temporary_password."
    ),
    responses={409: {"description": "Email already in use"}},
)
async def add_provider(payload: ProviderCreate, ctx: CompanyCtx, repos: ReposDep) -> ProviderCreated:
    if await repos.users.get_by_email(payload.email):
        raise ConflictError("A user with this email already exists.")

    temporary_password = None
    password = payload.password
    if not password:
        password = temporary_password = generate_temporary_password()

    user = User(
        email=payload.email,
        password_hash=hash_password(password),
        role=UserRole.provider.value,
        company_id=ctx.company.id,
        full_name=payload.name,
        phone=payload.phone,
    )
    provider = ServiceProvider(
        id=user.id,
        company_id=ctx.company.id,
        name=payload.name,
        email=payload.email,
        phone=payload.phone,
        status=ProviderStatus.active.value,
    )

    try:
        await repos.users.create(user, commit=False)
        await repos.providers.create(provider, commit=False)
        await record_activity(
            repos.activity_logs,
            type=ActivityType.provider,
            title=f'Provider "{provider.name}" added',
            message=f"{ctx.company.name} added service provider {provider.name}",
            entity_type="provider",
            entity_id=provider.id,
            actor_type=ActorType.company,
            actor_id=ctx.user.id,
            actor_name=ctx.company.name,
            company_id=ctx.company.id,
        )
        await repos.session.commit()
    except IntegrityError as e:
        await repos.session.rollback()
        logger.warning(f"Provider email conflict for {payload.email}: {e.orig}")
        raise ConflictError("A user with this email already exists.") from e
    await repos.session.refresh(provider)
    logger.info(f"Provider added: id={provider.id} company={ctx.company.id}")

    created = ProviderCreated.model_validate(provider)
    created.temporary_password = temporary_password
    return created


@router.patch(
    "/providers/{provider_id}",
    response_model=ProviderWithStats,
    summary="Update Provider",
    description="Partially update a provider's name, phone, status or rating.",
    responses={404: {"description": "Provider not found"}},
)
async def update_provider(
    provider_id: str, payload: ProviderUpdate, ctx: CompanyCtx, repos: ReposDep
) -> ProviderWithStats:
    provider = await repos.providers.get_for_company(provider_id, ctx.company.id)
    if provider is None:
        raise NotFoundError("Provider not found")

    for field, value in payload.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(provider, field, value.value if hasattr(value, "value") else value)
    await repos.providers.update(provider)

    completed = await repos.job_cards.completed_counts_by_provider([provider.id])
    item = ProviderWithStats.model_validate(provider)
    item.job_cards_completed = completed.get(provider.id, 0)
    return item


# =====================================================================
# Settings and reports
# =====================================================================


@router.get(
    "/settings",
    response_model=CompanyRead,
    summary="Get Company Settings",
    description="Read this company's profile.",
)
async def get_settings(ctx: CompanyCtx) -> CompanyRead:
    return CompanyRead.model_validate(ctx.company)


@router.put(
    "/settings",
    response_model=CompanyRead,
    summary="Update Company Settings",
    description="Partially update this company's profile.",
    responses={409: {"description": "Company name already in use"}},
)
async def update_settings(payload: CompanySettingsUpdate, ctx: CompanyCtx, repos: ReposDep) -> CompanyRead:
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    company = ctx.company

    if "name" in changes:
        changes["name"] = changes["name"].strip()
        existing = await repos.companies.get_by_name(changes["name"])
        if existing is not None and existing.id != company.id:
            raise ConflictError("A company with this name already exists.")
    if "email" in changes:
        changes["email"] = str(changes["email"]).lower()

    for field, value in changes.items():
        setattr(company, field, value)
    await repos.companies.update(company)
    logger.info(f"Company settings updated: id={company.id} fields={sorted(changes)}")
    return CompanyRead.model_validate(company)


@router.get(
    "/reports",
    response_model=CompanyReport,
    summary="Company Report",
    description="Job card statistics for this company plus its most recent job cards.",
)
async def get_reports(ctx: CompanyCtx, repos: ReposDep) -> CompanyReport:
    cards = await repos.job_cards.list(filters={"company_id": ctx.company.id})
    stats = reports.build_company_report(cards)
    return CompanyReport(
        **stats,
        job_cards=[JobCardRead.model_validate(card) for card in cards[: constant.REPORT_JOB_CARDS_LIMIT]],
    )
