"""
Admin Endpoints.

Platform oversight for the ``admin`` role: company approvals, the user
directory and a cross-company view of job cards.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Query

from jobdispatch.core.errors import NotFoundError
from jobdispatch.core.logging_config import get_logger
from jobdispatch.core.models.domain import ActivityType, ActorType, CompanyStatus, JobCardPriority, JobCardStatus
from jobdispatch.core.models.io import CompanyRead, CompanyWithStats, JobCardListItem, UserListItem
from jobdispatch.server.core import constant
from jobdispatch.server.services.activity_log import record_activity
from jobdispatch.server.services.deps import AdminUser, ReposDep
from jobdispatch.server.services.listing import job_card_items, role_from_label, user_items

logger = get_logger(__name__)

router = APIRouter()


@router.get(
    "/companies",
    response_model=List[CompanyWithStats],
    summary="List Companies",
    description="List registered companies, newest first, with job card counts.",
    response_description="Companies with total and active job card counts.",
)
async def list_companies(
    admin: AdminUser,
    repos: ReposDep,
    status: Optional[CompanyStatus] = None,
    search: Optional[str] = Query(default=None, description="Case-insensitive match on name, email or contact person"),
    limit: Optional[int] = Query(default=None, ge=1, le=500),
    offset: Optional[int] = Query(default=None, ge=0),
) -> List[CompanyWithStats]:
    """
    List companies.

    - **status**: Only companies in this approval state.
    - **search**: Substring filter over name, email and contact person.
    - **limit** / **offset**: Pagination.
    """
    companies = await repos.companies.list(
        limit=limit,
        offset=offset,
        filters={"status": status.value if status else None, "search": search},
    )
    counts = await repos.job_cards.counts_by_company(company.id for company in companies)
    items = []
    for company in companies:
        total, active = counts.get(company.id, (0, 0))
        item = CompanyWithStats.model_validate(company)
        item.total_job_cards = total
        item.active_job_cards = active
        items.append(item)
    return items


async def _set_company_status(company_id: str, new_status: CompanyStatus, admin, repos) -> CompanyRead:
    company = await repos.companies.get_by_id(company_id)
    if company is None:
        raise NotFoundError("Company not found")

    company.status = new_status.value
    await repos.companies.update(company, commit=False)
    await record_activity(
        repos.activity_logs,
        type=ActivityType.approval,
        title=f'Company "{company.name}" {new_status.value}',
        message=f'Company "{company.name}" has been {new_status.value} by admin',
        entity_type="company",
        entity_id=company.id,
        actor_type=ActorType.admin,
        actor_id=admin.id,
        actor_name=admin.display_name,
        company_id=company.id,
        metadata={"company_name": company.name, "status": new_status.value},
    )
    await repos.session.commit()
    await repos.session.refresh(company)
    logger.info(f"Company {company.id} {new_status.value} by admin {admin.id}")
    return CompanyRead.model_validate(company)


@router.post(
    "/companies/{company_id}/approve",
    response_model=CompanyRead,
    summary="Approve Company",
    description="Approve a company so its manager can sign in.",
    responses={404: {"description": "Company not found"}},
)
async def approve_company(company_id: str, admin: AdminUser, repos: ReposDep) -> CompanyRead:
    return await _set_company_status(company_id, CompanyStatus.approved, admin, repos)


@router.post(
    "/companies/{company_id}/reject",
    response_model=CompanyRead,
    summary="Reject Company",
    description="Reject a company registration.",
    responses={404: {"description": "Company not found"}},
)
async def reject_company(company_id: str, admin: AdminUser, repos: ReposDep) -> CompanyRead:
    return await _set_company_status(company_id, CompanyStatus.rejected, admin, repos)


@router.get(
    "/pending-companies",
    response_model=List[CompanyRead],
    summary="Pending Companies",
    description=f"The {constant.PENDING_COMPANIES_LIMIT} most recent companies awaiting approval.",
)
async def pending_companies(admin: AdminUser, repos: ReposDep) -> List[CompanyRead]:
    companies = await repos.companies.list_pending(constant.PENDING_COMPANIES_LIMIT)
    return [CompanyRead.model_validate(company) for company in companies]


@router.get(
    "/users",
    response_model=List[UserListItem],
    summary="List Users",
    description="List all user accounts with role labels, company names and last login.",
)
async def list_users(
    admin: AdminUser,
    repos: ReposDep,
    role: Optional[str] = Query(default=None, description="Role or role label, e.g. provider or service_provider"),
    search: Optional[str] = Query(default=None, description="Case-insensitive match on email or full name"),
    limit: Optional[int] = Query(default=None, ge=1, le=500),
    offset: Optional[int] = Query(default=None, ge=0),
) -> List[UserListItem]:
    filters = {"role": role_from_label(role) if role else None, "search": search}
    users = await repos.users.list(limit=limit, offset=offset, filters=filters)
    return await user_items(users, repos)


@router.get(
    "/job-cards",
    response_model=List[JobCardListItem],
    summary="List All Job Cards",
    description="List job cards across all companies, newest first, with company and provider names.",
)
async def list_job_cards(
    admin: AdminUser,
    repos: ReposDep,
    status: Optional[JobCardStatus] = None,
    priority: Optional[JobCardPriority] = None,
    search: Optional[str] = Query(default=None, description="Case-insensitive match on title, description or location"),
    limit: Optional[int] = Query(default=None, ge=1, le=500),
    offset: Optional[int] = Query(default=None, ge=0),
) -> List[JobCardListItem]:
    filters = {
        "status": status.value if status else None,
        "priority": priority.value if priority else None,
        "search": search,
    }
    cards = await repos.job_cards.list(limit=limit, offset=offset, filters=filters)
    return await job_card_items(cards, repos)
