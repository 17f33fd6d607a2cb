"""
Dashboard Endpoints.

Headline statistics for the admin, company and provider dashboards.
"""

from __future__ import annotations

from fastapi import APIRouter

from jobdispatch.core.database.base import utc_now
from jobdispatch.core.models.domain import CompanyStatus, JobCardStatus
from jobdispatch.core.models.io import AdminStats, CompanyStats, ProviderStats
from jobdispatch.server.services import reports
from jobdispatch.server.services.deps import AdminUser, CompanyCtx, ProviderCtx, ReposDep

router = APIRouter()


@router.get(
    "/admin-stats",
    response_model=AdminStats,
    summary="Admin Dashboard Stats",
    description="Company and job card totals across the platform.",
)
async def admin_stats(admin: AdminUser, repos: ReposDep) -> AdminStats:
    month_start = reports.start_of_month(utc_now())
    return AdminStats(
        total_companies=await repos.companies.count(),
        pending_approvals=await repos.companies.count(status=CompanyStatus.pending.value),
        active_job_cards=await repos.job_cards.count(exclude_status=JobCardStatus.completed.value),
        completed_this_month=await repos.job_cards.count(completed_since=month_start),
    )


@router.get(
    "/company-stats",
    response_model=CompanyStats,
    summary="Company Dashboard Stats",
    description="Provider and job card totals for the caller's company.",
)
async def company_stats(ctx: CompanyCtx, repos: ReposDep) -> CompanyStats:
    cards = await repos.job_cards.list(filters={"company_id": ctx.company.id})
    total_providers = await repos.providers.count(company_id=ctx.company.id)
    return CompanyStats(**reports.build_company_stats(cards, total_providers))


@router.get(
    "/provider-stats",
    response_model=ProviderStats,
    summary="Provider Dashboard Stats",
    description="Job card counts for the signed-in provider.",
)
async def provider_stats(ctx: ProviderCtx, repos: ReposDep) -> ProviderStats:
    cards = await repos.job_cards.list(filters={"provider_id": ctx.provider.id})
    return ProviderStats(**reports.build_provider_stats(cards))
