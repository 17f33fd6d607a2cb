"""
Dashboard and report I/O models.
"""

from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, Field

from .job_cards import JobCardRead


class AdminStats(BaseModel):
    total_companies: int
    pending_approvals: int
    active_job_cards: int = Field(description="Job cards not yet completed")
    completed_this_month: int


class CompanyStats(BaseModel):
    total_providers: int
    active_job_cards: int
    completed_today: int
    pending_jobs: int
    completion_rate: int = Field(description="Completed share of all job cards, integer percent")


class ProviderStats(BaseModel):
    pending: int
    accepted: int
    in_progress: int
    completed: int
    total: int
    completed_today: int
    completion_rate: int = Field(description="Completed share of assigned job cards, integer percent")


class CompanyReport(BaseModel):
    total: int
    by_status: Dict[str, int]
    by_priority: Dict[str, int]
    avg_completion_days: float = Field(description="Mean days from creation to completion, one decimal")
    completion_rate: float = Field(description="Completed share of all job cards, percent with one decimal")
    recent: int = Field(description="Job cards created in the last 30 days")
    overdue: int = Field(description="Job cards past their due date and not completed or declined")
    job_cards: List[JobCardRead] = Field(default_factory=list)
