"""
Job card I/O models for API requests and responses.

``completion_images`` and ``previous_version`` are stored as JSON text on the
entity; the read schema decodes them so clients always receive structured
values.
"""

from __future__ import annotations

import json
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from jobdispatch.core.models.domain import JobCardPriority, JobCardStatus


class JobCardRead(BaseModel):
    """Schema for reading a job card from API."""

    id: str
    company_id: str
    provider_id: Optional[str] = None
    title: str
    description: str
    status: str
    priority: str
    location: str
    due_date: Optional[date] = None
    completed_at: Optional[datetime] = None
    completion_notes: Optional[str] = None
    completion_images: List[str] = Field(default_factory=list)
    previous_version: Optional[Dict[str, Any]] = None
    audited_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

    @field_validator("completion_images", mode="before")
    @classmethod
    def _decode_images(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            try:
                return json.loads(value) or []
            except json.JSONDecodeError:
                return []
        return value

    @field_validator("previous_version", mode="before")
    @classmethod
    def _decode_previous_version(cls, value: Any) -> Any:
        if isinstance(value, str):
            try:
                return json.loads(value)
            except json.JSONDecodeError:
                return None
        return value


class JobCardListItem(JobCardRead):
    """Job card row with the names of its company and provider."""

    company_name: Optional[str] = None
    provider_name: str = "Unassigned"


class JobCardCreate(BaseModel):
    """Schema for creating a job card via API."""

    title: str = Field(min_length=3, max_length=200)
    description: str = Field(min_length=10)
    provider_id: str = Field(description="Service provider of this company to assign")
    priority: JobCardPriority = JobCardPriority.medium
    location: str = Field(min_length=3, max_length=255)
    due_date: Optional[date] = None


class JobCardUpdate(JobCardCreate):
    """Schema for a company editing a job card. All fields are replaced."""


class JobCardEditResponse(BaseModel):
    job_card: JobCardRead
    recalled: bool = Field(description="True when the provider changed and the card was reset to pending")
    previous_version: Dict[str, Any]
    message: str


class JobCardStatusUpdate(BaseModel):
    """Schema for a provider moving a job card through its lifecycle."""

    status: JobCardStatus
    notes: Optional[str] = Field(default=None, max_length=5000)
    images: List[str] = Field(default_factory=list, description="Public URLs of uploaded completion photos")


class JobCardAuditResponse(BaseModel):
    job_card: JobCardRead
    message: str
