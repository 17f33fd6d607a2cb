"""
Job card entity models.

A job card is a work order created by a company and assigned to one of its
service providers. Completion photos and the snapshot taken before the last
company edit are stored as JSON text columns.
"""

from __future__ import annotations

import json
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from sqlmodel import DateTime, Field, Text

from jobdispatch.core.models.domain import JobCardPriority, JobCardStatus

from ..base import Base, new_id, utc_now


class JobCard(Base, table=True):
    """Work order.

    Table: job_cards
    """

    __tablename__ = "job_cards"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    company_id: str = Field(foreign_key="companies.id", max_length=36, index=True)
    provider_id: Optional[str] = Field(default=None, foreign_key="service_providers.id", max_length=36, index=True)

    title: str = Field(max_length=200)
    description: str = Field(sa_type=Text)
    status: str = Field(default=JobCardStatus.pending.value, max_length=16, index=True)
    priority: str = Field(default=JobCardPriority.medium.value, max_length=16, index=True)
    location: str = Field(max_length=255)
    due_date: Optional[date] = Field(default=None)

    # Completion
    completed_at: Optional[datetime] = Field(default=None, sa_type=DateTime)
    completion_notes: Optional[str] = Field(default=None, sa_type=Text)
    completion_images: str = Field(default="[]", sa_type=Text, description="JSON array of image URLs")

    # Company edits and review
    previous_version: Optional[str] = Field(default=None, sa_type=Text, description="JSON snapshot before last edit")
    audited_at: Optional[datetime] = Field(default=None, sa_type=DateTime)

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime, index=True)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime, sa_column_kwargs={"onupdate": utc_now})

    def get_completion_images_list(self) -> List[str]:
        """Get completion images as a list."""
        try:
            return json.loads(self.completion_images) if self.completion_images else []
        except (json.JSONDecodeError, TypeError):
            return []

    def set_completion_images_list(self, images: List[str]) -> None:
        self.completion_images = json.dumps(images)

    def get_previous_version_dict(self) -> Optional[Dict[str, Any]]:
        if not self.previous_version:
            return None
        try:
            return json.loads(self.previous_version)
        except (json.JSONDecodeError, TypeError):
            return None

    def set_previous_version_dict(self, snapshot: Dict[str, Any]) -> None:
        self.previous_version = json.dumps(snapshot, default=str)

    def __repr__(self) -> str:
        return f"JobCard(id={self.id}, status={self.status}, provider_id={self.provider_id})"
