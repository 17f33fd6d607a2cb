"""
Company entity models.

A company is a tenant of the platform. Companies register themselves and
stay ``pending`` until an admin approves or rejects them.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import DateTime, Field

from jobdispatch.core.models.domain import CompanyStatus

from ..base import Base, new_id, utc_now


class Company(Base, table=True):
    """Registered company.

    Table: companies
    """

    __tablename__ = "companies"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    name: str = Field(max_length=100, unique=True, index=True)
    email: str = Field(max_length=100)
    contact_person: str = Field(max_length=50)
    phone: str = Field(max_length=20)
    address: Optional[str] = Field(default=None, max_length=255)
    status: str = Field(default=CompanyStatus.pending.value, max_length=16, index=True)
    created_by: Optional[str] = Field(default=None, max_length=36)

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime, index=True)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime, sa_column_kwargs={"onupdate": utc_now})

    @property
    def is_approved(self) -> bool:
        return self.status == CompanyStatus.approved.value

    def __repr__(self) -> str:
        return f"Company(id={self.id}, name={self.name}, status={self.status})"
