"""
Service provider entity models.

A service provider belongs to one company and shares its id with the
``users`` row it signs in with.
"""

from __future__ import annotations

from datetime import datetime

from sqlmodel import DateTime, Field

from jobdispatch.core.models.domain import ProviderStatus

from ..base import Base, utc_now


class ServiceProvider(Base, table=True):
    """Field worker registered by a company.

    Table: service_providers
    """

    __tablename__ = "service_providers"

    # Same value as users.id
    id: str = Field(primary_key=True, max_length=36)
    company_id: str = Field(foreign_key="companies.id", max_length=36, index=True)
    name: str = Field(max_length=100)
    email: str = Field(max_length=100, index=True)
    phone: str = Field(max_length=20)
    status: str = Field(default=ProviderStatus.active.value, max_length=16, index=True)
    rating: float = Field(default=0.0, ge=0.0, le=5.0)

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime, index=True)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime, sa_column_kwargs={"onupdate": utc_now})

    @property
    def is_active(self) -> bool:
        return self.status == ProviderStatus.active.value

    def __repr__(self) -> str:
        return f"ServiceProvider(id={self.id}, company_id={self.company_id}, status={self.status})"
