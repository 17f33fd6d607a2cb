"""
Service provider I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from jobdispatch.core.models.domain import ProviderStatus


class ProviderRead(BaseModel):
    """Schema for reading a service provider from API."""

    id: str
    company_id: str
    name: str
    email: str
    phone: str
    status: str
    rating: float
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ProviderWithStats(ProviderRead):
    job_cards_completed: int = 0


class ProviderCreate(BaseModel):
    """Schema for adding a service provider to a company."""

    name: str = Field(min_length=2, max_length=100)
    email: EmailStr
    phone: str = Field(min_length=10, max_length=20)
    password: Optional[str] = Field(
        default=None, min_length=8, max_length=100, description="Initial password; generated when omitted"
    )

    @field_validator("email")
    @classmethod
    def _lower_email(cls, value: str) -> str:
        return value.lower()


class ProviderCreated(ProviderRead):
    temporary_password: Optional[str] = Field(
        default=None, description="Generated password, returned only once when none was supplied"
    )


class ProviderUpdate(BaseModel):
    """Schema for partially updating a service provider."""

    name: Optional[str] = Field(default=None, min_length=2, max_length=100)
    phone: Optional[str] = Field(default=None, min_length=10, max_length=20)
    status: Optional[ProviderStatus] = None
    rating: Optional[float] = Field(default=None, ge=0.0, le=5.0)
