"""
Company I/O models for API requests and responses.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from .auth import clean_company_name, clean_contact_person


class CompanyRead(BaseModel):
    """Schema for reading a company from API."""

    id: str
    name: str
    email: str
    contact_person: str
    phone: str
    address: Optional[str] = None
    status: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class CompanyWithStats(CompanyRead):
    """Company row in the admin list, with job card counts."""

    total_job_cards: int = 0
    active_job_cards: int = Field(default=0, description="Job cards in any status other than completed")


class CompanySettingsUpdate(BaseModel):
    """Schema for partially updating the company profile."""

    name: Optional[str] = Field(default=None, description="Same rules as the registration company name")
    email: Optional[EmailStr] = None
    contact_person: Optional[str] = Field(default=None, description="Same rules as the registration contact person")
    phone: Optional[str] = None
    address: Optional[str] = Field(default=None, max_length=255)

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: Optional[str]) -> Optional[str]:
        return None if value is None else clean_company_name(value)

    @field_validator("contact_person")
    @classmethod
    def _check_contact_person(cls, value: Optional[str]) -> Optional[str]:
        return None if value is None else clean_contact_person(value)

    @field_validator("phone")
    @classmethod
    def _check_phone(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        digits = re.sub(r"\D", "", value)
        if len(digits) != 10:
            raise ValueError("Phone number must be exactly 10 digits")
        return digits
