"""
Authentication I/O models for API requests and responses.

Registration input is validated strictly here so that route handlers only
ever see normalized values (trimmed names, lower-cased email, digits-only
phone number).
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator

COMPANY_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9\s&.,'-]+$")
CONTACT_PERSON_PATTERN = re.compile(r"^[a-zA-Z\s'-]+$")


def clean_company_name(value: str) -> str:
    """Trim a company name, then apply the length and character rules."""
    value = value.strip()
    if not 2 <= len(value) <= 100:
        raise ValueError("Company name must be between 2 and 100 characters")
    if not COMPANY_NAME_PATTERN.match(value):
        raise ValueError("Company name contains invalid characters")
    return value


def clean_contact_person(value: str) -> str:
    value = value.strip()
    if not 2 <= len(value) <= 50:
        raise ValueError("Contact person name must be between 2 and 50 characters")
    if not CONTACT_PERSON_PATTERN.match(value):
        raise ValueError("Contact person name can only contain letters, spaces, hyphens, and apostrophes")
    return value


def validate_password_strength(value: str) -> str:
    """Require a lowercase letter, an uppercase letter, a digit and a special character."""
    if not re.search(r"[a-z]", value):
        raise ValueError("Password must contain at least one lowercase letter")
    if not re.search(r"[A-Z]", value):
        raise ValueError("Password must contain at least one uppercase letter")
    if not re.search(r"[0-9]", value):
        raise ValueError("Password must contain at least one number")
    if not re.search(r"[^a-zA-Z0-9]", value):
        raise ValueError("Password must contain at least one special character")
    return value


class RegisterRequest(BaseModel):
    """Schema for company self-registration."""

    company_name: str = Field(description="Company display name, 2-100 characters once trimmed")
    contact_person: str = Field(description="Name of the company contact, 2-50 characters once trimmed")
    email: EmailStr = Field(description="Login email of the company manager")
    phone: str = Field(description="10 digit phone number; formatting characters are stripped")
    password: str = Field(min_length=8, max_length=100)
    confirm_password: str

    @field_validator("company_name")
    @classmethod
    def _check_company_name(cls, value: str) -> str:
        return clean_company_name(value)

    @field_validator("contact_person")
    @classmethod
    def _check_contact_person(cls, value: str) -> str:
        return clean_contact_person(value)

    @field_validator("email")
    @classmethod
    def _lower_email(cls, value: str) -> str:
        if len(value) > 100:
            raise ValueError("Email must not exceed 100 characters")
        return value.lower()

    @field_validator("phone")
    @classmethod
    def _check_phone(cls, value: str) -> str:
        digits = re.sub(r"\D", "", value)
        if len(digits) != 10:
            raise ValueError("Phone number must be exactly 10 digits")
        return digits

    @field_validator("password")
    @classmethod
    def _check_password(cls, value: str) -> str:
        return validate_password_strength(value)

    @model_validator(mode="after")
    def _passwords_match(self) -> "RegisterRequest":
        if self.password != self.confirm_password:
            raise ValueError("Passwords don't match")
        return self


class RegisterResponse(BaseModel):
    message: str
    user_id: str
    company_id: str
    requires_approval: bool = True


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)

    @field_validator("email")
    @classmethod
    def _lower_email(cls, value: str) -> str:
        return value.lower()


class AuthUserRead(BaseModel):
    """Minimal user identity returned by auth endpoints."""

    id: str
    email: str
    role: str
    company_id: Optional[str] = None

    class Config:
        from_attributes = True


class SessionRead(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_at: datetime


class LoginResponse(BaseModel):
    user: AuthUserRead
    session: SessionRead


class CompanySummary(BaseModel):
    id: str
    name: str
    status: str

    class Config:
        from_attributes = True


class MeResponse(BaseModel):
    """Current user profile with its company, if any."""

    id: str
    email: str
    role: str
    company_id: Optional[str] = None
    full_name: Optional[str] = None
    phone: Optional[str] = None
    last_sign_in_at: Optional[datetime] = None
    company: Optional[CompanySummary] = None


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(min_length=1, description="Current password")
    new_password: str = Field(min_length=6, description="New password")


class CreateAdminRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8)
    admin_key: Optional[str] = Field(default=None, description="Must match ADMIN_CREATION_KEY when configured")

    @field_validator("email")
    @classmethod
    def _lower_email(cls, value: str) -> str:
        return value.lower()


class CheckProfileRequest(BaseModel):
    user_id: Optional[str] = None
    email: Optional[str] = None


class CheckProfileResponse(BaseModel):
    exists: bool
    user: Optional[AuthUserRead] = None
    company: Optional[CompanySummary] = None


class MessageResponse(BaseModel):
    message: str
