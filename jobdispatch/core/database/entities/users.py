"""
User entity models.

Users hold login credentials for all three roles. Company managers and
service providers point at their company through ``company_id``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import DateTime, Field

from ..base import Base, new_id, utc_now


class User(Base, table=True):
    """Login account.

    Table: users
    """

    __tablename__ = "users"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    email: str = Field(max_length=100, unique=True, index=True)
    password_hash: str = Field(max_length=255)
    role: str = Field(max_length=16, index=True)
    company_id: Optional[str] = Field(default=None, foreign_key="companies.id", max_length=36, index=True)
    full_name: Optional[str] = Field(default=None, max_length=100)
    phone: Optional[str] = Field(default=None, max_length=20)
    last_sign_in_at: Optional[datetime] = Field(default=None, sa_type=DateTime)

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime, index=True)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime, sa_column_kwargs={"onupdate": utc_now})

    @property
    def display_name(self) -> str:
        """Full name, falling back to the local part of the email address."""
        return self.full_name or self.email.split("@")[0]

    def __repr__(self) -> str:
        return f"User(id={self.id}, email={self.email}, role={self.role})"
