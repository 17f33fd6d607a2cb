"""
User I/O models for the admin user list.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class UserListItem(BaseModel):
    id: str
    email: str
    name: str = Field(description="Full name, or the part of the email before '@'")
    role: str = Field(description="Role label: admin, company_manager or service_provider")
    company_id: Optional[str] = None
    company_name: Optional[str] = None
    last_login: datetime = Field(description="Last sign-in, or account creation time if never signed in")
    created_at: datetime
