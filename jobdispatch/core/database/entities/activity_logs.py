"""
Activity log entity models.

The activity log doubles as the notification feed. Rows are scoped to a
company and, when addressed to a provider, to that provider.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Dict, Optional

from sqlmodel import DateTime, Field, Text

from ..base import Base, new_id, utc_now


class ActivityLog(Base, table=True):
    """Activity log entry / notification.

    Table: activity_logs
    """

    __tablename__ = "activity_logs"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    type: str = Field(max_length=16, index=True)
    title: str = Field(max_length=200)
    message: str = Field(sa_type=Text)

    entity_type: Optional[str] = Field(default=None, max_length=32)
    entity_id: Optional[str] = Field(default=None, max_length=36, index=True)

    actor_type: str = Field(max_length=16)
    actor_id: str = Field(max_length=36)
    actor_name: str = Field(max_length=100)

    company_id: Optional[str] = Field(default=None, max_length=36, index=True)
    provider_id: Optional[str] = Field(default=None, max_length=36, index=True)

    # "metadata" is reserved on declarative models
    metadata_json: str = Field(default="{}", sa_type=Text, description="JSON object with event details")
    read: bool = Field(default=False, index=True)

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime, index=True)

    def get_metadata_dict(self) -> Dict[str, Any]:
        try:
            return json.loads(self.metadata_json) if self.metadata_json else {}
        except (json.JSONDecodeError, TypeError):
            return {}

    def set_metadata_dict(self, metadata: Dict[str, Any]) -> None:
        self.metadata_json = json.dumps(metadata, default=str)

    def __repr__(self) -> str:
        return f"ActivityLog(id={self.id}, type={self.type}, read={self.read})"
