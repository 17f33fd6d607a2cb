"""
File upload I/O models.
"""

from __future__ import annotations

from pydantic import BaseModel


class UploadResponse(BaseModel):
    file_name: str
    public_url: str
    content_type: str
    size: int
