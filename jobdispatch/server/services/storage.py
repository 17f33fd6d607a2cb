"""
Job photo storage.

Photos are written to a local directory that the application also serves as
a static mount, so the returned public URL can be used directly by clients.
Object names follow ``{job_card_id}/{epoch_ms}-{random}.{ext}`` inside the
``job-photos`` bucket directory.
"""

from __future__ import annotations

import re
import secrets
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

from jobdispatch.core.errors import InvalidRequestError
from jobdispatch.core.logging_config import get_logger
from jobdispatch.server.core.config import StorageConfig, settings

logger = get_logger(__name__)

_EXTENSION_PATTERN = re.compile(r"[^a-z0-9]")


@dataclass(frozen=True)
class StoredFile:
    file_name: str
    public_url: str
    content_type: str
    size: int


def file_extension(filename: Optional[str], content_type: str) -> str:
    """Pick a safe file extension from the upload name, falling back to the image subtype."""
    if filename and "." in filename:
        ext = _EXTENSION_PATTERN.sub("", filename.rsplit(".", 1)[1].lower())
        if ext:
            return ext[:10]
    subtype = content_type.split("/", 1)[1] if "/" in content_type else ""
    return _EXTENSION_PATTERN.sub("", subtype.split("+", 1)[0].lower())[:10] or "bin"


class LocalPhotoStorage:
    """Stores job photos under ``<directory>/<bucket>`` and builds their public URLs."""

    def __init__(self, config: StorageConfig) -> None:
        self.config = config
        self.root = Path(config.directory)

    @property
    def bucket_dir(self) -> Path:
        return self.root / self.config.bucket

    def check_size(self, size: int) -> None:
        if size > self.config.max_upload_bytes:
            limit_mb = self.config.max_upload_bytes // (1024 * 1024)
            raise InvalidRequestError(f"File size exceeds {limit_mb}MB limit")

    @staticmethod
    def check_content_type(content_type: Optional[str]) -> None:
        if not content_type or not content_type.startswith("image/"):
            raise InvalidRequestError("File must be an image")

    def validate(self, content_type: Optional[str], size: int) -> None:
        """Reject files that are too large or are not images.

        Raises:
            InvalidRequestError: If the file breaks the upload rules
        """
        self.check_size(size)
        self.check_content_type(content_type)

    async def read_upload(self, upload: UploadFile) -> bytes:
        """Read an upload without ever holding more than the size limit in memory.

        The content type is checked before anything is read. A declared size
        over the limit fails straight away; otherwise at most one byte past
        the limit is read, which is enough to detect an oversized body.

        Raises:
            InvalidRequestError: If the upload is not an image or is too large
        """
        self.check_content_type(upload.content_type)
        if upload.size is not None:
            self.check_size(upload.size)
        data = await upload.read(self.config.max_upload_bytes + 1)
        self.check_size(len(data))
        return data

    def object_name(self, job_card_id: str, filename: Optional[str], content_type: str) -> str:
        epoch_ms = int(time.time() * 1000)
        suffix = secrets.token_hex(4)
        return f"{job_card_id}/{epoch_ms}-{suffix}.{file_extension(filename, content_type)}"

    def public_url(self, object_name: str) -> str:
        base = self.config.public_base_url.rstrip("/")
        prefix = "/" + self.config.media_url_prefix.strip("/")
        return f"{base}{prefix}/{self.config.bucket}/{object_name}"

    async def save(self, job_card_id: str, filename: Optional[str], content_type: str, data: bytes) -> StoredFile:
        """Validate and write a photo for a job card.

        Args:
            job_card_id: Job card the photo belongs to
            filename: Original client file name, used for the extension
            content_type: MIME type reported by the client
            data: File contents

        Returns:
            StoredFile with the bucket-relative name and public URL
        """
        self.validate(content_type, len(data))
        name = self.object_name(job_card_id, filename, content_type)
        path = self.bucket_dir / name
        await run_in_threadpool(self._write, path, data)
        logger.info(f"Stored job photo {name} ({len(data)} bytes)")
        return StoredFile(file_name=name, public_url=self.public_url(name), content_type=content_type, size=len(data))

    @staticmethod
    def _write(path: Path, data: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("xb") as fh:
            fh.write(data)


def get_storage() -> LocalPhotoStorage:
    return LocalPhotoStorage(settings.storage)
