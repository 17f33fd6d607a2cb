"""
Storage Endpoints.

Photo uploads for job cards. Files land in the ``job-photos`` bucket and are
served back through the media static mount.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, File, Form, UploadFile, status

from jobdispatch.core.errors import InvalidRequestError, NotFoundError, PermissionDeniedError
from jobdispatch.core.logging_config import get_logger
from jobdispatch.core.models.domain import UserRole
from jobdispatch.core.models.io import UploadResponse
from jobdispatch.server.services.deps import CurrentUser, ReposDep, StorageDep

logger = get_logger(__name__)

router = APIRouter()


@router.post(
    "/upload",
    response_model=UploadResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload Job Photo",
    description="Upload an image (max 5 MB) for a job card. Returns the stored file name and its public URL.",
    responses={
        400: {"description": "Missing file or job card id, file too large, or not an image"},
        403: {"description": "Caller is neither the assigned provider nor the owning company"},
        404: {"description": "Job card not found"},
    },
)
async def upload_photo(
    user: CurrentUser,
    repos: ReposDep,
    storage: StorageDep,
    file: Optional[UploadFile] = File(default=None),
    job_card_id: Optional[str] = Form(default=None),
) -> UploadResponse:
    """
    Upload a job photo.

    - **file**: Image file, sent as multipart form data.
    - **job_card_id**: Job card the photo belongs to.
    """
    if file is None:
        raise InvalidRequestError("No file provided")
    if not job_card_id:
        raise InvalidRequestError("No job card ID provided")

    card = await repos.job_cards.get_by_id(job_card_id)
    if card is None:
        raise NotFoundError("Job card not found")

    is_assigned_provider = user.role == UserRole.provider.value and card.provider_id == user.id
    is_owning_company = user.role == UserRole.company.value and card.company_id == user.company_id
    if not (is_assigned_provider or is_owning_company):
        raise PermissionDeniedError("You cannot upload photos for this job card")

    data = await storage.read_upload(file)
    stored = await storage.save(card.id, file.filename, file.content_type or "", data)
    logger.info(f"Photo uploaded for job card {card.id} by user {user.id}")
    return UploadResponse(
        file_name=stored.file_name,
        public_url=stored.public_url,
        content_type=stored.content_type,
        size=stored.size,
    )
