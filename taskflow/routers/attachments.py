import logging
from typing import List
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, HTTPException, Response, UploadFile, status
from sqlalchemy.orm import Session

from taskflow.core.config import settings
from taskflow.core.database import get_db
from taskflow.core.deps import get_current_user
from taskflow.models.profile import Profile
from taskflow.schemas.attachment import AttachmentResponse, SignedUrlResponse
from taskflow.schemas.common import DataResponse, SuccessResponse
from taskflow.services import attachment_service
from taskflow.services.collaboration_service import get_accessible_task
from taskflow.services.storage_client import StorageClient, StorageError, get_storage

logger = logging.getLogger(__name__)

router = APIRouter(tags=["attachments"])


def _storage_failed(e: StorageError) -> HTTPException:
    logger.error(f"Storage error: {e}")
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="File storage unavailable")


def _content_disposition(file_name: str) -> str:
    # headers are latin-1; the quoted filename* carries the real name
    fallback = "".join(c if 32 <= ord(c) < 127 and c not in '"\\' else "_" for c in file_name)
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(file_name, safe='')}"


@router.get("/tasks/{task_id}/attachments", response_model=DataResponse[List[AttachmentResponse]])
def task_attachments(
    task_id: int,
    db: Session = Depends(get_db),
    storage: StorageClient = Depends(get_storage),
    current_user: Profile = Depends(get_current_user)
):
    get_accessible_task(db, task_id, current_user.id)
    return {"data": attachment_service.get_task_attachments(db, storage, task_id)}


@router.post("/tasks/{task_id}/attachments", response_model=DataResponse[AttachmentResponse],
             status_code=status.HTTP_201_CREATED)
def upload_attachment(
    task_id: int,
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    storage: StorageClient = Depends(get_storage),
    current_user: Profile = Depends(get_current_user)
):
    # one byte past the limit is enough for validate_file to reject it
    limit = settings.MAX_ATTACHMENT_MB * 1024 * 1024
    content = file.file.read(limit + 1)
    try:
        attachment = attachment_service.upload_attachment(
            db, storage, task_id, file.filename, file.content_type, content, current_user.id
        )
    except StorageError as e:
        raise _storage_failed(e)
    return {"data": attachment}


@router.get("/attachments/{attachment_id}/download")
def download_attachment(
    attachment_id: str,
    db: Session = Depends(get_db),
    storage: StorageClient = Depends(get_storage),
    current_user: Profile = Depends(get_current_user)
):
    try:
        attachment, content = attachment_service.download_attachment(db, storage, attachment_id, current_user.id)
    except StorageError as e:
        raise _storage_failed(e)
    return Response(
        content=content,
        media_type=attachment.file_type,
        headers={"Content-Disposition": _content_disposition(attachment.file_name)},
    )


@router.get("/attachments/{attachment_id}/signed-url", response_model=DataResponse[SignedUrlResponse])
def signed_url(
    attachment_id: str,
    expires_in: int = attachment_service.SIGNED_URL_TTL,
    db: Session = Depends(get_db),
    storage: StorageClient = Depends(get_storage),
    current_user: Profile = Depends(get_current_user)
):
    try:
        url = attachment_service.signed_url(db, storage, attachment_id, current_user.id, expires_in)
    except StorageError as e:
        raise _storage_failed(e)
    return {"data": {"signed_url": url, "expires_in": expires_in}}


@router.delete("/attachments/{attachment_id}", response_model=SuccessResponse)
def delete_attachment(
    attachment_id: str,
    db: Session = Depends(get_db),
    storage: StorageClient = Depends(get_storage),
    current_user: Profile = Depends(get_current_user)
):
    attachment_service.delete_attachment(db, storage, attachment_id, current_user.id)
    return {"success": True}
