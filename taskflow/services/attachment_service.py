"""
Task attachments: metadata rows in the database, bytes in object storage.

The two stores are never written atomically. Upload writes the blob first
and removes it again if the row cannot be inserted. Delete removes the row
first; a blob that then fails to delete is logged as an orphan and left for
cleanup, it never fails the request.
"""

import logging
import secrets
import time
from typing import Callable, List, Optional

from sqlalchemy.orm import Session

from taskflow.core.config import settings
from taskflow.core.exceptions import BadRequestError, ForbiddenError, NotFoundError
from taskflow.models.attachment import TaskAttachment
from taskflow.schemas.attachment import AttachmentResponse
from taskflow.services import realtime
from taskflow.services.collaboration_service import get_accessible_task
from taskflow.services.storage_client import StorageClient, StorageError
from taskflow.utils.text import format_file_size

logger = logging.getLogger(__name__)

ALLOWED_TYPES = ["image/*", "application/pdf", "text/*", ".doc", ".docx", ".xls", ".xlsx"]
SIGNED_URL_TTL = 3600


def validate_file(file_name: str, file_type: str, size: int, max_mb: int = None) -> Optional[str]:
    """Return an error message, or None when the file is acceptable."""
    max_mb = max_mb or settings.MAX_ATTACHMENT_MB
    if size > max_mb * 1024 * 1024:
        return f"File too large. Maximum {max_mb}MB."

    file_type = file_type or ""
    name = (file_name or "").lower()
    for allowed in ALLOWED_TYPES:
        if "*" in allowed:
            if file_type.startswith(allowed.split("/")[0] + "/"):
                return None
        elif file_type == allowed or name.endswith(allowed):
            return None
    return "File type not allowed."


def _storage_path(user_id: str, task_id: int, file_name: str) -> str:
    ext = file_name.rsplit(".", 1)[-1].lower() if "." in file_name else "bin"
    unique = f"{int(time.time() * 1000)}-{secrets.token_hex(6)}"
    return f"{user_id}/{task_id}/{unique}.{ext}"


def serialize(attachment: TaskAttachment, storage: StorageClient) -> AttachmentResponse:
    response = AttachmentResponse.model_validate(attachment)
    response.public_url = storage.public_url(attachment.file_path)
    response.size_label = format_file_size(attachment.file_size)
    return response


def get_task_attachments(db: Session, storage: StorageClient, task_id: int) -> List[AttachmentResponse]:
    attachments = db.query(TaskAttachment).filter(
        TaskAttachment.task_id == task_id
    ).order_by(TaskAttachment.created_at.desc()).all()
    return [serialize(attachment, storage) for attachment in attachments]


def upload_attachment(
    db: Session,
    storage: StorageClient,
    task_id: int,
    file_name: str,
    file_type: str,
    content: bytes,
    user_id: str,
) -> AttachmentResponse:
    get_accessible_task(db, task_id, user_id)

    # the client validates too, but that check can be bypassed
    error = validate_file(file_name, file_type, len(content))
    if error:
        raise BadRequestError(f"{file_name}: {error}")

    path = _storage_path(user_id, task_id, file_name)
    storage.upload(path, content, file_type or "application/octet-stream")

    attachment = TaskAttachment(
        task_id=task_id,
        user_id=user_id,
        file_name=file_name,
        file_path=path,
        file_size=len(content),
        file_type=file_type or "application/octet-stream",
    )
    try:
        db.add(attachment)
        db.commit()
    except Exception:
        db.rollback()
        logger.error(f"Could not save attachment row for {path}, removing blob")
        try:
            storage.remove([path])
        except StorageError as e:
            logger.error(f"Orphaned blob {path}: {e}")
        raise

    db.refresh(attachment)
    realtime.publish(realtime.attachments_channel(task_id))
    return serialize(attachment, storage)


def get_attachment(db: Session, attachment_id: str, user_id: str) -> TaskAttachment:
    attachment = db.query(TaskAttachment).filter(TaskAttachment.id == attachment_id).first()
    if not attachment:
        raise NotFoundError("Attachment not found")
    get_accessible_task(db, attachment.task_id, user_id)
    return attachment


def delete_attachment(db: Session, storage: StorageClient, attachment_id: str, user_id: str) -> None:
    attachment = get_attachment(db, attachment_id, user_id)
    task = get_accessible_task(db, attachment.task_id, user_id)
    if attachment.user_id != user_id and task.user_id != user_id:
        raise ForbiddenError("Only the uploader or the task owner can delete this attachment")

    path = attachment.file_path
    task_id = attachment.task_id
    db.delete(attachment)
    db.commit()
    realtime.publish(realtime.attachments_channel(task_id))

    try:
        storage.remove([path])
    except StorageError as e:
        logger.warning(f"Orphaned blob {path} after deleting attachment {attachment_id}: {e}")


def signed_url(db: Session, storage: StorageClient, attachment_id: str, user_id: str,
               expires_in: int = SIGNED_URL_TTL) -> str:
    attachment = get_attachment(db, attachment_id, user_id)
    return storage.create_signed_url(attachment.file_path, expires_in)


def download_attachment(db: Session, storage: StorageClient, attachment_id: str, user_id: str):
    attachment = get_attachment(db, attachment_id, user_id)
    return attachment, storage.download(attachment.file_path)


def subscribe_to_task_attachments(
    session_factory: Callable[[], Session],
    storage: StorageClient,
    task_id: int,
    callback: Callable[[List[AttachmentResponse]], None],
) -> realtime.Subscription:
    def reload():
        db = session_factory()
        try:
            callback(get_task_attachments(db, storage, task_id))
        finally:
            db.close()

    return realtime.subscribe(realtime.attachments_channel(task_id), reload)
