from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from taskflow.core.database import get_db
from taskflow.core.deps import get_current_user
from taskflow.models.profile import Profile
from taskflow.schemas.common import DataResponse, SuccessResponse
from taskflow.schemas.notification import NotificationCreate, NotificationResponse, UnreadCount
from taskflow.services import notification_service

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=DataResponse[List[NotificationResponse]])
def list_notifications(
    limit: int = Query(notification_service.DEFAULT_LIMIT, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    return {"data": notification_service.list_notifications(db, current_user.id, limit)}


@router.post("", response_model=DataResponse[NotificationResponse], status_code=status.HTTP_201_CREATED)
def create_notification(
    data: NotificationCreate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    """Add a notification to the caller's own inbox"""
    notification = notification_service.create_notification(db, current_user.id, **data.model_dump())
    return {"data": notification}


@router.get("/unread", response_model=DataResponse[List[NotificationResponse]])
def unread(
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    return {"data": notification_service.unread_notifications(db, current_user.id)}


@router.get("/unread-count", response_model=DataResponse[UnreadCount])
def unread_count(
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    return {"data": {"count": notification_service.unread_count(db, current_user.id)}}


@router.put("/read-all", response_model=SuccessResponse)
def mark_all_as_read(
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    notification_service.mark_all_as_read(db, current_user.id)
    return {"success": True}


@router.put("/{notification_id}/read", response_model=DataResponse[NotificationResponse])
def mark_as_read(
    notification_id: str,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    return {"data": notification_service.mark_as_read(db, notification_id, current_user.id)}


@router.delete("/{notification_id}", response_model=SuccessResponse)
def delete_notification(
    notification_id: str,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    notification_service.delete_notification(db, notification_id, current_user.id)
    return {"success": True}
