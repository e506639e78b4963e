from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from taskflow.core.database import get_db
from taskflow.core.deps import get_current_user
from taskflow.models.profile import Profile
from taskflow.schemas.common import DataResponse, SuccessResponse
from taskflow.schemas.webhook import WebhookCreate, WebhookResponse, WebhookUpdate
from taskflow.services import webhook_service

router = APIRouter(prefix="/webhooks", tags=["webhooks"])


@router.get("", response_model=DataResponse[List[WebhookResponse]])
def list_webhooks(
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    return {"data": webhook_service.list_webhooks(db, current_user.id)}


@router.post("", response_model=DataResponse[WebhookResponse], status_code=status.HTTP_201_CREATED)
def create_webhook(
    data: WebhookCreate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    return {"data": webhook_service.create_webhook(db, data.model_dump(), current_user.id)}


@router.put("/{webhook_id}", response_model=DataResponse[WebhookResponse])
def update_webhook(
    webhook_id: str,
    data: WebhookUpdate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    webhook = webhook_service.update_webhook(db, webhook_id, data.model_dump(exclude_unset=True), current_user.id)
    return {"data": webhook}


@router.delete("/{webhook_id}", response_model=SuccessResponse)
def delete_webhook(
    webhook_id: str,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    webhook_service.delete_webhook(db, webhook_id, current_user.id)
    return {"success": True}
