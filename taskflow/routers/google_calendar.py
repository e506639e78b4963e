import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from taskflow.core.database import get_db
from taskflow.core.deps import get_current_user
from taskflow.core.exceptions import BadRequestError
from taskflow.models.profile import Profile
from taskflow.schemas.common import DataResponse, SuccessResponse
from taskflow.schemas.integration import (
    AuthUrlResponse,
    CalendarEntry,
    ConnectionStatus,
    OAuthCallback,
    SyncResult,
    SyncSettings,
    SyncSettingsUpdate,
)
from taskflow.services import calendar_sync_service
from taskflow.services.google_calendar_client import GoogleCalendarError, get_client_factory

logger = logging.getLogger(__name__)

# mounted before the /integrations/{id} routes
router = APIRouter(prefix="/integrations/google-calendar", tags=["google-calendar"])


@router.get("/status", response_model=DataResponse[ConnectionStatus])
def connection_status(
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    return {"data": calendar_sync_service.connection_status(db, current_user.id)}


@router.get("/auth-url", response_model=DataResponse[AuthUrlResponse])
def auth_url(
    db: Session = Depends(get_db),
    client_factory=Depends(get_client_factory),
    current_user: Profile = Depends(get_current_user)
):
    url = calendar_sync_service.authorization_url(db, current_user.id, client_factory)
    return {"data": {"url": url}}


@router.post("/callback", response_model=DataResponse[ConnectionStatus])
def oauth_callback(
    data: OAuthCallback,
    db: Session = Depends(get_db),
    client_factory=Depends(get_client_factory),
    current_user: Profile = Depends(get_current_user)
):
    """Finish the OAuth consent flow with the code Google redirected back"""
    if not calendar_sync_service.complete_authentication(db, current_user.id, data.code, client_factory):
        raise BadRequestError("Google Calendar authentication failed")
    return {"data": calendar_sync_service.connection_status(db, current_user.id)}


@router.get("/settings", response_model=DataResponse[SyncSettings])
def get_settings(
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    return {"data": calendar_sync_service.get_settings(db, current_user.id)}


@router.put("/settings", response_model=DataResponse[SyncSettings])
def update_settings(
    data: SyncSettingsUpdate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    return {"data": calendar_sync_service.update_settings(db, current_user.id, data)}


@router.get("/calendars", response_model=DataResponse[List[CalendarEntry]])
def calendars(
    db: Session = Depends(get_db),
    client_factory=Depends(get_client_factory),
    current_user: Profile = Depends(get_current_user)
):
    try:
        items = calendar_sync_service.list_calendars(db, current_user.id, client_factory)
    except GoogleCalendarError:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Google Calendar unavailable")
    return {"data": items}


@router.post("/sync", response_model=DataResponse[SyncResult])
def sync(
    db: Session = Depends(get_db),
    client_factory=Depends(get_client_factory),
    current_user: Profile = Depends(get_current_user)
):
    return {"data": calendar_sync_service.sync_user(db, current_user.id, client_factory)}


@router.delete("", response_model=SuccessResponse)
def disconnect(
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    calendar_sync_service.disconnect(db, current_user.id)
    return {"success": True}
