from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from taskflow.core.database import get_db
from taskflow.core.deps import get_current_user
from taskflow.models.profile import Profile
from taskflow.schemas.collaboration import (
    ActivityResponse,
    CollaboratorResponse,
    InvitationResponse,
    InviteRequest,
    PermissionResponse,
)
from taskflow.schemas.common import DataResponse, SuccessResponse
from taskflow.services import collaboration_service

router = APIRouter(prefix="/collaborations", tags=["collaborations"])


@router.post("/invite", response_model=DataResponse[InvitationResponse], status_code=status.HTTP_201_CREATED)
def invite(
    data: InviteRequest,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    invitation = collaboration_service.invite_collaborator(
        db, data.task_id, data.email, data.permission, current_user, data.message
    )
    return {"data": invitation}


@router.get("/invitations", response_model=DataResponse[List[InvitationResponse]])
def pending_invitations(
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    return {"data": collaboration_service.pending_invitations(db, current_user)}


@router.post("/invitations/{invitation_id}/accept", response_model=DataResponse[CollaboratorResponse])
def accept_invitation(
    invitation_id: str,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    return {"data": collaboration_service.accept_invitation(db, invitation_id, current_user)}


@router.post("/invitations/{invitation_id}/decline", response_model=DataResponse[InvitationResponse])
def decline_invitation(
    invitation_id: str,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    return {"data": collaboration_service.decline_invitation(db, invitation_id, current_user)}


@router.get("/task/{task_id}/collaborators", response_model=DataResponse[List[CollaboratorResponse]])
def collaborators(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    collaboration_service.get_accessible_task(db, task_id, current_user.id)
    return {"data": collaboration_service.get_collaborators(db, task_id)}


@router.delete("/task/{task_id}/collaborator/{user_id}", response_model=SuccessResponse)
def remove_collaborator(
    task_id: int,
    user_id: str,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    collaboration_service.remove_collaborator(db, task_id, user_id, current_user)
    return {"success": True}


@router.get("/task/{task_id}/activity", response_model=DataResponse[List[ActivityResponse]])
def activity(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    collaboration_service.get_accessible_task(db, task_id, current_user.id)
    return {"data": collaboration_service.get_task_activity(db, task_id)}


@router.get("/task/{task_id}/permission", response_model=DataResponse[PermissionResponse])
def permission(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    return {"data": {"permission": collaboration_service.get_permission(db, task_id, current_user.id)}}
