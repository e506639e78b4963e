from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from taskflow.core.database import get_db
from taskflow.core.deps import get_current_user
from taskflow.models.profile import Profile
from taskflow.schemas.assignment import AssignmentCreate, AssignmentResponse, UserAssignmentResponse
from taskflow.schemas.common import DataResponse, SuccessResponse
from taskflow.services import assignment_service
from taskflow.services.collaboration_service import get_accessible_task

router = APIRouter(tags=["assignments"])


@router.get("/tasks/{task_id}/assignments", response_model=DataResponse[List[AssignmentResponse]])
def task_assignments(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    get_accessible_task(db, task_id, current_user.id)
    return {"data": assignment_service.get_task_assignments(db, task_id)}


@router.post("/tasks/{task_id}/assignments", response_model=DataResponse[AssignmentResponse],
             status_code=status.HTTP_201_CREATED)
def assign(
    task_id: int,
    data: AssignmentCreate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    return {"data": assignment_service.assign_user(db, task_id, data.user_id, current_user.id)}


@router.delete("/tasks/{task_id}/assignments/{user_id}", response_model=SuccessResponse)
def unassign(
    task_id: int,
    user_id: str,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    assignment_service.unassign_user(db, task_id, user_id, current_user.id)
    return {"success": True}


@router.get("/assignments/me", response_model=DataResponse[List[UserAssignmentResponse]])
def my_assignments(
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    return {"data": assignment_service.get_user_assignments(db, current_user.id)}
