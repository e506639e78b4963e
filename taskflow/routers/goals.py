from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from taskflow.core.database import get_db
from taskflow.core.deps import get_current_user
from taskflow.models.profile import Profile
from taskflow.schemas.common import DataResponse, SuccessResponse
from taskflow.schemas.goal import GoalCreate, GoalResponse, GoalUpdate
from taskflow.services import goal_service

router = APIRouter(prefix="/goals", tags=["goals"])


@router.get("", response_model=DataResponse[List[GoalResponse]])
def list_goals(
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    return {"data": goal_service.list_goals(db, current_user.id)}


@router.post("", response_model=DataResponse[GoalResponse], status_code=status.HTTP_201_CREATED)
def create_goal(
    data: GoalCreate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    return {"data": goal_service.create_goal(db, data.model_dump(), current_user.id)}


@router.put("/{goal_id}", response_model=DataResponse[GoalResponse])
def update_goal(
    goal_id: int,
    data: GoalUpdate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    return {"data": goal_service.update_goal(db, goal_id, data.model_dump(exclude_unset=True), current_user.id)}


@router.delete("/{goal_id}", response_model=SuccessResponse)
def delete_goal(
    goal_id: int,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    goal_service.delete_goal(db, goal_id, current_user.id)
    return {"success": True}
