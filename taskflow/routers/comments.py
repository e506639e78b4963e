from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from taskflow.core.database import get_db
from taskflow.core.deps import get_current_user
from taskflow.models.profile import Profile
from taskflow.schemas.comment import CommentCreate, CommentResponse, CommentUpdate
from taskflow.schemas.common import DataResponse, SuccessResponse
from taskflow.services import comment_service
from taskflow.services.collaboration_service import get_accessible_task

router = APIRouter(tags=["comments"])


@router.get("/tasks/{task_id}/comments", response_model=DataResponse[List[CommentResponse]])
def task_comments(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    get_accessible_task(db, task_id, current_user.id)
    return {"data": comment_service.get_task_comments(db, task_id)}


@router.post("/tasks/{task_id}/comments", response_model=DataResponse[CommentResponse],
             status_code=status.HTTP_201_CREATED)
def create_comment(
    task_id: int,
    data: CommentCreate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    return {"data": comment_service.create_comment(db, task_id, data.content, current_user.id)}


@router.put("/comments/{comment_id}", response_model=DataResponse[CommentResponse])
def update_comment(
    comment_id: str,
    data: CommentUpdate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    return {"data": comment_service.update_comment(db, comment_id, data.content, current_user.id)}


@router.delete("/comments/{comment_id}", response_model=SuccessResponse)
def delete_comment(
    comment_id: str,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    comment_service.delete_comment(db, comment_id, current_user.id)
    return {"success": True}
