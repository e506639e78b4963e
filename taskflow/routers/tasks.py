from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from taskflow.core.database import get_db
from taskflow.core.deps import get_current_user
from taskflow.models.profile import Profile
from taskflow.schemas.common import DataResponse, SuccessResponse
from taskflow.schemas.task import BoardColumn, TaskCreate, TaskMove, TaskResponse, TaskStats, TaskUpdate
from taskflow.services import task_service
from taskflow.services.storage_client import StorageClient, get_storage

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("", response_model=DataResponse[List[TaskResponse]])
def list_tasks(
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    return {"data": task_service.list_tasks(db, current_user.id)}


@router.post("", response_model=DataResponse[TaskResponse], status_code=status.HTTP_201_CREATED)
def create_task(
    task_data: TaskCreate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    return {"data": task_service.create_task(db, task_data.model_dump(), current_user.id)}


# Fixed paths before /{task_id}

@router.get("/stats", response_model=DataResponse[TaskStats])
def stats(
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    return {"data": task_service.task_stats(db, current_user.id)}


@router.get("/search", response_model=DataResponse[List[TaskResponse]])
def search(
    q: str = Query(""),
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    return {"data": task_service.search_tasks(db, q, current_user.id)}


@router.get("/board", response_model=DataResponse[List[BoardColumn]])
def board(
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    """Kanban columns in board order, each with its tasks newest first"""
    return {"data": task_service.board(db, current_user.id)}


@router.get("/status/{completed}", response_model=DataResponse[List[TaskResponse]])
def list_by_completed(
    completed: bool,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    return {"data": task_service.list_by_completed(db, current_user.id, completed)}


@router.get("/{task_id}", response_model=DataResponse[TaskResponse])
def get_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    return {"data": task_service.get_task(db, task_id, current_user.id)}


@router.put("/{task_id}", response_model=DataResponse[TaskResponse])
def update_task(
    task_id: int,
    task_data: TaskUpdate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    update_data = task_data.model_dump(exclude_unset=True)
    return {"data": task_service.update_task(db, task_id, update_data, current_user.id)}


@router.delete("/{task_id}", response_model=SuccessResponse)
def delete_task(
    task_id: int,
    db: Session = Depends(get_db),
    storage: StorageClient = Depends(get_storage),
    current_user: Profile = Depends(get_current_user)
):
    task_service.delete_task(db, task_id, current_user.id, storage)
    return {"success": True}


@router.put("/{task_id}/toggle", response_model=DataResponse[TaskResponse])
def toggle_completed(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    return {"data": task_service.toggle_completed(db, task_id, current_user.id)}


@router.put("/{task_id}/favorite", response_model=DataResponse[TaskResponse])
def toggle_favorite(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    return {"data": task_service.toggle_favorite(db, task_id, current_user.id)}


@router.put("/{task_id}/status", response_model=DataResponse[TaskResponse])
def move_task(
    task_id: int,
    move: TaskMove,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    return {"data": task_service.move_task(db, task_id, move.status, current_user.id)}
