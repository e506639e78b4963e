"""Task service"""

import logging

from sqlalchemy.orm import Session
from sqlalchemy import or_
from datetime import datetime
from typing import Dict, List, Optional

from taskflow.core.exceptions import NotFoundError
from taskflow.models.task import Task, TASK_STATUSES
from taskflow.models.assignment import TaskAssignment
from taskflow.models.attachment import TaskAttachment
from taskflow.services import notification_service
from taskflow.services.storage_client import StorageClient, StorageError

logger = logging.getLogger(__name__)

# Kanban columns used to be derived from these tags
LEGACY_STATUS_TAGS = {
    "revision": "review",
    "en-progreso": "in_progress",
}


def status_from_legacy(completed: bool, tags: Optional[List[str]]) -> str:
    if completed:
        return "completed"
    tags = tags or []
    # "revision" wins over "en-progreso": it is the later column
    for tag, status in LEGACY_STATUS_TAGS.items():
        if tag in tags:
            return status
    return "pending"


def strip_legacy_tags(tags: Optional[List[str]]) -> Optional[List[str]]:
    if tags is None:
        return None
    return [tag for tag in tags if tag not in LEGACY_STATUS_TAGS]


def list_tasks(db: Session, user_id: str) -> List[Task]:
    return db.query(Task).filter(
        Task.user_id == user_id
    ).order_by(Task.created_at.desc(), Task.id.desc()).all()


def list_by_completed(db: Session, user_id: str, completed: bool) -> List[Task]:
    return db.query(Task).filter(
        Task.user_id == user_id,
        Task.completed == completed
    ).order_by(Task.created_at.desc(), Task.id.desc()).all()


def get_task(db: Session, task_id: int, user_id: str) -> Task:
    task = db.query(Task).filter(
        Task.id == task_id,
        Task.user_id == user_id
    ).first()
    if not task:
        raise NotFoundError("Task not found")
    return task


def create_task(db: Session, data: dict, user_id: str) -> Task:
    data = dict(data)
    tags = data.get("tags")

    if data.get("status"):
        data["completed"] = data["status"] == "completed"
    else:
        data["completed"] = bool(data.get("completed"))
        data["status"] = status_from_legacy(data["completed"], tags)
    data["tags"] = strip_legacy_tags(tags)

    task = Task(user_id=user_id, **data)
    db.add(task)
    db.commit()
    db.refresh(task)
    return task


def update_task(db: Session, task_id: int, data: dict, user_id: str) -> Task:
    task = get_task(db, task_id, user_id)
    was_completed = task.completed
    data = dict(data)

    # non-nullable columns: an explicit null means "leave as is"
    for field in ("title", "status", "completed"):
        if data.get(field) is None:
            data.pop(field, None)

    if "status" in data:
        data["completed"] = data["status"] == "completed"
    elif "completed" in data:
        if data["completed"]:
            data["status"] = "completed"
        elif task.status == "completed":
            data["status"] = status_from_legacy(False, data.get("tags"))
    elif any(tag in LEGACY_STATUS_TAGS for tag in data.get("tags") or []):
        data["status"] = status_from_legacy(task.completed, data["tags"])

    if "tags" in data:
        data["tags"] = strip_legacy_tags(data["tags"])

    for field, value in data.items():
        setattr(task, field, value)

    db.commit()
    db.refresh(task)

    if task.completed and not was_completed:
        _notify_completed(db, task, user_id)
    return task


def delete_task(db: Session, task_id: int, user_id: str, storage: Optional[StorageClient] = None) -> None:
    task = get_task(db, task_id, user_id)

    # attachment rows cascade with the task, their blobs do not
    attachments = db.query(TaskAttachment).filter(TaskAttachment.task_id == task_id)
    paths = [attachment.file_path for attachment in attachments]
    attachments.delete(synchronize_session=False)
    db.delete(task)
    db.commit()

    if not paths:
        return
    if storage is None:
        logger.warning(f"Orphaned blobs after deleting task {task_id}: {paths}")
        return
    try:
        storage.remove(paths)
    except StorageError as e:
        logger.warning(f"Orphaned blobs {paths} after deleting task {task_id}: {e}")


def toggle_completed(db: Session, task_id: int, user_id: str) -> Task:
    task = get_task(db, task_id, user_id)
    return update_task(db, task_id, {"completed": not task.completed}, user_id)


def toggle_favorite(db: Session, task_id: int, user_id: str) -> Task:
    task = get_task(db, task_id, user_id)
    task.is_favorite = not task.is_favorite
    db.commit()
    db.refresh(task)
    return task


def move_task(db: Session, task_id: int, status: str, user_id: str) -> Task:
    return update_task(db, task_id, {"status": status}, user_id)


def search_tasks(db: Session, query: str, user_id: str) -> List[Task]:
    pattern = f"%{query or ''}%"
    return db.query(Task).filter(
        Task.user_id == user_id,
        or_(Task.title.ilike(pattern), Task.description.ilike(pattern))
    ).order_by(Task.created_at.desc(), Task.id.desc()).all()


def task_stats(db: Session, user_id: str) -> Dict[str, int]:
    tasks = db.query(Task.completed).filter(Task.user_id == user_id).all()
    completed = sum(1 for (done,) in tasks if done)
    return {
        "total": len(tasks),
        "completed": completed,
        "pending": len(tasks) - completed,
    }


def board(db: Session, user_id: str) -> List[dict]:
    columns = {status: [] for status in TASK_STATUSES}
    for task in list_tasks(db, user_id):
        columns.setdefault(task.status, []).append(task)
    return [{"status": status, "tasks": tasks} for status, tasks in columns.items()]


def tasks_due_between(db: Session, user_id: str, start: datetime, end: datetime) -> List[Task]:
    return db.query(Task).filter(
        Task.user_id == user_id,
        Task.due_date.isnot(None),
        Task.due_date >= start,
        Task.due_date <= end
    ).order_by(Task.due_date).all()


def migrate_legacy_statuses(db: Session) -> int:
    """Move legacy pseudo-status tags into `status`. Returns rows changed."""
    changed = 0
    for task in db.query(Task).all():
        tags = task.tags or []
        has_legacy = any(tag in LEGACY_STATUS_TAGS for tag in tags)
        consistent = task.status in TASK_STATUSES and task.completed == (task.status == "completed")
        if not has_legacy and consistent:
            continue
        task.status = status_from_legacy(task.completed, tags)
        task.tags = strip_legacy_tags(tags)
        changed += 1
    db.commit()
    return changed


def _notify_completed(db: Session, task: Task, actor_id: str) -> None:
    assignee_ids = [
        user_id for (user_id,) in db.query(TaskAssignment.user_id).filter(
            TaskAssignment.task_id == task.id
        ).all()
    ]
    for assignee_id in assignee_ids:
        if assignee_id == actor_id:
            continue
        notification_service.notify_task_completed(db, assignee_id, task, actor_id)
