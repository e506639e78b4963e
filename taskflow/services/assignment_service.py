from typing import List
from sqlalchemy.orm import Session

from taskflow.core.exceptions import ConflictError, NotFoundError
from taskflow.models.assignment import TaskAssignment
from taskflow.models.profile import Profile
from taskflow.services import notification_service
from taskflow.services.collaboration_service import get_accessible_task


def get_task_assignments(db: Session, task_id: int) -> List[TaskAssignment]:
    return db.query(TaskAssignment).filter(
        TaskAssignment.task_id == task_id
    ).order_by(TaskAssignment.assigned_at).all()


def assign_user(db: Session, task_id: int, user_id: str, assigned_by: str) -> TaskAssignment:
    task = get_accessible_task(db, task_id, assigned_by)

    if not db.query(Profile).filter(Profile.id == user_id).first():
        raise NotFoundError("User not found")

    # no unique constraint on (task_id, user_id) in the schema
    existing = db.query(TaskAssignment).filter(
        TaskAssignment.task_id == task_id,
        TaskAssignment.user_id == user_id
    ).first()
    if existing:
        raise ConflictError("User is already assigned to this task")

    assignment = TaskAssignment(task_id=task_id, user_id=user_id, assigned_by=assigned_by)
    db.add(assignment)
    db.commit()
    db.refresh(assignment)

    if user_id != assigned_by:
        notification_service.notify_task_assigned(db, user_id, task, assigned_by)
    return assignment


def unassign_user(db: Session, task_id: int, user_id: str, caller_id: str) -> None:
    get_accessible_task(db, task_id, caller_id)
    deleted = db.query(TaskAssignment).filter(
        TaskAssignment.task_id == task_id,
        TaskAssignment.user_id == user_id
    ).delete(synchronize_session=False)
    db.commit()
    if not deleted:
        raise NotFoundError("Assignment not found")


def get_user_assignments(db: Session, user_id: str) -> List[TaskAssignment]:
    return db.query(TaskAssignment).filter(
        TaskAssignment.user_id == user_id
    ).order_by(TaskAssignment.assigned_at.desc()).all()
