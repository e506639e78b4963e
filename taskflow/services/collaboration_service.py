"""
Task sharing beyond the owner.

Invitations are addressed to an email (registered or not) and become a
TaskCollaborator row once the addressee accepts. Every sharing event is
appended to the task's activity log, which is never trimmed.
"""

import json
from datetime import timedelta
from typing import Any, List, Optional

from sqlalchemy.orm import Session

from taskflow.core.config import settings
from taskflow.core.exceptions import BadRequestError, ForbiddenError, NotFoundError
from taskflow.models.collaboration import CollaborationInvitation, TaskActivity, TaskCollaborator
from taskflow.models.profile import Profile
from taskflow.models.task import Task
from taskflow.utils.time import utc_now

ACTIVITY_LIMIT = 50


def get_accessible_task(db: Session, task_id: int, user_id: str) -> Task:
    """The task if the caller owns it or collaborates on it, else 404."""
    task = db.query(Task).filter(Task.id == task_id).first()
    if task and task_permission(db, task, user_id):
        return task
    raise NotFoundError("Task not found")


def get_owned_task(db: Session, task_id: int, user_id: str) -> Task:
    task = db.query(Task).filter(Task.id == task_id, Task.user_id == user_id).first()
    if not task:
        raise NotFoundError("Task not found")
    return task


def task_permission(db: Session, task: Task, user_id: str) -> Optional[str]:
    if task.user_id == user_id:
        return "owner"
    collaborator = db.query(TaskCollaborator).filter(
        TaskCollaborator.task_id == task.id,
        TaskCollaborator.user_id == user_id
    ).first()
    return collaborator.permission if collaborator else None


def get_permission(db: Session, task_id: int, user_id: str) -> Optional[str]:
    task = db.query(Task).filter(Task.id == task_id).first()
    if not task:
        return None
    return task_permission(db, task, user_id)


def log_activity(db: Session, task_id: int, user_id: str, action: str, details: Any = None) -> TaskActivity:
    activity = TaskActivity(
        task_id=task_id,
        user_id=user_id,
        action=action,
        details=json.dumps(details) if details is not None else None,
    )
    db.add(activity)
    db.commit()
    db.refresh(activity)
    return activity


def get_task_activity(db: Session, task_id: int) -> List[TaskActivity]:
    return db.query(TaskActivity).filter(
        TaskActivity.task_id == task_id
    ).order_by(TaskActivity.created_at.desc(), TaskActivity.id.desc()).limit(ACTIVITY_LIMIT).all()


def invite_collaborator(
    db: Session,
    task_id: int,
    email: str,
    permission: str,
    inviter: Profile,
    message: str = None,
) -> CollaborationInvitation:
    get_owned_task(db, task_id, inviter.id)

    email = email.lower()
    if email == inviter.email.lower():
        raise BadRequestError("You cannot invite yourself")

    invitation = CollaborationInvitation(
        task_id=task_id,
        invited_email=email,
        invited_by=inviter.id,
        permission=permission,
        status="pending",
        message=message,
        expires_at=utc_now() + timedelta(days=settings.INVITATION_TTL_DAYS),
    )
    db.add(invitation)
    db.commit()
    db.refresh(invitation)

    log_activity(db, task_id, inviter.id, "invitation_sent", {
        "invited_email": email,
        "permission": permission,
    })
    return invitation


def pending_invitations(db: Session, user: Profile) -> List[CollaborationInvitation]:
    # expired rows stay in the table; they are only filtered out here
    return db.query(CollaborationInvitation).filter(
        CollaborationInvitation.invited_email == user.email.lower(),
        CollaborationInvitation.status == "pending",
        CollaborationInvitation.expires_at > utc_now()
    ).order_by(CollaborationInvitation.created_at.desc()).all()


def _get_addressed_invitation(db: Session, invitation_id: str, user: Profile) -> CollaborationInvitation:
    invitation = db.query(CollaborationInvitation).filter(
        CollaborationInvitation.id == invitation_id
    ).first()
    if not invitation or invitation.invited_email != user.email.lower():
        raise NotFoundError("Invitation not found")
    if invitation.status != "pending":
        raise BadRequestError(f"Invitation already {invitation.status}")
    return invitation


def accept_invitation(db: Session, invitation_id: str, user: Profile) -> TaskCollaborator:
    invitation = _get_addressed_invitation(db, invitation_id, user)
    if invitation.expires_at <= utc_now():
        raise BadRequestError("Invitation expired")

    collaborator = db.query(TaskCollaborator).filter(
        TaskCollaborator.task_id == invitation.task_id,
        TaskCollaborator.user_id == user.id
    ).first()
    if collaborator:
        collaborator.permission = invitation.permission
    else:
        collaborator = TaskCollaborator(
            task_id=invitation.task_id,
            user_id=user.id,
            permission=invitation.permission,
            shared_by=invitation.invited_by,
        )
        db.add(collaborator)

    invitation.status = "accepted"
    db.commit()
    db.refresh(collaborator)

    log_activity(db, invitation.task_id, user.id, "invitation_accepted", {
        "permission": invitation.permission,
    })
    return collaborator


def decline_invitation(db: Session, invitation_id: str, user: Profile) -> CollaborationInvitation:
    invitation = _get_addressed_invitation(db, invitation_id, user)
    invitation.status = "declined"
    db.commit()
    db.refresh(invitation)
    return invitation


def get_collaborators(db: Session, task_id: int) -> List[TaskCollaborator]:
    return db.query(TaskCollaborator).filter(
        TaskCollaborator.task_id == task_id
    ).order_by(TaskCollaborator.created_at).all()


def remove_collaborator(db: Session, task_id: int, user_id: str, caller: Profile) -> None:
    task = db.query(Task).filter(Task.id == task_id).first()
    if not task:
        raise NotFoundError("Task not found")
    # owners remove anyone, collaborators can only leave
    if task.user_id != caller.id and user_id != caller.id:
        raise ForbiddenError("Only the task owner can remove collaborators")

    deleted = db.query(TaskCollaborator).filter(
        TaskCollaborator.task_id == task_id,
        TaskCollaborator.user_id == user_id
    ).delete(synchronize_session=False)
    db.commit()
    if not deleted:
        raise NotFoundError("Collaborator not found")

    log_activity(db, task_id, caller.id, "collaborator_removed", {"removed_user_id": user_id})
