"""
Per-user inbox.

Typed creators build the title/message for each event kind; every write
publishes on the user's notification channel so open subscriptions reload.
"""

import math
from datetime import timedelta
from typing import Callable, List, Optional

from sqlalchemy.orm import Session

from taskflow.core.exceptions import NotFoundError
from taskflow.models.notification import Notification
from taskflow.models.task import Task
from taskflow.services import realtime
from taskflow.utils.text import truncate_text
from taskflow.utils.time import utc_now

DEFAULT_LIMIT = 20
PREVIEW_LENGTH = 50


def list_notifications(db: Session, user_id: str, limit: int = DEFAULT_LIMIT) -> List[Notification]:
    return db.query(Notification).filter(
        Notification.user_id == user_id
    ).order_by(Notification.created_at.desc()).limit(limit).all()


def unread_notifications(db: Session, user_id: str) -> List[Notification]:
    return db.query(Notification).filter(
        Notification.user_id == user_id,
        Notification.read == False
    ).order_by(Notification.created_at.desc()).all()


def unread_count(db: Session, user_id: str) -> int:
    return db.query(Notification).filter(
        Notification.user_id == user_id,
        Notification.read == False
    ).count()


def create_notification(
    db: Session,
    user_id: str,
    type: str,
    title: str,
    message: str,
    task_id: Optional[int] = None,
    related_user_id: Optional[str] = None,
    data: Optional[dict] = None,
) -> Notification:
    notification = Notification(
        user_id=user_id,
        type=type,
        title=title,
        message=message,
        task_id=task_id,
        related_user_id=related_user_id,
        data=data,
        read=False,
    )
    db.add(notification)
    db.commit()
    db.refresh(notification)
    realtime.publish(realtime.notifications_channel(user_id))
    return notification


def _get_owned(db: Session, notification_id: str, user_id: str) -> Notification:
    notification = db.query(Notification).filter(
        Notification.id == notification_id,
        Notification.user_id == user_id
    ).first()
    if not notification:
        raise NotFoundError("Notification not found")
    return notification


def mark_as_read(db: Session, notification_id: str, user_id: str) -> Notification:
    notification = _get_owned(db, notification_id, user_id)
    notification.read = True
    db.commit()
    db.refresh(notification)
    realtime.publish(realtime.notifications_channel(user_id))
    return notification


def mark_all_as_read(db: Session, user_id: str) -> int:
    updated = db.query(Notification).filter(
        Notification.user_id == user_id,
        Notification.read == False
    ).update({Notification.read: True}, synchronize_session=False)
    db.commit()
    realtime.publish(realtime.notifications_channel(user_id))
    return updated


def delete_notification(db: Session, notification_id: str, user_id: str) -> None:
    notification = _get_owned(db, notification_id, user_id)
    db.delete(notification)
    db.commit()
    realtime.publish(realtime.notifications_channel(user_id))


# ============ TYPED CREATORS ============

def notify_task_assigned(db: Session, assignee_id: str, task: Task, assigned_by: str) -> Notification:
    return create_notification(
        db,
        user_id=assignee_id,
        type="task_assigned",
        title="Task assigned",
        message=f"You have been assigned the task: {task.title}",
        task_id=task.id,
        related_user_id=assigned_by,
    )


def notify_task_completed(db: Session, user_id: str, task: Task, completed_by: str) -> Notification:
    return create_notification(
        db,
        user_id=user_id,
        type="task_completed",
        title="Task completed",
        message=f'The task "{task.title}" has been completed',
        task_id=task.id,
        related_user_id=completed_by,
    )


def notify_comment_added(db: Session, user_id: str, task: Task, author_id: str, content: str) -> Notification:
    preview = truncate_text(content, PREVIEW_LENGTH)
    return create_notification(
        db,
        user_id=user_id,
        type="comment_added",
        title="New comment",
        message=f'New comment on "{task.title}": {preview}',
        task_id=task.id,
        related_user_id=author_id,
        data={"comment_preview": content},
    )


def notify_task_due_soon(db: Session, user_id: str, task: Task, now=None) -> Notification:
    now = now or utc_now()
    hours = math.ceil((task.due_date - now).total_seconds() / 3600)
    return create_notification(
        db,
        user_id=user_id,
        type="task_due_soon",
        title="Task due soon",
        message=f'Task "{task.title}" is due in {hours} hours',
        task_id=task.id,
        data={"hours_until_due": hours, "due_date": task.due_date.isoformat()},
    )


def notify_due_soon(db: Session, within_hours: int = 24, now=None) -> int:
    """
    One `task_due_soon` notification per open task due inside the window.

    Tasks already notified (any existing task_due_soon row for the task) are
    skipped, so this can run from a periodic job. Returns how many were sent.
    """
    now = now or utc_now()
    tasks = db.query(Task).filter(
        Task.completed == False,
        Task.due_date.isnot(None),
        Task.due_date > now,
        Task.due_date <= now + timedelta(hours=within_hours)
    ).all()

    sent = 0
    for task in tasks:
        already = db.query(Notification).filter(
            Notification.user_id == task.user_id,
            Notification.task_id == task.id,
            Notification.type == "task_due_soon"
        ).first()
        if already:
            continue
        notify_task_due_soon(db, task.user_id, task, now=now)
        sent += 1
    return sent


def subscribe_to_user_notifications(
    session_factory: Callable[[], Session],
    user_id: str,
    callback: Callable[[List[Notification]], None],
) -> realtime.Subscription:
    """On any change to the user's inbox, reload it and hand it to `callback`."""
    def reload():
        db = session_factory()
        try:
            callback(list_notifications(db, user_id))
        finally:
            db.close()

    return realtime.subscribe(realtime.notifications_channel(user_id), reload)
