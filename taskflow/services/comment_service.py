from datetime import timedelta
from typing import Callable, List
from sqlalchemy.orm import Session

from taskflow.core.exceptions import ForbiddenError, NotFoundError
from taskflow.models.comment import Comment
from taskflow.services import notification_service, realtime
from taskflow.services.collaboration_service import get_accessible_task
from taskflow.utils.time import utc_now


def get_task_comments(db: Session, task_id: int) -> List[Comment]:
    return db.query(Comment).filter(
        Comment.task_id == task_id
    ).order_by(Comment.created_at.desc()).all()


def create_comment(db: Session, task_id: int, content: str, author_id: str) -> Comment:
    task = get_accessible_task(db, task_id, author_id)

    now = utc_now()
    comment = Comment(task_id=task_id, user_id=author_id, content=content, created_at=now, updated_at=now)
    db.add(comment)
    db.commit()
    db.refresh(comment)
    realtime.publish(realtime.comments_channel(task_id))

    if task.user_id != author_id:
        notification_service.notify_comment_added(db, task.user_id, task, author_id, content)
    return comment


def _get_own_comment(db: Session, comment_id: str, user_id: str) -> Comment:
    comment = db.query(Comment).filter(Comment.id == comment_id).first()
    if not comment:
        raise NotFoundError("Comment not found")
    if comment.user_id != user_id:
        raise ForbiddenError("You can only modify your own comments")
    return comment


def update_comment(db: Session, comment_id: str, content: str, user_id: str) -> Comment:
    comment = _get_own_comment(db, comment_id, user_id)

    now = utc_now()
    # updated_at must move forward even when the clock has not
    if now <= comment.updated_at:
        now = comment.updated_at + timedelta(microseconds=1)
    comment.content = content
    comment.updated_at = now
    db.commit()
    db.refresh(comment)
    realtime.publish(realtime.comments_channel(comment.task_id))
    return comment


def delete_comment(db: Session, comment_id: str, user_id: str) -> None:
    comment = _get_own_comment(db, comment_id, user_id)
    task_id = comment.task_id
    db.delete(comment)
    db.commit()
    realtime.publish(realtime.comments_channel(task_id))


def subscribe_to_task_comments(
    session_factory: Callable[[], Session],
    task_id: int,
    callback: Callable[[List[Comment]], None],
) -> realtime.Subscription:
    def reload():
        db = session_factory()
        try:
            callback(get_task_comments(db, task_id))
        finally:
            db.close()

    return realtime.subscribe(realtime.comments_channel(task_id), reload)
