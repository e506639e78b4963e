import uuid
from sqlalchemy import Column, String, Integer, DateTime, Boolean, ForeignKey, JSON
from taskflow.core.database import Base
from taskflow.utils.time import utc_now

NOTIFICATION_TYPES = (
    "task_assigned",
    "task_completed",
    "task_due_soon",
    "comment_added",
    "task_updated",
    "info",
)


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    type = Column(String, nullable=False, default="info")
    title = Column(String, nullable=False)
    message = Column(String, nullable=False)
    task_id = Column(Integer, nullable=True, index=True)
    related_user_id = Column(String(36), nullable=True)
    data = Column(JSON, nullable=True)
    read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=utc_now, index=True)
