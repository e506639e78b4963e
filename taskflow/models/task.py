"""Task model"""

from sqlalchemy import Column, Integer, String, DateTime, Boolean, ForeignKey, JSON
from taskflow.core.database import Base
from taskflow.utils.time import utc_now

# Kanban columns, in board order
TASK_STATUSES = ("pending", "in_progress", "review", "completed")
TASK_PRIORITIES = ("low", "medium", "high")


class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)

    title = Column(String, nullable=False)
    description = Column(String, nullable=True)
    completed = Column(Boolean, default=False, nullable=False)
    is_favorite = Column(Boolean, default=False, nullable=False)
    status = Column(String, default="pending", nullable=False)
    priority = Column(String, nullable=True)
    due_date = Column(DateTime, nullable=True, index=True)
    tags = Column(JSON, nullable=True)
    category = Column(String, nullable=True)

    created_at = Column(DateTime, default=utc_now)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now)
