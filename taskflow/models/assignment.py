import uuid
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from taskflow.core.database import Base
from taskflow.utils.time import utc_now


class TaskAssignment(Base):
    # (task_id, user_id) uniqueness is checked in assignment_service
    __tablename__ = "task_assignments"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    task_id = Column(Integer, ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    assigned_by = Column(String(36), ForeignKey("profiles.id"), nullable=False)
    assigned_at = Column(DateTime, default=utc_now)

    user = relationship("Profile", foreign_keys=[user_id], lazy="joined")
    task = relationship("Task", lazy="joined")
