import uuid
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey
from taskflow.core.database import Base
from taskflow.utils.time import utc_now


class TaskAttachment(Base):
    __tablename__ = "task_attachments"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    task_id = Column(Integer, ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("profiles.id"), nullable=False)
    file_name = Column(String, nullable=False)
    file_path = Column(String, nullable=False, unique=True)  # key inside the storage bucket
    file_size = Column(Integer, nullable=False)
    file_type = Column(String, nullable=False)
    created_at = Column(DateTime, default=utc_now)
