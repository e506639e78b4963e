import uuid
from sqlalchemy import Column, String, DateTime, Boolean, ForeignKey, JSON
from taskflow.core.database import Base
from taskflow.utils.time import utc_now


class Webhook(Base):
    __tablename__ = "webhooks"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    url = Column(String, nullable=False)
    events = Column(JSON, nullable=False, default=list)
    secret = Column(String, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    user_id = Column(String(36), ForeignKey("profiles.id"), nullable=True, index=True)
    created_at = Column(DateTime, default=utc_now)
