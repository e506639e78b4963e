from sqlalchemy import Column, Integer, String, DateTime, Boolean, ForeignKey
from taskflow.core.database import Base
from taskflow.utils.time import utc_now


class Goal(Base):
    __tablename__ = "goals"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)

    title = Column(String, nullable=False)
    description = Column(String, nullable=True)
    target = Column(Integer, nullable=False)
    current = Column(Integer, nullable=True, default=0)
    completed = Column(Boolean, nullable=False, default=False)
    category = Column(String, nullable=False)
    type = Column(String, nullable=False)
    start_date = Column(DateTime, nullable=True)
    end_date = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=utc_now)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now)
