from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from taskflow.core.database import Base
from taskflow.utils.time import utc_now


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    color = Column(String, nullable=False, default="#6366f1")
    user_id = Column(String(36), ForeignKey("profiles.id"), nullable=True, index=True)  # NULL = global
    created_at = Column(DateTime, default=utc_now)
