import uuid
from sqlalchemy import Column, String, Integer, DateTime, Boolean, ForeignKey, JSON
from taskflow.core.database import Base
from taskflow.utils.time import utc_now

CONNECTION_STATES = ("disconnected", "authenticating", "connected", "syncing")
SYNC_DIRECTIONS = ("import", "export", "bidirectional")
CONFLICT_POLICIES = ("local", "remote", "manual")


class Integration(Base):
    __tablename__ = "integrations"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False)
    type = Column(String, nullable=False)
    config = Column(JSON, nullable=False, default=dict)
    is_active = Column(Boolean, nullable=False, default=True)
    user_id = Column(String(36), ForeignKey("profiles.id"), nullable=True, index=True)
    created_at = Column(DateTime, default=utc_now)
    last_sync_at = Column(DateTime, nullable=True)


class CalendarConnection(Base):
    """Google Calendar credentials and sync bookkeeping, one row per profile."""

    __tablename__ = "calendar_connections"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, unique=True, index=True)
    state = Column(String, nullable=False, default="disconnected")

    access_token = Column(String, nullable=True)
    refresh_token = Column(String, nullable=True)

    enabled = Column(Boolean, nullable=False, default=False)
    calendars = Column(JSON, nullable=False, default=list)
    sync_direction = Column(String, nullable=False, default="bidirectional")
    sync_frequency = Column(Integer, nullable=False, default=15)  # minutes
    conflict_resolution = Column(String, nullable=False, default="manual")
    last_sync_at = Column(DateTime, nullable=True)

    imported_event_ids = Column(JSON, nullable=False, default=list)
    exported_events = Column(JSON, nullable=False, default=dict)  # {task_id: event_id}

    created_at = Column(DateTime, default=utc_now)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now)
