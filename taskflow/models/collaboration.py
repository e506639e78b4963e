"""Task sharing: collaborators, pending invitations and the activity log."""

import uuid
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship
from taskflow.core.database import Base
from taskflow.utils.time import utc_now

PERMISSIONS = ("view", "edit", "admin")
INVITATION_STATUSES = ("pending", "accepted", "declined")


class TaskCollaborator(Base):
    __tablename__ = "task_collaborators"

    id = Column(Integer, primary_key=True, index=True)
    task_id = Column(Integer, ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    permission = Column(String, nullable=True, default="view")
    shared_by = Column(String(36), ForeignKey("profiles.id"), nullable=False)
    created_at = Column(DateTime, default=utc_now)

    user = relationship("Profile", foreign_keys=[user_id], lazy="joined")


class CollaborationInvitation(Base):
    __tablename__ = "collaboration_invitations"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    task_id = Column(Integer, ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False, index=True)
    invited_email = Column(String, nullable=False, index=True)
    invited_by = Column(String(36), ForeignKey("profiles.id"), nullable=False)
    status = Column(String, nullable=False, default="pending")
    permission = Column(String, nullable=True, default="view")
    message = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utc_now)
    expires_at = Column(DateTime, nullable=False)


class TaskActivity(Base):
    __tablename__ = "task_activity"

    id = Column(Integer, primary_key=True, index=True)
    task_id = Column(Integer, ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("profiles.id"), nullable=False)
    action = Column(String, nullable=False)  # invitation_sent, invitation_accepted, collaborator_removed...
    details = Column(Text, nullable=True)  # JSON text
    created_at = Column(DateTime, default=utc_now, index=True)
