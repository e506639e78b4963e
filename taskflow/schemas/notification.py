from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Optional, Literal, Any

NotificationType = Literal[
    "task_assigned", "task_completed", "task_due_soon", "comment_added", "task_updated", "info"
]


class NotificationCreate(BaseModel):
    type: NotificationType = "info"
    title: str = Field(min_length=1)
    message: str = Field(min_length=1)
    task_id: Optional[int] = None
    related_user_id: Optional[str] = None
    data: Optional[dict[str, Any]] = None


class NotificationResponse(BaseModel):
    id: str
    user_id: str
    type: str
    title: str
    message: str
    task_id: Optional[int]
    related_user_id: Optional[str]
    data: Optional[dict[str, Any]]
    read: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UnreadCount(BaseModel):
    count: int
