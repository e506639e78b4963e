"""Pydantic schemas for task request/response validation."""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime
from typing import Optional, List, Literal, Union

TaskStatus = Literal["pending", "in_progress", "review", "completed"]
TaskPriority = Literal["low", "medium", "high"]


def normalize_tags(value: Union[str, List[str], None]) -> Optional[List[str]]:
    """Accept a list or a comma separated string; keep trimmed non-empty tags."""
    if value is None:
        return None
    if isinstance(value, str):
        value = value.split(",")
    return [str(tag).strip() for tag in value if str(tag).strip()]


class TaskCreate(BaseModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    completed: bool = False
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = "medium"
    due_date: Optional[datetime] = None
    tags: Optional[List[str]] = None
    category: Optional[str] = None

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, value):
        return normalize_tags(value)


class TaskUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    completed: Optional[bool] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    due_date: Optional[datetime] = None
    tags: Optional[List[str]] = None
    category: Optional[str] = None

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, value):
        return normalize_tags(value)


class TaskMove(BaseModel):
    status: TaskStatus


class TaskResponse(BaseModel):
    id: int
    user_id: str
    title: str
    description: Optional[str]
    completed: bool
    is_favorite: bool
    status: str
    priority: Optional[str]
    due_date: Optional[datetime]
    tags: Optional[List[str]]
    category: Optional[str]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TaskStats(BaseModel):
    total: int
    completed: int
    pending: int


class BoardColumn(BaseModel):
    status: str
    tasks: List[TaskResponse]
