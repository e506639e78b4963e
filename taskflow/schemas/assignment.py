from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Optional

from taskflow.schemas.profile import ProfileSummary
from taskflow.schemas.task import TaskResponse


class AssignmentCreate(BaseModel):
    user_id: str


class AssignmentResponse(BaseModel):
    id: str
    task_id: int
    user_id: str
    assigned_by: str
    assigned_at: datetime
    user: Optional[ProfileSummary] = None

    model_config = ConfigDict(from_attributes=True)


class UserAssignmentResponse(AssignmentResponse):
    task: Optional[TaskResponse] = None
