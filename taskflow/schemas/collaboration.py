from pydantic import BaseModel, ConfigDict, EmailStr, Field
from datetime import datetime
from typing import Optional, Literal

from taskflow.schemas.profile import ProfileSummary

Permission = Literal["view", "edit", "admin"]


class InviteRequest(BaseModel):
    # the web client sends camelCase
    task_id: int = Field(alias="taskId")
    email: EmailStr
    permission: Permission = "view"
    message: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


class InvitationResponse(BaseModel):
    id: str
    task_id: int
    invited_email: str
    invited_by: str
    status: str
    permission: Optional[str]
    message: Optional[str]
    created_at: datetime
    expires_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CollaboratorResponse(BaseModel):
    id: int
    task_id: int
    user_id: str
    permission: Optional[str]
    shared_by: str
    created_at: datetime
    user: Optional[ProfileSummary] = None

    model_config = ConfigDict(from_attributes=True)


class ActivityResponse(BaseModel):
    id: int
    task_id: int
    user_id: str
    action: str
    details: Optional[str]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PermissionResponse(BaseModel):
    permission: Optional[Literal["owner", "view", "edit", "admin"]]
