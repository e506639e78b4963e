from pydantic import BaseModel, ConfigDict, Field, computed_field
from datetime import datetime
from typing import Optional

from taskflow.schemas.profile import ProfileSummary


class CommentCreate(BaseModel):
    content: str = Field(min_length=1)


class CommentUpdate(BaseModel):
    content: str = Field(min_length=1)


class CommentResponse(BaseModel):
    id: str
    task_id: int
    user_id: str
    content: str
    created_at: datetime
    updated_at: datetime
    author: Optional[ProfileSummary] = None

    model_config = ConfigDict(from_attributes=True)

    @computed_field
    @property
    def edited(self) -> bool:
        return self.updated_at > self.created_at
