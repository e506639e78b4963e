from pydantic import BaseModel, ConfigDict, Field, HttpUrl
from datetime import datetime
from typing import Optional, List


class WebhookCreate(BaseModel):
    url: HttpUrl
    events: List[str] = Field(min_length=1)
    is_active: bool = True


class WebhookUpdate(BaseModel):
    url: Optional[HttpUrl] = None
    events: Optional[List[str]] = Field(default=None, min_length=1)
    is_active: Optional[bool] = None


class WebhookResponse(BaseModel):
    id: str
    url: str
    events: List[str]
    secret: str
    is_active: bool
    user_id: Optional[str]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
