from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Optional


class CategoryCreate(BaseModel):
    name: str = Field(min_length=1)
    color: str = "#6366f1"


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    color: Optional[str] = None


class CategoryResponse(BaseModel):
    id: int
    name: str
    color: str
    user_id: Optional[str]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
