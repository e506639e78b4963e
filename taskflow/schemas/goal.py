from pydantic import BaseModel, ConfigDict, Field, model_validator
from datetime import datetime
from typing import Optional


class GoalCreate(BaseModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    target: int = Field(ge=1)
    current: int = Field(default=0, ge=0)
    completed: bool = False
    category: str = Field(min_length=1)
    type: str = Field(min_length=1)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None

    @model_validator(mode="after")
    def check_dates(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class GoalUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    target: Optional[int] = Field(default=None, ge=1)
    current: Optional[int] = Field(default=None, ge=0)
    completed: Optional[bool] = None
    category: Optional[str] = Field(default=None, min_length=1)
    type: Optional[str] = Field(default=None, min_length=1)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


class GoalResponse(BaseModel):
    id: int
    user_id: str
    title: str
    description: Optional[str]
    target: int
    current: Optional[int]
    completed: bool
    category: str
    type: str
    start_date: Optional[datetime]
    end_date: Optional[datetime]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
