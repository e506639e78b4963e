from pydantic import BaseModel, EmailStr, ConfigDict, Field, computed_field
from datetime import datetime
from typing import Optional

from taskflow.utils.text import get_initials


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)
    full_name: Optional[str] = None


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class RefreshRequest(BaseModel):
    refresh_token: str


class ProfileUpdate(BaseModel):
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    phone: Optional[str] = None


class ProfileResponse(BaseModel):
    id: str
    email: str
    full_name: Optional[str]
    avatar_url: Optional[str] = None
    phone: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @computed_field
    @property
    def initials(self) -> str:
        return get_initials(self.full_name or self.email)


class ProfileSummary(BaseModel):
    """Embedded author/user block on comments, assignments and collaborators."""
    id: str
    email: str
    full_name: Optional[str]
    avatar_url: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class TokenResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    user: Optional[ProfileResponse] = None
