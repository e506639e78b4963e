from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Optional, List, Literal, Any


class IntegrationCreate(BaseModel):
    name: str = Field(min_length=1)
    type: str = Field(min_length=1)
    config: dict[str, Any] = Field(default_factory=dict)
    is_active: bool = True


class IntegrationUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    config: Optional[dict[str, Any]] = None
    is_active: Optional[bool] = None


class IntegrationResponse(BaseModel):
    id: str
    name: str
    type: str
    config: dict[str, Any]
    is_active: bool
    user_id: Optional[str]
    created_at: datetime
    last_sync_at: Optional[datetime]

    model_config = ConfigDict(from_attributes=True)


# ---- Google Calendar ----

class SyncSettings(BaseModel):
    enabled: bool = False
    calendars: List[str] = Field(default_factory=list)
    sync_direction: Literal["import", "export", "bidirectional"] = "bidirectional"
    sync_frequency: int = Field(default=15, ge=1)  # minutes
    conflict_resolution: Literal["local", "remote", "manual"] = "manual"
    last_sync_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class SyncSettingsUpdate(BaseModel):
    enabled: Optional[bool] = None
    calendars: Optional[List[str]] = None
    sync_direction: Optional[Literal["import", "export", "bidirectional"]] = None
    sync_frequency: Optional[int] = Field(default=None, ge=1)
    conflict_resolution: Optional[Literal["local", "remote", "manual"]] = None


class SyncResult(BaseModel):
    success: bool = True
    imported: int = 0
    exported: int = 0
    conflicts: int = 0
    errors: List[str] = Field(default_factory=list)


class ConnectionStatus(BaseModel):
    state: str
    connected: bool
    last_sync_at: Optional[datetime] = None


class AuthUrlResponse(BaseModel):
    url: str


class OAuthCallback(BaseModel):
    code: str = Field(min_length=1)


class CalendarEntry(BaseModel):
    id: str
    summary: str = ""
    primary: bool = False
    accessRole: Optional[str] = None
    backgroundColor: Optional[str] = None
