from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Optional


class AttachmentResponse(BaseModel):
    id: str
    task_id: int
    user_id: str
    file_name: str
    file_path: str
    file_size: int
    file_type: str
    created_at: datetime
    public_url: Optional[str] = None
    size_label: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class SignedUrlResponse(BaseModel):
    signed_url: str
    expires_in: int
