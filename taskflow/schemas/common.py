from typing import Generic, TypeVar
from pydantic import BaseModel

T = TypeVar("T")


class DataResponse(BaseModel, Generic[T]):
    """`{"data": ...}` envelope used by every read/write endpoint."""
    data: T


class SuccessResponse(BaseModel):
    success: bool = True
