from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from taskflow.core.database import get_db
from taskflow.core.deps import get_current_user
from taskflow.models.profile import Profile
from taskflow.schemas.common import DataResponse
from taskflow.schemas.profile import ProfileResponse, ProfileUpdate
from taskflow.services import profile_service

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.get("", response_model=DataResponse[List[ProfileResponse]])
def list_profiles(
    q: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    if q:
        return {"data": profile_service.search_profiles(db, q)}
    return {"data": profile_service.list_profiles(db)}


@router.get("/{profile_id}", response_model=DataResponse[ProfileResponse])
def get_profile(
    profile_id: str,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    return {"data": profile_service.get_profile(db, profile_id)}


@router.put("/{profile_id}", response_model=DataResponse[ProfileResponse])
def update_profile(
    profile_id: str,
    data: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    profile = profile_service.update_profile(db, profile_id, data.model_dump(exclude_unset=True), current_user.id)
    return {"data": profile}
