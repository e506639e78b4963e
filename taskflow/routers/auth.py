from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from taskflow.core.database import get_db
from taskflow.core.deps import get_current_user
from taskflow.models.profile import Profile
from taskflow.schemas.common import DataResponse
from taskflow.schemas.profile import LoginRequest, ProfileResponse, RefreshRequest, RegisterRequest, TokenResponse
from taskflow.services import profile_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def register(data: RegisterRequest, db: Session = Depends(get_db)):
    """Create a profile and sign it in"""
    return profile_service.register(db, data.email, data.password, data.full_name)


@router.post("/login", response_model=TokenResponse)
def login(credentials: LoginRequest, db: Session = Depends(get_db)):
    return profile_service.login(db, credentials.email, credentials.password)


@router.post("/refresh", response_model=TokenResponse)
def refresh(data: RefreshRequest, db: Session = Depends(get_db)):
    """Trade a refresh token for a new access token"""
    return profile_service.refresh(db, data.refresh_token)


@router.get("/me", response_model=DataResponse[ProfileResponse])
def me(current_user: Profile = Depends(get_current_user)):
    return {"data": current_user}


@router.get("/profile", response_model=DataResponse[ProfileResponse])
def profile(current_user: Profile = Depends(get_current_user)):
    return {"data": current_user}
