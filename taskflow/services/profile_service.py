from typing import List
from sqlalchemy import or_
from sqlalchemy.orm import Session

from taskflow.core.exceptions import ConflictError, ForbiddenError, NotFoundError, UnauthorizedError
from taskflow.core.security import create_access_token, create_refresh_token, verify_token
from taskflow.models.profile import Profile

SEARCH_LIMIT = 10


def _token_bundle(profile: Profile) -> dict:
    return {
        "access_token": create_access_token(profile.id, profile.email),
        "refresh_token": create_refresh_token(profile.id, profile.email),
        "token_type": "bearer",
        "user": profile,
    }


def register(db: Session, email: str, password: str, full_name: str = None) -> dict:
    email = email.lower()
    if db.query(Profile).filter(Profile.email == email).first():
        raise ConflictError("Email already registered")

    profile = Profile(email=email, full_name=full_name)
    profile.set_password(password)
    db.add(profile)
    db.commit()
    db.refresh(profile)
    return _token_bundle(profile)


def login(db: Session, email: str, password: str) -> dict:
    profile = db.query(Profile).filter(Profile.email == email.lower()).first()
    # same message for both cases
    if not profile or not profile.verify_password(password):
        raise UnauthorizedError("Invalid credentials")
    return _token_bundle(profile)


def refresh(db: Session, refresh_token: str) -> dict:
    payload = verify_token(refresh_token)
    if not payload or payload.get("type") != "refresh":
        raise UnauthorizedError("Invalid refresh token")

    profile = db.query(Profile).filter(Profile.id == payload.get("user_id")).first()
    if not profile:
        raise UnauthorizedError("User not found")

    return {
        "access_token": create_access_token(profile.id, profile.email),
        "refresh_token": refresh_token,
        "token_type": "bearer",
        "user": profile,
    }


def get_profile(db: Session, profile_id: str) -> Profile:
    profile = db.query(Profile).filter(Profile.id == profile_id).first()
    if not profile:
        raise NotFoundError("Profile not found")
    return profile


def get_by_email(db: Session, email: str):
    return db.query(Profile).filter(Profile.email == email.lower()).first()


def update_profile(db: Session, profile_id: str, data: dict, caller_id: str) -> Profile:
    profile = get_profile(db, profile_id)
    if profile.id != caller_id:
        raise ForbiddenError("You can only update your own profile")

    for field, value in data.items():
        setattr(profile, field, value)
    db.commit()
    db.refresh(profile)
    return profile


def list_profiles(db: Session) -> List[Profile]:
    return db.query(Profile).order_by(Profile.full_name, Profile.email).all()


def search_profiles(db: Session, query: str) -> List[Profile]:
    pattern = f"%{query}%"
    return db.query(Profile).filter(
        or_(Profile.full_name.ilike(pattern), Profile.email.ilike(pattern))
    ).order_by(Profile.full_name, Profile.email).limit(SEARCH_LIMIT).all()
