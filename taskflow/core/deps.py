from typing import Optional
from fastapi import Depends, Header
from sqlalchemy.orm import Session

from taskflow.core.database import get_db
from taskflow.core.exceptions import UnauthorizedError
from taskflow.core.security import decode_token
from taskflow.models.profile import Profile


def get_current_user(
    db: Session = Depends(get_db),
    authorization: Optional[str] = Header(None)
) -> Profile:
    """
    Resolve the caller from the `Authorization: Bearer <token>` header.

    Every protected router depends on this; a missing, malformed or expired
    token and a token whose profile no longer exists are all 401.
    """
    if not authorization:
        raise UnauthorizedError("Missing token")

    token = authorization.replace("Bearer ", "")
    user_id = decode_token(token)
    if not user_id:
        raise UnauthorizedError("Invalid token")

    user = db.query(Profile).filter(Profile.id == user_id).first()
    if not user:
        raise UnauthorizedError("User not found")

    return user
