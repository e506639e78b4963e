from datetime import timedelta
from typing import Optional
from jose import JWTError, jwt
from taskflow.core.config import settings
from taskflow.utils.time import utc_now


def _encode(user_id: str, email: str, minutes: int, token_type: str) -> str:
    payload = {
        "user_id": user_id,
        "email": email,
        "exp": utc_now() + timedelta(minutes=minutes),
        "type": token_type,
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm="HS256")


def create_access_token(user_id: str, email: str) -> str:
    return _encode(user_id, email, settings.JWT_EXPIRE_MIN, "access")


def create_refresh_token(user_id: str, email: str) -> str:
    # 30 days by default
    return _encode(user_id, email, settings.JWT_REFRESH_EXPIRE_MIN, "refresh")


def verify_token(token: str) -> Optional[dict]:
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=["HS256"])
    except JWTError:
        return None


def decode_token(token: str) -> Optional[str]:
    """Return the user id carried by an access token, or None."""
    payload = verify_token(token)
    if payload is None or payload.get("type") != "access":
        return None
    return payload.get("user_id")
