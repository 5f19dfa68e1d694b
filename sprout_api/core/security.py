"""JWT access tokens carrying the caller's family context."""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt

from sprout_api.config import settings


def create_access_token(
    caretaker_id: uuid.UUID,
    family_id: uuid.UUID | None,
    role: str = "USER",
    expires_delta: timedelta | None = None,
) -> str:
    """Create a signed access token.

    Args:
        caretaker_id: Caretaker the token is issued to
        family_id: Family the caretaker acts in (None for system admins)
        role: Caretaker role (USER, ADMIN)
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT string
    """
    if expires_delta is None:
        expires_delta = timedelta(hours=settings.access_token_expire_hours)

    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(caretaker_id),
        "family_id": str(family_id) if family_id else None,
        "role": role,
        "iat": now,
        "exp": now + expires_delta,
        "type": "access",
    }

    return jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict[str, Any] | None:
    """Decode and verify a token. Returns None if invalid or expired."""
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError:
        return None

    if payload.get("type") != "access":
        return None
    return payload


class TokenData:
    """Typed view over a decoded token payload."""

    def __init__(self, payload: dict[str, Any]):
        self.caretaker_id = uuid.UUID(payload["sub"])
        family_id = payload.get("family_id")
        self.family_id = uuid.UUID(family_id) if family_id else None
        self.role = payload.get("role", "USER")
