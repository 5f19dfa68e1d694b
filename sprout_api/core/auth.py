"""Request authentication dependencies.

Resolves the Bearer token into an ``AuthContext``. Every activity
endpoint is scoped to ``AuthContext.family_id``.
"""

import uuid
from dataclasses import dataclass

from fastapi import Depends, HTTPException, Request, status

from sprout_api.core.security import TokenData, decode_access_token
from sprout_api.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class AuthContext:
    """Who is calling and for which family."""

    caretaker_id: uuid.UUID
    family_id: uuid.UUID | None
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == "ADMIN"


async def get_auth_context(request: Request) -> AuthContext:
    """Extract and validate the caller from the Authorization header.

    Raises:
        HTTPException 401: If the token is missing or invalid
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
        headers={"WWW-Authenticate": "Bearer"},
    )

    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        raise credentials_exception

    payload = decode_access_token(auth_header[7:])
    if payload is None:
        raise credentials_exception

    try:
        token_data = TokenData(payload)
    except (KeyError, ValueError):
        raise credentials_exception

    return AuthContext(
        caretaker_id=token_data.caretaker_id,
        family_id=token_data.family_id,
        role=token_data.role,
    )


async def require_family(
    auth: AuthContext = Depends(get_auth_context),
) -> AuthContext:
    """Require a family context on the token.

    Raises:
        HTTPException 403: If the token has no family
    """
    if auth.family_id is None:
        logger.warning(
            "Request without family context",
            caretaker_id=str(auth.caretaker_id),
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="No family context",
        )
    return auth


async def require_admin(
    auth: AuthContext = Depends(get_auth_context),
) -> AuthContext:
    """Require an ADMIN caretaker (monitor control surface)."""
    if not auth.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return auth
