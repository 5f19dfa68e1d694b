"""Rate limiting for endpoints that call out to the push provider.

Requests are bucketed per family when a valid token is present, so
caretakers sharing a family share a budget. Anonymous or invalid
requests fall back to the client address.
"""

from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from starlette.requests import Request
from starlette.responses import JSONResponse

from sprout_api.config import settings
from sprout_api.core.security import decode_access_token
from sprout_api.logging_config import get_logger

logger = get_logger(__name__)

WARNING_NOTIFY_LIMIT = "10/minute"
TEST_NOTIFY_LIMIT = "5/minute"


def _storage_uri() -> str:
    if settings.testing or not settings.redis_url:
        return "memory://"
    return settings.redis_url


def client_address(request: Request) -> str:
    """First hop of X-Forwarded-For, then X-Real-IP, then the socket peer."""
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()
    return request.client.host if request.client else "unknown"


def rate_limit_key(request: Request) -> str:
    auth_header = request.headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        payload = decode_access_token(auth_header[7:])
        if payload and payload.get("family_id"):
            return f"family:{payload['family_id']}"
    return f"ip:{client_address(request)}"


limiter = Limiter(
    key_func=rate_limit_key,
    storage_uri=_storage_uri(),
    enabled=not settings.testing,
)


async def rate_limit_exceeded_handler(
    request: Request, exc: RateLimitExceeded
) -> JSONResponse:
    """Return a 429 JSON response when a limit is exceeded."""
    logger.warning(
        "Rate limit exceeded",
        path=request.url.path,
        key=rate_limit_key(request),
        limit=str(exc.detail),
    )
    return JSONResponse(
        status_code=429,
        content={"detail": f"Rate limit exceeded: {exc.detail}"},
    )
