"""Correlation ID middleware.

Pure ASGI middleware (not BaseHTTPMiddleware) so the request runs in the
same task as the database session it opens.
"""

import time
import uuid

from starlette.types import ASGIApp, Message, Receive, Scope, Send

from sprout_api.logging_config import correlation_id_ctx, get_logger

logger = get_logger(__name__)

CORRELATION_ID_HEADER = "X-Correlation-ID"

# Client-supplied IDs longer than this are replaced
_MAX_CORRELATION_ID_LENGTH = 128

# Probe endpoints are polled constantly; don't log them
_QUIET_PATH_PREFIXES = ("/health",)


def _resolve_correlation_id(scope: Scope) -> str:
    headers = dict(scope.get("headers", []))
    supplied = headers.get(CORRELATION_ID_HEADER.lower().encode(), b"").decode(
        "latin-1"
    )
    if supplied and len(supplied) <= _MAX_CORRELATION_ID_LENGTH:
        return supplied
    return str(uuid.uuid4())


class CorrelationIdMiddleware:
    """Bind a correlation ID to every HTTP request.

    Reuses the incoming X-Correlation-ID header when present, otherwise
    generates a UUID. The ID is stored in ``correlation_id_ctx`` for the
    log formatters and echoed back in the response headers.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        correlation_id = _resolve_correlation_id(scope)
        token = correlation_id_ctx.set(correlation_id)

        method = scope.get("method", "")
        path = scope.get("path", "")
        quiet = path.startswith(_QUIET_PATH_PREFIXES)
        start_time = time.perf_counter()
        status_code: int | None = None

        async def send_wrapper(message: Message) -> None:
            nonlocal status_code

            if message["type"] == "http.response.start":
                status_code = message.get("status")
                headers = list(message.get("headers", []))
                headers.append(
                    (CORRELATION_ID_HEADER.lower().encode(), correlation_id.encode())
                )
                message = {**message, "headers": headers}

            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
            if not quiet:
                logger.info(
                    "Request completed",
                    method=method,
                    path=path,
                    status_code=status_code,
                    duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
                )
        except Exception:
            logger.exception(
                "Request failed",
                method=method,
                path=path,
                duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
            )
            raise
        finally:
            correlation_id_ctx.reset(token)
