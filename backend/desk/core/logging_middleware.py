"""Access logging middleware."""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("desk.requests")

MAX_LOGGED_BODY = 500


async def _drain_body(response: Response) -> bytes:
    body = b""
    async for chunk in response.body_iterator:
        body += chunk.encode("utf-8") if isinstance(chunk, str) else chunk
    return body


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and duration of every call.

    Rejections (4xx/5xx) also log the response body, so the ``detail`` of
    a refused transition shows up next to the request that caused it.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start = time.monotonic()
        response = await call_next(request)
        elapsed_ms = (time.monotonic() - start) * 1000

        status = response.status_code
        target = f"{request.method} {request.url.path}"

        if status < 400 or not hasattr(response, "body_iterator"):
            logger.info("%s → %d (%.0fms)", target, status, elapsed_ms)
            return response

        body = await _drain_body(response)
        detail = body.decode("utf-8", errors="replace")
        if len(detail) > MAX_LOGGED_BODY:
            detail = detail[:MAX_LOGGED_BODY] + "..."

        log = logger.warning if status < 500 else logger.error
        log("%s → %d (%.0fms): %s", target, status, elapsed_ms, detail)

        # The original body iterator is consumed; hand back a fresh response.
        return Response(
            content=body,
            status_code=status,
            headers=dict(response.headers),
            media_type=response.media_type,
        )
