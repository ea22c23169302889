"""
Request logging middleware for callrelay.

Binds a short request id into structlog's context for the duration of each
HTTP request, so every log line emitted by a handler carries it, then logs
one ``http_request`` line with method, path, status and latency.
Prometheus scrapes are not logged; WebSocket traffic passes through.
"""

from __future__ import annotations

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = structlog.get_logger(__name__)

_QUIET_PREFIXES: tuple[str, ...] = ("/metrics",)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log every HTTP request with a request id, status, and latency."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        path = request.url.path
        if path.startswith(_QUIET_PREFIXES):
            return await call_next(request)

        request_id = request.headers.get("x-request-id") or uuid.uuid4().hex[:12]
        start = time.monotonic()
        with structlog.contextvars.bound_contextvars(request_id=request_id):
            response = await call_next(request)
            logger.info(
                "http_request",
                method=request.method,
                path=path,
                status=response.status_code,
                duration_ms=round((time.monotonic() - start) * 1000, 2),
            )
        response.headers["x-request-id"] = request_id
        return response
