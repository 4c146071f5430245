"""
mandihub.observability.middleware

HTTP middleware for request-scoped logging context.
"""

from __future__ import annotations

import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Binds request id, path, method and the selected backend into structlog
    contextvars so every log line of a request carries them.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            path=request.url.path,
            method=request.method,
        )
        # Every catalog route ends with the backend segment (`/category/mongo`, ...).
        backend = request.url.path.rstrip("/").rsplit("/", 1)[-1]
        if backend in ("mongo", "mysql"):
            structlog.contextvars.bind_contextvars(backend=backend)
        try:
            response: Response = await call_next(request)
        finally:
            structlog.contextvars.clear_contextvars()

        response.headers["x-request-id"] = request_id
        return response
