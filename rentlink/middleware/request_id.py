"""Request ID middleware and log correlation.

Every request gets an ID (the caller's ``X-Request-ID`` or a fresh UUID4).
The ID is stored on ``request.state``, echoed in the response header and
published through a context variable so that log records emitted while the
request is handled (including probe and diagnostics logs) carry it.
"""

from __future__ import annotations

import logging
import uuid
from contextvars import ContextVar

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

request_id_ctx: ContextVar[str | None] = ContextVar("rentlink_request_id", default=None)


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Assign a request ID to each request and expose it to logging."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = request_id
        token = request_id_ctx.set(request_id)
        try:
            response: Response = await call_next(request)
        finally:
            request_id_ctx.reset(token)
        response.headers["X-Request-ID"] = request_id
        return response


class RequestIdLogFilter(logging.Filter):
    """Copy the current request ID onto log records that lack one."""

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "request_id", None) is None:
            record.request_id = request_id_ctx.get()  # type: ignore[attr-defined]
        return True
