"""
BlockNotes — Request ID Middleware
====================================

What:  Assigns a correlation id to each request and echoes it back in the
       X-Request-ID response header.
Why:   Error bodies carry the same id, so an autosave failure reported by the
       editor can be matched to the server log line.

A client-provided X-Request-ID is reused when it looks sane (short, printable);
otherwise an 8-character id is generated.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own id
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

MAX_CLIENT_ID_LENGTH = 64


def _client_request_id(request: Request) -> str:
    rid = request.headers.get("X-Request-ID", "").strip()
    if rid and len(rid) <= MAX_CLIENT_ID_LENGTH and rid.isprintable():
        return rid
    return ""


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Stores the request id in request_id_var and request.state."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = _client_request_id(request) or uuid.uuid4().hex[:8]

        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers["X-Request-ID"] = rid
        return response
