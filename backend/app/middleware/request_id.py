"""
Greeter Backend - Request ID Middleware
=========================================

What:  Assigns a correlation ID to each incoming request and returns it
       in the X-Request-ID response header.
How:   Uses the client's X-Request-ID when present, otherwise a short UUID;
       stores it in a ContextVar (for loggers and exception handlers) and in
       request.state (for route handlers).
When:  Outermost application middleware, so every later log line can use it.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    """8 hex characters: short enough for log lines, unique enough to correlate."""
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware that assigns a unique ID to each request for tracing.

    Behavior:
        1. Check if client sent X-Request-ID header
        2. If present: use it; if absent: generate a new one
        3. Store in ContextVar and request.state
        4. Add to response headers for client to capture
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get(REQUEST_ID_HEADER) or new_request_id()

        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
