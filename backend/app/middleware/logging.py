"""
Greeter Backend - Request Logging Middleware
==============================================

What:  One structured access-log line for every HTTP request.
How:   Measures the time spent in the rest of the chain and logs method,
       path, status, duration, request ID and client IP.
When:  Runs inside RequestIDMiddleware, so the request ID is already set.

Log line:
    GET /hello 200 0.4ms [1a2b3c4d] from 127.0.0.1

Extra fields (for JSON formatters):
    request_id, method, path, status, duration_ms, client_ip

Request bodies and headers are never logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.middleware.request_id import request_id_var

logger = logging.getLogger("greeter.access")


def level_for_status(status: int) -> int:
    """5xx → ERROR, 4xx → WARNING, everything else → INFO."""
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs structured information about each HTTP request and response.

    Duration is measured from middleware entry to response return, which
    covers routing, the handler and response serialization.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()

        # request.client is None under some test transports
        client_ip = request.client.host if request.client else "unknown"
        method = request.method
        path = request.url.path
        rid = request_id_var.get("")

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = response.status_code

        logger.log(
            level_for_status(status),
            "%s %s %d %.1fms [%s] from %s",
            method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response
