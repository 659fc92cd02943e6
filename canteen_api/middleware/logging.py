"""
Canteen API — Request Logging Middleware
=========================================

What:  One access log line per HTTP request.
How:   Measures wall time around the downstream call and logs method, path,
       status, duration, request id and client IP on `canteen_api.access`.

Level by status:
    5xx → ERROR, 4xx → WARNING, everything else → INFO.

Request bodies are never logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from canteen_api.middleware.request_id import request_id_var

logger = logging.getLogger("canteen_api.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs each request/response pair; /health is skipped (probe noise)."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()

        # request.client may be None in testing
        client_ip = request.client.host if request.client else "unknown"
        method = request.method
        path = request.url.path

        if path == "/health":
            return await call_next(request)

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        rid = request_id_var.get("")

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
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
