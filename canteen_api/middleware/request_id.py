"""
Canteen API — Request ID Middleware
====================================

What:  Assigns a short id to each incoming request and echoes it back.
How:   Reuses the client's X-Request-ID header when present, otherwise the
       first 8 characters of a uuid4. Stored in a ContextVar for loggers and
       exception handlers, and in `request.state` for route handlers.

Unhandled exceptions from inside the app are answered here with the 500
envelope. Starlette would otherwise render them in ServerErrorMiddleware,
outside this middleware, after the id has been reset and without the header.
"""

import logging
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from canteen_api.exceptions import INTERNAL_ERROR_MESSAGE
from canteen_api.schemas.common import error_response

logger = logging.getLogger(__name__)

# Coroutine-local: concurrent requests on one event loop each see their own id
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Sets `request_id_var` and the X-Request-ID response header."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]

        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        except Exception as e:
            logger.error("[%s] Unexpected error: %s", rid, str(e), exc_info=True)
            response = error_response(500, INTERNAL_ERROR_MESSAGE)
        finally:
            request_id_var.reset(token)

        response.headers["X-Request-ID"] = rid
        return response
