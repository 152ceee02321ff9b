"""
Notes API — Request ID Middleware
==================================

What:  Assigns a correlation ID to each request and echoes it in X-Request-ID.
How:   Uses the client's X-Request-ID when present, otherwise a short UUID;
       stores it in a ContextVar so loggers and exception handlers can read it.

Every log line for one request, including the store error behind a generic
"Failed to fetch notes", can be found by this ID.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Behavior:
        1. Reuse the client's X-Request-ID header if sent
        2. Otherwise generate an 8-character UUID prefix
        3. Store in ContextVar and request.state
        4. Add to the response headers
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())[:8]

        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
