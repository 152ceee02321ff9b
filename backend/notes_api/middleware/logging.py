"""
Notes API — Request Logging Middleware
=======================================

What:  One access log line per request: method, path, status, duration.
How:   Times the downstream call and logs at a level chosen by status class.

Logged:     method, path, status, duration, request ID, client IP
Not logged: the Authorization header, query strings, request bodies

Unhandled exceptions from the routes are turned into the generic 500 here,
inside RequestIDMiddleware, so that response is still access-logged and
still carries X-Request-ID.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from notes_api.exceptions import InternalServerError
from notes_api.middleware.request_id import request_id_var

logger = logging.getLogger("notes_api.access")

# Probed every few seconds by orchestrators; not worth a log line each time
SKIP_PATHS = {"/health"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Log levels:
        5xx → ERROR, 4xx → WARNING, everything else → INFO
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        rid = request_id_var.get("")

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            logger.error("[%s] Unexpected error: %s", rid, str(e), exc_info=True)
            response = JSONResponse(status_code=500, content={"error": InternalServerError().message})
        duration_ms = (time.perf_counter() - start_time) * 1000

        if path in SKIP_PATHS:
            return response

        client_ip = request.client.host if request.client else "unknown"
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
            request.method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response
