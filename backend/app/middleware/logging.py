"""
Versioned User API: Request Logging Middleware
================================================

What:  One log line per HTTP request: method, path, API version, status, duration.
Why:   Shows which API versions clients actually call, which matters before
       retiring a deprecated one.
How:   Measures time around call_next; reads the version the resolver stored
       in request.state (absent for unversioned paths and rejected versions).
When:  After RequestIDMiddleware (uses the request ID for correlation),
       before ApiVersionMiddleware (so rejected versions are logged too).

Log levels by status:
    5xx → ERROR, 4xx → WARNING, otherwise INFO

Request bodies are never logged (they contain user names).
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.middleware.request_id import request_id_var

logger = logging.getLogger("userapi.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs each request with its duration and resolved API version."""

    # Polled every few seconds by orchestrators; logging them is noise
    SKIPPED_PATHS = {"/health"}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in self.SKIPPED_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"
        rid = request_id_var.get("")

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        api_version = getattr(request.state, "api_version", None)
        version_label = str(api_version) if api_version is not None else "-"

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s v=%s %d %.1fms [%s] from %s",
            request.method,
            path,
            version_label,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": path,
                "api_version": version_label,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response
