"""
Versioned User API: Request ID Middleware
===========================================

What:  Assigns a correlation ID to each request and returns it in X-Request-ID.
Why:   Validation failures and version errors are logged with the ID, so a
       client reporting a 400 can be matched to the exact log line.
How:   Reuses the client's X-Request-ID header when present, otherwise
       generates a short UUID; stores it in a ContextVar and request.state.
When:  Outermost application middleware (runs before logging and versioning).
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Behavior:
        1. Use the client's X-Request-ID if sent (end-to-end tracing)
        2. Otherwise generate an 8-character UUID prefix
        3. Expose it via request_id_var and request.state.request_id
        4. Echo it in the X-Request-ID response header
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
