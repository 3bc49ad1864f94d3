"""
Versioned User API: API Version Middleware
============================================

What:  Resolves the API version of each request to a versioned path.
Why:   VersionedAPIRoute.matches() needs the resolved version before routing,
       and unsupported versions should get a 400 that names the supported
       ones, not a bare 404.
How:   ApiVersionResolver reads ?api-version (and the optional header),
       the result goes to request.state.api_version; resolution errors are
       rendered here with the standard error envelope.
When:  Inside RequestLoggingMiddleware, so the access log sees the version.

Version reporting (REPORT_API_VERSIONS):
    api-supported-versions:  1, 2     (served, not deprecated)
    api-deprecated-versions: 1        (only when something is deprecated)
Added to every response of a versioned path, errors included.

Unversioned paths (/health, /swagger/...) pass straight through.
"""

import logging
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from app.config import settings
from app.exceptions import ApiVersionError
from app.middleware.request_id import request_id_var
from app.versioning import (
    ApiVersion,
    ApiVersionReader,
    ApiVersionResolver,
    VersionedRouter,
)

logger = logging.getLogger(__name__)

SUPPORTED_VERSIONS_HEADER = "api-supported-versions"
DEPRECATED_VERSIONS_HEADER = "api-deprecated-versions"


class ApiVersionMiddleware(BaseHTTPMiddleware):
    """
    Resolves and records the API version; rejects unresolvable ones with 400.

    The resolver is built from settings when the middleware stack is first
    built (first request), after all versioned routers are registered.
    """

    def __init__(
        self,
        app,
        versions: VersionedRouter,
        resolver: Optional[ApiVersionResolver] = None,
    ):
        super().__init__(app)
        self.versions = versions
        self.resolver = resolver or ApiVersionResolver(
            supported=versions.versions,
            default=ApiVersion.parse(settings.default_api_version),
            assume_default=settings.assume_default_version_when_unspecified,
            reader=ApiVersionReader(settings.api_version_header),
        )

        descriptions = versions.describe(settings.deprecated_api_versions_list)
        self.supported_header = ", ".join(
            str(d.api_version) for d in descriptions if not d.deprecated
        )
        self.deprecated_header = ", ".join(
            str(d.api_version) for d in descriptions if d.deprecated
        )

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if not self.versions.is_versioned_path(request.url.path):
            return await call_next(request)

        try:
            api_version = self.resolver.resolve(request)
        except ApiVersionError as exc:
            rid = request_id_var.get("")
            logger.warning("[%s] API version error: %s", rid, exc.message)
            response: Response = JSONResponse(
                status_code=exc.status_code,
                content=exc.to_content(rid),
            )
        else:
            request.state.api_version = api_version
            response = await call_next(request)

        if settings.report_api_versions:
            self._report_versions(response)
        return response

    def _report_versions(self, response: Response) -> None:
        if self.supported_header:
            response.headers[SUPPORTED_VERSIONS_HEADER] = self.supported_header
        if self.deprecated_header:
            response.headers[DEPRECATED_VERSIONS_HEADER] = self.deprecated_header
