"""
Versioned User API: Custom Exception Hierarchy
================================================

What:  Defines application-specific exceptions for different error scenarios.
Why:   Custom exceptions enable targeted error handling with appropriate HTTP
       status codes and user-friendly messages.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by the version resolver and routes; caught by global handlers
       or, for version resolution, by ApiVersionMiddleware.

Exception Hierarchy:
    UserApiError (base)
    ├── ApiVersionError                  → 400 Bad Request
    │   ├── UnspecifiedApiVersionError   (no version, no default assumed)
    │   ├── InvalidApiVersionError       (not "major[.minor]")
    │   ├── UnsupportedApiVersionError   (well-formed but not served)
    │   └── AmbiguousApiVersionError     (query and header disagree)
    └── NotFoundError                    → 404 Not Found

Payload validation failures are NOT exceptions: the user endpoints turn
them into a versioned 400 response body themselves.
"""

from typing import Any, Dict, Optional, Sequence


class UserApiError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info, returned as "details"
    """

    status_code = 500
    error_code = "server_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)

    def to_content(self, request_id: str = "") -> Dict[str, Any]:
        """Render the standard error envelope (see schemas.user.ErrorResponse)."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.context,
            "request_id": request_id,
        }


class ApiVersionError(UserApiError):
    """
    Raised when the requested API version cannot be resolved.

    HTTP:    400 Bad Request
    Subclasses set error_code so clients can tell the cases apart.
    """

    status_code = 400
    error_code = "api_version_error"

    def __init__(
        self,
        message: str = "The requested API version could not be resolved",
        requested: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if requested is not None:
            ctx["requested_version"] = requested
        super().__init__(message=message, context=ctx)
        self.requested = requested


class UnspecifiedApiVersionError(ApiVersionError):
    """No version was supplied and the service does not assume a default."""

    error_code = "api_version_unspecified"

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(
            message="An API version is required, but was not specified.",
            context=context,
        )


class InvalidApiVersionError(ApiVersionError):
    """The supplied version is not of the form major[.minor]."""

    error_code = "invalid_api_version"

    def __init__(self, requested: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=f"The API version '{requested}' is invalid.",
            requested=requested,
            context=context,
        )


class UnsupportedApiVersionError(ApiVersionError):
    """
    The supplied version is well-formed but no endpoint serves it.

    Response includes the list of supported versions so the client can
    switch without reading the docs.
    """

    error_code = "unsupported_api_version"

    def __init__(
        self,
        requested: str,
        supported: Sequence[str] = (),
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["supported_versions"] = list(supported)
        super().__init__(
            message=f"The API version '{requested}' is not supported.",
            requested=requested,
            context=ctx,
        )
        self.supported = list(supported)


class AmbiguousApiVersionError(ApiVersionError):
    """The query string and the version header name different versions."""

    error_code = "ambiguous_api_version"

    def __init__(self, candidates: Sequence[str], context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        ctx["candidates"] = list(candidates)
        super().__init__(
            message=(
                "The following API versions were requested: "
                f"{', '.join(candidates)}. At most, only a single API version may be specified."
            ),
            context=ctx,
        )


class NotFoundError(UserApiError):
    """
    Raised when a requested resource does not exist.

    When:    GET /swagger/{group}/swagger.json for an unknown version group.
    HTTP:    404 Not Found
    """

    status_code = 404
    error_code = "not_found"

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
