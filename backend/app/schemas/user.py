"""
Versioned User API: Pydantic Request/Response Schemas
=======================================================

What:  Pydantic models defining the API contract of each API version.
Why:   Strict input shapes, automatic serialization, and per-version
       OpenAPI doc generation.
How:   Python attribute names are snake_case; wire names are declared as
       aliases (FirstName, userRole, UserRoles, Message, Success) and FastAPI
       serializes responses by alias.

Version differences:
    v1: {FirstName, LastName, userRole[]}  → {Message}
    v2: {FirstName, LastName, UserRoles[]} → {Message, Success}

Missing or null fields deserialize to "" / [] on purpose: emptiness is a
validation failure reported in the versioned 400 body, not a 422.
"""

from abc import ABC, abstractmethod
from typing import Any, ClassVar, List, Optional

from pydantic import BaseModel, Field, field_validator


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class UserRequestBase(BaseModel, ABC):
    """
    Fields shared by every version of the user payload.

    Subclasses add the roles field under their own wire name, expose it
    through the `roles` property, and list their wire names in
    `required_fields` (declaration order).
    """

    first_name: str = Field(default="", alias="FirstName", description="User's first name")
    last_name: str = Field(default="", alias="LastName", description="User's last name")

    required_fields: ClassVar[tuple] = ("FirstName", "LastName")

    model_config = {"populate_by_name": True, "frozen": True}

    @field_validator("first_name", "last_name", mode="before")
    @classmethod
    def null_name_is_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @property
    @abstractmethod
    def roles(self) -> List[str]:
        """The version-specific roles field."""


class UserRequestV1(UserRequestBase):
    """POST /User?api-version=1 body."""

    user_role: List[str] = Field(
        default_factory=list,
        alias="userRole",
        description="Roles assigned to the user",
    )

    required_fields: ClassVar[tuple] = ("FirstName", "LastName", "userRole")

    @field_validator("user_role", mode="before")
    @classmethod
    def null_roles_are_empty(cls, v: Any) -> Any:
        return [] if v is None else v

    @property
    def roles(self) -> List[str]:
        return self.user_role


class UserRequestV2(UserRequestBase):
    """POST /User?api-version=2 body."""

    user_roles: List[str] = Field(
        default_factory=list,
        alias="UserRoles",
        description="Roles assigned to the user",
    )

    required_fields: ClassVar[tuple] = ("FirstName", "LastName", "UserRoles")

    @field_validator("user_roles", mode="before")
    @classmethod
    def null_roles_are_empty(cls, v: Any) -> Any:
        return [] if v is None else v

    @property
    def roles(self) -> List[str]:
        return self.user_roles


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class UserResponseV1(BaseModel):
    """Greeting or validation failure message."""

    message: str = Field(alias="Message", description="Greeting or validation failure message")

    model_config = {"populate_by_name": True}


class UserResponseV2(BaseModel):
    """
    v2 adds an explicit Success flag so clients don't have to inspect the
    status code or parse the message.
    """

    message: str = Field(alias="Message", description="Greeting or validation failure message")
    success: bool = Field(alias="Success", description="Whether the payload passed validation")

    model_config = {"populate_by_name": True}


# ══════════════════════════════════════════════════════════════════════════
# Error & Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Standardized error format for service-level errors
           (version resolution, unknown doc group, unexpected failures).

    Example:
        {
            "error": "unsupported_api_version",
            "message": "The API version '3' is not supported.",
            "details": {"requested_version": "3", "supported_versions": ["1", "2"]},
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and load balancer probes."""
    status: str = Field(description="Overall service status")
    version: str = Field(description="Application version")
    api_versions: List[str] = Field(description="API versions served")
    deprecated_api_versions: List[str] = Field(
        default_factory=list,
        description="Served API versions marked as deprecated",
    )
    uptime_seconds: float = Field(description="Seconds since service started")
