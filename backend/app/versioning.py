"""
Versioned User API: Query-String API Versioning
=================================================

What:  Parses, reads and resolves the API version of a request, and routes
       the request only to endpoints registered for that version.
Why:   FastAPI/Starlette route on method + path only. Two versions of
       POST /User share the same path and differ by ?api-version=N.
How:
    1. ApiVersionMiddleware calls ApiVersionResolver.resolve() and stores the
       result in request.state.api_version (scope["state"]).
    2. Each versioned router uses a VersionedAPIRoute subclass bound to one
       ApiVersion; its matches() refuses requests resolved to another version.
    3. VersionedRouter keeps the version → router mapping, used to mount the
       routes, answer "is this path versioned?", and build per-version docs.

Version format:
    "1", "2", "1.0", "2.0" (major[.minor]). 1 and 1.0 are the same version.
    Group names follow the 'v' + major pattern: v1, v2.
"""

import logging
import re
from dataclasses import dataclass
from functools import total_ordering
from typing import Dict, Iterable, List, Optional, Tuple, Type

from fastapi import APIRouter, FastAPI
from fastapi.routing import APIRoute
from starlette.requests import Request
from starlette.routing import BaseRoute, Match
from starlette.types import Scope

from app.exceptions import (
    AmbiguousApiVersionError,
    InvalidApiVersionError,
    UnspecifiedApiVersionError,
    UnsupportedApiVersionError,
)

logger = logging.getLogger(__name__)

API_VERSION_QUERY_PARAM = "api-version"
API_VERSION_STATE_KEY = "api_version"

_VERSION_PATTERN = re.compile(r"^([0-9]+)(?:\.([0-9]+))?$")


@total_ordering
@dataclass(frozen=True, eq=False)
class ApiVersion:
    """
    A major[.minor] API version.

    minor is kept as given (None for "1") so str() round-trips the
    declared form, but comparison treats a missing minor as 0.
    """

    major: int
    minor: Optional[int] = None

    @classmethod
    def parse(cls, text: str) -> "ApiVersion":
        """Parse "1" / "1.0"; raises InvalidApiVersionError otherwise."""
        match = _VERSION_PATTERN.match(text.strip())
        if match is None:
            raise InvalidApiVersionError(text)
        major, minor = match.groups()
        return cls(int(major), int(minor) if minor is not None else None)

    @property
    def group_name(self) -> str:
        if self.minor:
            return f"v{self.major}.{self.minor}"
        return f"v{self.major}"

    def _key(self) -> Tuple[int, int]:
        return (self.major, self.minor or 0)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ApiVersion):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: "ApiVersion") -> bool:
        return self._key() < other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __str__(self) -> str:
        if self.minor is None:
            return str(self.major)
        return f"{self.major}.{self.minor}"


@dataclass(frozen=True)
class ApiVersionDescription:
    """One documented API version group."""

    api_version: ApiVersion
    group_name: str
    deprecated: bool = False


# ══════════════════════════════════════════════════════════════════════════
# Reading & Resolving
# ══════════════════════════════════════════════════════════════════════════


class ApiVersionReader:
    """
    Reads the raw version text from a request.

    Sources:
        - ?api-version=N (always)
        - a request header, when header_name is configured

    The same version given in several places is fine, even when written
    differently ("1" and "1.0"); different versions raise
    AmbiguousApiVersionError. Malformed values raise InvalidApiVersionError.
    """

    def __init__(self, header_name: str = ""):
        self.header_name = header_name

    def read(self, request: Request) -> Optional[str]:
        """Return the requested version text as first given, or None."""
        candidates: List[str] = list(request.query_params.getlist(API_VERSION_QUERY_PARAM))
        if self.header_name:
            candidates.extend(request.headers.getlist(self.header_name))

        distinct: Dict[ApiVersion, str] = {}
        for value in candidates:
            value = value.strip()
            if value:
                distinct.setdefault(ApiVersion.parse(value), value)

        if len(distinct) > 1:
            raise AmbiguousApiVersionError(list(distinct.values()))
        return next(iter(distinct.values()), None)


class ApiVersionResolver:
    """
    Turns a request into the ApiVersion that should serve it.

    Raises:
        UnspecifiedApiVersionError: nothing supplied and no default assumed
        InvalidApiVersionError:     not major[.minor]
        UnsupportedApiVersionError: no endpoint registered for that version
        AmbiguousApiVersionError:   conflicting query / header values
    """

    def __init__(
        self,
        supported: Iterable[ApiVersion],
        default: ApiVersion,
        assume_default: bool = True,
        reader: Optional[ApiVersionReader] = None,
    ):
        self.supported = sorted(set(supported))
        self.default = default
        self.assume_default = assume_default
        self.reader = reader or ApiVersionReader()

    def resolve(self, request: Request) -> ApiVersion:
        raw = self.reader.read(request)
        if raw is None:
            if not self.assume_default:
                raise UnspecifiedApiVersionError()
            return self.default

        version = ApiVersion.parse(raw)
        if version not in self.supported:
            raise UnsupportedApiVersionError(raw, [str(v) for v in self.supported])
        return version


# ══════════════════════════════════════════════════════════════════════════
# Routing
# ══════════════════════════════════════════════════════════════════════════


class VersionedAPIRoute(APIRoute):
    """
    APIRoute that only matches requests resolved to its api_version.

    Not used directly: versioned_route_class() binds api_version on a
    subclass, which APIRouter(route_class=...) then instantiates per route.

    Paths match case-insensitively: /User and /user are the same resource.
    """

    api_version: ApiVersion

    def __init__(self, path: str, endpoint, **kwargs):
        super().__init__(path, endpoint, **kwargs)
        self.path_regex = re.compile(self.path_regex.pattern, re.IGNORECASE)

    def matches(self, scope: Scope) -> Tuple[Match, Scope]:
        match, child_scope = super().matches(scope)
        if match is Match.NONE:
            return match, child_scope
        requested = scope.get("state", {}).get(API_VERSION_STATE_KEY)
        if requested != self.api_version:
            return Match.NONE, {}
        return match, child_scope


def versioned_route_class(version: ApiVersion) -> Type[VersionedAPIRoute]:
    return type(
        f"APIRouteV{str(version).replace('.', '_')}",
        (VersionedAPIRoute,),
        {"api_version": version},
    )


def versioned_router(version: str, **kwargs) -> APIRouter:
    """
    Create an APIRouter whose routes only serve the given API version.

    Usage:
        router = versioned_router("2", tags=["User"])

        @router.post("/User")
        async def post_user(...): ...
    """
    return APIRouter(route_class=versioned_route_class(ApiVersion.parse(version)), **kwargs)


class VersionedRouter:
    """
    Explicit version → router mapping.

    Built in create_app() from the per-version route modules and stored
    on app.state.api_versions for the middleware and docs routes.
    """

    def __init__(self, routers: Iterable[APIRouter] = ()):
        self._routers: Dict[ApiVersion, APIRouter] = {}
        for router in routers:
            self.add(router)

    def add(self, router: APIRouter) -> None:
        route_class = router.route_class
        if not (isinstance(route_class, type) and issubclass(route_class, VersionedAPIRoute)):
            raise ValueError("Router was not created with versioned_router()")
        version = route_class.api_version
        if version in self._routers:
            raise ValueError(f"API version {version} is already registered")
        self._routers[version] = router

    @property
    def versions(self) -> List[ApiVersion]:
        return sorted(self._routers)

    def routes_for(self, version: ApiVersion) -> List[BaseRoute]:
        return list(self._routers[version].routes)

    def is_versioned_path(self, path: str) -> bool:
        return any(
            isinstance(route, APIRoute) and route.path_regex.match(path)
            for router in self._routers.values()
            for route in router.routes
        )

    def describe(self, deprecated: Iterable[str] = ()) -> List[ApiVersionDescription]:
        """One description per registered version, in version order."""
        deprecated_versions = {ApiVersion.parse(v) for v in deprecated}
        return [
            ApiVersionDescription(
                api_version=version,
                group_name=version.group_name,
                deprecated=version in deprecated_versions,
            )
            for version in self.versions
        ]

    def include_in(self, app: FastAPI) -> None:
        for version in self.versions:
            app.include_router(self._routers[version])
            logger.debug("Mounted API version %s", version)
