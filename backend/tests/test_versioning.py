"""
Versioned User API: API Versioning Unit Tests
===============================================

What:  Tests for version parsing, reading, resolution and the version registry.
How:   Bare Starlette Requests from the make_request fixture; no app needed.

What we test:
    ✅ major[.minor] parsing, equality of 1 and 1.0, group names
    ✅ Query-string reader, optional header reader, ambiguity
    ✅ Default version, unspecified / unsupported versions
    ✅ VersionedRouter registration rules and descriptions
"""

import pytest
from fastapi import APIRouter
from pydantic import ValidationError

from app.config import Settings
from app.exceptions import (
    AmbiguousApiVersionError,
    InvalidApiVersionError,
    UnspecifiedApiVersionError,
    UnsupportedApiVersionError,
)
from app.versioning import (
    ApiVersion,
    ApiVersionReader,
    ApiVersionResolver,
    VersionedRouter,
    versioned_router,
)


class TestApiVersion:

    def test_parse_major_only(self):
        version = ApiVersion.parse("2")
        assert version.major == 2
        assert version.minor is None
        assert str(version) == "2"

    def test_major_and_major_zero_minor_are_equal(self):
        assert ApiVersion.parse("1") == ApiVersion.parse("1.0")
        assert hash(ApiVersion.parse("1")) == hash(ApiVersion.parse("1.0"))

    def test_str_keeps_declared_form(self):
        assert str(ApiVersion.parse("1.0")) == "1.0"

    def test_ordering(self):
        versions = [ApiVersion.parse(v) for v in ("2", "1.5", "1")]
        assert [str(v) for v in sorted(versions)] == ["1", "1.5", "2"]

    def test_group_name(self):
        assert ApiVersion(1).group_name == "v1"
        assert ApiVersion(2, 0).group_name == "v2"
        assert ApiVersion(1, 5).group_name == "v1.5"

    @pytest.mark.parametrize(
        "text",
        ["abc", "v1", "1.", "1.0.0", "-1", "", "٢", "1.٠", "１"],
    )
    def test_parse_rejects_malformed(self, text):
        with pytest.raises(InvalidApiVersionError):
            ApiVersion.parse(text)


class TestApiVersionReader:

    def test_reads_query_string(self, make_request):
        reader = ApiVersionReader()
        assert reader.read(make_request("api-version=2")) == "2"

    def test_nothing_supplied(self, make_request):
        assert ApiVersionReader().read(make_request()) is None

    def test_header_ignored_when_not_configured(self, make_request):
        reader = ApiVersionReader()
        assert reader.read(make_request(headers={"X-Api-Version": "2"})) is None

    def test_configured_header(self, make_request):
        reader = ApiVersionReader(header_name="X-Api-Version")
        assert reader.read(make_request(headers={"X-Api-Version": "2"})) == "2"

    def test_same_value_in_query_and_header(self, make_request):
        reader = ApiVersionReader(header_name="X-Api-Version")
        request = make_request("api-version=2", {"X-Api-Version": "2"})
        assert reader.read(request) == "2"

    def test_conflicting_values_are_ambiguous(self, make_request):
        reader = ApiVersionReader(header_name="X-Api-Version")
        request = make_request("api-version=1", {"X-Api-Version": "2"})
        with pytest.raises(AmbiguousApiVersionError) as exc_info:
            reader.read(request)
        assert exc_info.value.context["candidates"] == ["1", "2"]

    def test_equivalent_values_are_not_ambiguous(self, make_request):
        reader = ApiVersionReader(header_name="X-Api-Version")
        request = make_request("api-version=1.0", {"X-Api-Version": "1"})
        assert reader.read(request) == "1.0"

    def test_equivalent_repeated_query_params(self, make_request):
        assert ApiVersionReader().read(make_request("api-version=2&api-version=2.0")) == "2"

    def test_malformed_header_value(self, make_request):
        reader = ApiVersionReader(header_name="X-Api-Version")
        request = make_request("api-version=1", {"X-Api-Version": "latest"})
        with pytest.raises(InvalidApiVersionError):
            reader.read(request)

    def test_repeated_query_param_conflict(self, make_request):
        with pytest.raises(AmbiguousApiVersionError):
            ApiVersionReader().read(make_request("api-version=1&api-version=2"))


class TestApiVersionResolver:

    def setup_method(self):
        self.supported = [ApiVersion(1), ApiVersion(2)]

    def test_default_when_unspecified(self, make_request):
        resolver = ApiVersionResolver(self.supported, default=ApiVersion(1))
        assert resolver.resolve(make_request()) == ApiVersion(1)

    def test_unspecified_rejected_without_default(self, make_request):
        resolver = ApiVersionResolver(self.supported, default=ApiVersion(1), assume_default=False)
        with pytest.raises(UnspecifiedApiVersionError):
            resolver.resolve(make_request())

    def test_minor_zero_resolves_to_registered_major(self, make_request):
        resolver = ApiVersionResolver(self.supported, default=ApiVersion(1))
        assert resolver.resolve(make_request("api-version=2.0")) == ApiVersion(2)

    def test_unsupported_lists_supported_versions(self, make_request):
        resolver = ApiVersionResolver(self.supported, default=ApiVersion(1))
        with pytest.raises(UnsupportedApiVersionError) as exc_info:
            resolver.resolve(make_request("api-version=3"))
        assert exc_info.value.context == {
            "requested_version": "3",
            "supported_versions": ["1", "2"],
        }

    def test_malformed_version(self, make_request):
        resolver = ApiVersionResolver(self.supported, default=ApiVersion(1))
        with pytest.raises(InvalidApiVersionError):
            resolver.resolve(make_request("api-version=latest"))


class TestVersionedRouter:

    def _router(self, version: str):
        router = versioned_router(version)

        @router.get("/ping")
        async def ping():
            return {}

        return router

    def test_versions_sorted(self):
        versions = VersionedRouter([self._router("2"), self._router("1")])
        assert versions.versions == [ApiVersion(1), ApiVersion(2)]

    def test_rejects_plain_router(self):
        with pytest.raises(ValueError, match="versioned_router"):
            VersionedRouter([APIRouter()])

    def test_rejects_duplicate_version(self):
        with pytest.raises(ValueError, match="already registered"):
            VersionedRouter([self._router("1"), self._router("1.0")])

    def test_is_versioned_path(self):
        versions = VersionedRouter([self._router("1")])
        assert versions.is_versioned_path("/ping")
        assert not versions.is_versioned_path("/health")

    def test_is_versioned_path_ignores_case(self):
        versions = VersionedRouter([self._router("1")])
        assert versions.is_versioned_path("/PING")
        assert versions.is_versioned_path("/Ping")

    def test_describe_marks_deprecated(self):
        versions = VersionedRouter([self._router("1"), self._router("2")])

        descriptions = versions.describe(deprecated=["1"])

        assert [(d.group_name, d.deprecated) for d in descriptions] == [
            ("v1", True),
            ("v2", False),
        ]


class TestDefaultVersionSetting:

    def test_accepts_major_minor(self):
        assert Settings(default_api_version=" 2.0 ").default_api_version == "2.0"

    @pytest.mark.parametrize("value", ["latest", "٢", "1.٠"])
    def test_rejects_non_version(self, value):
        with pytest.raises(ValidationError):
            Settings(default_api_version=value)
