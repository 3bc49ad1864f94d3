"""
Versioned User API: Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Provides reusable test infrastructure (API clients, payloads, raw requests).
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── test_client: HTTPX AsyncClient over the module-level app
    ├── make_client: builds a client for a fresh create_app() (after settings patches)
    ├── make_request: builds a bare Starlette Request (query string + headers)
    ├── v1_payload / v2_payload: valid request bodies per version
"""

import os

# Override settings for testing BEFORE any app imports
os.environ["ENVIRONMENT"] = "development"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["DEPRECATED_API_VERSIONS"] = ""
os.environ["API_VERSION_HEADER"] = ""

from typing import Dict, Optional  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import AsyncClient, ASGITransport  # noqa: E402
from starlette.requests import Request  # noqa: E402


@pytest.fixture
def v1_payload():
    return {"FirstName": "Ada", "LastName": "Lovelace", "userRole": ["admin"]}


@pytest.fixture
def v2_payload():
    return {"FirstName": "Grace", "LastName": "Hopper", "UserRoles": ["admin", "auditor"]}


@pytest.fixture
def make_request():
    """
    Builds a minimal Starlette Request for reader/resolver unit tests.

    Usage:
        request = make_request("api-version=2", {"X-Api-Version": "2"})
    """

    def _make(query: str = "", headers: Optional[Dict[str, str]] = None) -> Request:
        raw_headers = [
            (name.lower().encode("latin-1"), value.encode("latin-1"))
            for name, value in (headers or {}).items()
        ]
        return Request(
            {
                "type": "http",
                "method": "POST",
                "path": "/User",
                "query_string": query.encode("latin-1"),
                "headers": raw_headers,
            }
        )

    return _make


@pytest_asyncio.fixture
async def test_client():
    """
    HTTPX AsyncClient routed straight into the app via ASGITransport.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from app.main import app
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def make_client():
    """
    Client factory for tests that patch settings first.

    Why a fresh app: the middleware stack (and the version resolver it
    holds) is built on the first request, from settings at that moment.

    Usage:
        monkeypatch.setattr(settings, "api_version_header", "X-Api-Version")
        async with make_client() as client:
            ...
    """
    from app.main import create_app

    def _make() -> AsyncClient:
        transport = ASGITransport(app=create_app())
        return AsyncClient(transport=transport, base_url="http://test")

    return _make
