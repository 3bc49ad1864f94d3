"""
Versioned User API: Health Check Route
========================================

What:  Health check endpoint for monitoring and load balancer probes.
Why:   Orchestrators need a cheap, unversioned URL to decide whether to
       route traffic here.
How:   The service has no external dependencies, so "healthy" means the
       process is up and at least one API version is mounted.

Also reports which API versions are served and which are deprecated,
handy when checking a deployment's DEPRECATED_API_VERSIONS.
"""

import time

from fastapi import APIRouter, Request

from app import __version__
from app.config import settings
from app.schemas.user import HealthResponse

router = APIRouter(tags=["Health"])

# Initialized once when the module loads
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(request: Request) -> HealthResponse:
    descriptions = request.app.state.api_versions.describe(
        settings.deprecated_api_versions_list
    )
    return HealthResponse(
        status="healthy" if descriptions else "unhealthy",
        version=__version__,
        api_versions=[str(d.api_version) for d in descriptions],
        deprecated_api_versions=[str(d.api_version) for d in descriptions if d.deprecated],
        uptime_seconds=round(time.time() - _start_time, 2),
    )
