"""
Versioned User API: Per-Version API Documentation
===================================================

What:  One OpenAPI document per API version group, plus a Swagger UI page
       that lists every group.
Why:   FastAPI's single /openapi.json would merge both versions of
       POST /User into one path item. Each version needs its own document.
How:   fastapi.openapi.utils.get_openapi() is called with only the routes
       of the requested version.
When:  Mounted by create_app() in the development environment only.

Routes:
    GET /swagger                         Swagger UI (V1, V2 definitions)
    GET /swagger/{group}/swagger.json    OpenAPI document for v1 / v2
"""

import json
from html import escape

from fastapi import APIRouter, Request
from fastapi.openapi.utils import get_openapi
from fastapi.responses import HTMLResponse

from app.config import settings
from app.exceptions import NotFoundError
from app.versioning import ApiVersionDescription, VersionedRouter

router = APIRouter(tags=["Docs"], include_in_schema=False)

DEPRECATED_DESCRIPTION = "This version has been marked as deprecated."

SWAGGER_UI_CDN = "https://cdn.jsdelivr.net/npm/swagger-ui-dist@5"

# Literal JS braces are doubled for str.format
SWAGGER_UI_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<link type="text/css" rel="stylesheet" href="{css_url}">
<title>{title}</title>
</head>
<body>
<div id="swagger-ui"></div>
<script src="{bundle_url}"></script>
<script src="{preset_url}"></script>
<script>
const ui = SwaggerUIBundle({{
    urls: {urls},
    dom_id: "#swagger-ui",
    deepLinking: true,
    presets: [SwaggerUIBundle.presets.apis, SwaggerUIStandalonePreset],
    plugins: [SwaggerUIBundle.plugins.DownloadUrl],
    layout: "StandaloneLayout",
}})
</script>
</body>
</html>
"""


def openapi_url_for(group_name: str) -> str:
    return f"/swagger/{group_name}/swagger.json"


def build_openapi(versions: VersionedRouter, description: ApiVersionDescription) -> dict:
    """OpenAPI document restricted to the routes of one version group."""
    return get_openapi(
        title=f"API {description.group_name}",
        version=str(description.api_version),
        description=DEPRECATED_DESCRIPTION if description.deprecated else "",
        routes=versions.routes_for(description.api_version),
    )


def _descriptions(request: Request):
    versions: VersionedRouter = request.app.state.api_versions
    return versions, versions.describe(settings.deprecated_api_versions_list)


@router.get("/swagger/{group_name}/swagger.json")
async def versioned_openapi(group_name: str, request: Request) -> dict:
    versions, descriptions = _descriptions(request)
    for description in descriptions:
        if description.group_name == group_name:
            return build_openapi(versions, description)
    raise NotFoundError(resource="API version group", resource_id=group_name)


@router.get("/swagger", response_class=HTMLResponse)
async def swagger_ui(request: Request) -> HTMLResponse:
    """
    Swagger UI with a definition picker (top bar) listing every group.

    FastAPI's get_swagger_ui_html() only loads swagger-ui-bundle.js, which
    has no StandaloneLayout; the top bar needs the standalone preset script.
    """
    _, descriptions = _descriptions(request)
    urls = [
        {"url": openapi_url_for(d.group_name), "name": d.group_name.upper()}
        for d in descriptions
    ]
    html = SWAGGER_UI_TEMPLATE.format(
        title=escape(request.app.title),
        css_url=f"{SWAGGER_UI_CDN}/swagger-ui.css",
        bundle_url=f"{SWAGGER_UI_CDN}/swagger-ui-bundle.js",
        preset_url=f"{SWAGGER_UI_CDN}/swagger-ui-standalone-preset.js",
        urls=json.dumps(urls),
    )
    return HTMLResponse(html)
