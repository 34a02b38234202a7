"""
Notes API - API Documentation
=============================

What:  Builds the OpenAPI document for a chosen set of feature modules and
       publishes it next to a Swagger UI page.
How:   FastAPI's get_openapi() renders only the routes handed to it, so
       limiting the document to some modules is a matter of passing their
       mounted routes. The finished document is served as-is; it is not
       regenerated per request.

Published paths for setup_docs("api", ...):
    GET /api        Swagger UI
    GET /api-json   OpenAPI document (JSON)

Both are added straight to the FastAPI instance and therefore sit outside
the global prefix.
"""

from typing import Any, Dict, Optional, Sequence, Tuple

from fastapi import Depends, Request
from fastapi.openapi.docs import get_swagger_ui_html
from fastapi.openapi.utils import get_openapi
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel, Field

from notes_api.application import Application
from notes_api.modules import DOCS_OWNER, FeatureModule


class DocumentDescriptor(BaseModel):
    """Immutable metadata for the generated API document."""
    title: str = Field(description="Document title")
    description: str = Field(default="", description="Document description")
    version: str = Field(default="1.0", description="API version string")
    tags: Tuple[str, ...] = Field(default=(), description="Tag categories, in display order")

    model_config = {"frozen": True}


def create_document(
    app: Application,
    descriptor: DocumentDescriptor,
    include: Optional[Sequence[FeatureModule]] = None,
) -> Dict[str, Any]:
    """
    Generate the OpenAPI document for `app`.

    Args:
        app:         initialized (or initializable) application
        descriptor:  title, description, version and tags
        include:     whitelist of feature modules; only their routes appear.
                     None documents every feature module.

    Raises:
        DocumentationError: a whitelisted module is not imported by `app`
    """
    routes = app.routes_for(include) if include is not None else app.module_routes
    return get_openapi(
        title=descriptor.title,
        version=descriptor.version,
        description=descriptor.description,
        routes=routes,
        tags=[{"name": tag} for tag in descriptor.tags] or None,
    )


def setup_docs(path: str, app: Application, document: Dict[str, Any]) -> None:
    """Serve `document` and a Swagger UI for it under `/<path>`."""
    ui_path = "/" + path.strip("/")
    json_path = f"{ui_path}-json"
    title = f"{document.get('info', {}).get('title', 'API')} - Swagger UI"

    async def openapi_document() -> JSONResponse:
        return JSONResponse(document)

    async def swagger_ui() -> HTMLResponse:
        return get_swagger_ui_html(openapi_url=json_path, title=title)

    async def mark_request(request: Request) -> None:
        request.state.route_owner = DOCS_OWNER

    for route_path, endpoint in ((json_path, openapi_document), (ui_path, swagger_ui)):
        app.http.add_api_route(
            route_path,
            endpoint,
            methods=["GET"],
            include_in_schema=False,
            dependencies=[Depends(mark_request)],
        )
