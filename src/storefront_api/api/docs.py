"""
storefront_api.api.docs

API documentation endpoints.

Responsibilities:
- Redirect `/` to the docs UI.
- Serve the OpenAPI document and the Swagger UI page.
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.openapi.docs import get_swagger_ui_html
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from starlette.status import HTTP_302_FOUND

DOCS_PATH = "/api-docs"
OPENAPI_PATH = "/api-docs.json"


def mount_docs(app: FastAPI) -> None:
    async def redirect_to_docs() -> RedirectResponse:
        return RedirectResponse(url=DOCS_PATH, status_code=HTTP_302_FOUND)

    async def openapi_json() -> JSONResponse:
        # app.openapi() caches the schema after the first call; routes are all
        # mounted before the listener accepts requests.
        return JSONResponse(app.openapi())

    async def swagger_ui() -> HTMLResponse:
        return get_swagger_ui_html(openapi_url=OPENAPI_PATH, title=f"{app.title} - Docs")

    # The root redirect goes first so nothing mounted later can shadow it.
    app.add_api_route("/", redirect_to_docs, methods=["GET"], include_in_schema=False)
    app.add_api_route(OPENAPI_PATH, openapi_json, methods=["GET"], include_in_schema=False)
    app.add_api_route(DOCS_PATH, swagger_ui, methods=["GET"], include_in_schema=False)
