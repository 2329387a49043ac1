"""
storefront_api.api.app

FastAPI app factory for the storefront backend.

Responsibilities:
- Build the FastAPI application and register middleware.
- Leave routes unmounted: the startup orchestrator mounts docs and route
  collections once the database (and optionally the vector index) is ready.
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront_api import __version__
from storefront_api.observability.middleware import RequestContextMiddleware
from storefront_api.settings import Settings
from storefront_api.startup.report import StartupReport


def create_app(*, settings: Settings) -> FastAPI:
    # Built-in docs are disabled; `api.docs.mount_docs` registers them at /api-docs.
    app = FastAPI(
        title="Storefront API",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    origins = settings.cors_origin_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # Browsers reject credentialed requests against a wildcard origin.
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestContextMiddleware)

    app.state.settings = settings
    app.state.startup = StartupReport()
    app.state.vector_search = None
    return app


# --- Module Notes -----------------------------------------------------------
# Keep composition here minimal; stage ordering lives in `startup.orchestrator`.
