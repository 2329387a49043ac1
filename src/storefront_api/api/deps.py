"""
storefront_api.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Expose settings, database handle and repositories to routers.
- Encapsulate app.state access patterns (set by the startup orchestrator).
"""

from __future__ import annotations

from fastapi import Depends, Request
from pymongo.asynchronous.database import AsyncDatabase

from storefront_api.db.repositories.orders import OrderRepo
from storefront_api.db.repositories.products import ProductRepo
from storefront_api.db.repositories.users import UserRepo
from storefront_api.search.vector import VectorSearch
from storefront_api.settings import Settings
from storefront_api.startup.report import StartupReport


def settings_dep(request: Request) -> Settings:
    return request.app.state.settings  # type: ignore[attr-defined]


def database(request: Request) -> AsyncDatabase:
    # Set by the connect stage of `StartupOrchestrator`.
    return request.app.state.db  # type: ignore[attr-defined]


def startup_report(request: Request) -> StartupReport:
    return request.app.state.startup  # type: ignore[attr-defined]


def vector_search(request: Request) -> VectorSearch | None:
    # None unless the vector sync stage succeeded in this process.
    return getattr(request.app.state, "vector_search", None)


def product_repo(db: AsyncDatabase = Depends(database)) -> ProductRepo:
    return ProductRepo(db)


def user_repo(db: AsyncDatabase = Depends(database)) -> UserRepo:
    return UserRepo(db)


def order_repo(db: AsyncDatabase = Depends(database)) -> OrderRepo:
    return OrderRepo(db)
