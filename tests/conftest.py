from __future__ import annotations

from collections.abc import AsyncIterator

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI

from fakes import FakeDb, FakeListener, Store, make_settings
from storefront_api.api.app import create_app
from storefront_api.api.deps import order_repo, product_repo, user_repo
from storefront_api.settings import Settings
from storefront_api.startup.orchestrator import StartupOrchestrator


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def store() -> Store:
    return Store()


@pytest.fixture
def app(settings: Settings, store: Store) -> FastAPI:
    # Mounted exactly as a running process would, minus the DB and listener.
    app = create_app(settings=settings)
    app.state.db = FakeDb()
    StartupOrchestrator(settings=settings, app=app, listener=FakeListener()).mount()
    app.dependency_overrides[product_repo] = lambda: store.products
    app.dependency_overrides[user_repo] = lambda: store.users
    app.dependency_overrides[order_repo] = lambda: store.orders
    return app


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
