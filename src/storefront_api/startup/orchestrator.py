"""
storefront_api.startup.orchestrator

Startup orchestrator: takes the process from cold start to serving.

Stages run strictly in order, each awaited before the next:

1. connect  - single MongoDB connection attempt (fatal on failure)
2. seed     - optional catalogue seeding (logged and swallowed on failure)
3. vectors  - optional Pinecone index sync (warning, fallback search on failure)
4. mount    - docs, health and the five route collections
5. listen   - bind the socket, then serve (fatal on bind failure)

Collaborators are injected through the constructor so each stage can be
exercised in isolation.
"""

from __future__ import annotations

import socket
from collections.abc import Awaitable, Callable, Mapping
from typing import Protocol

from fastapi import APIRouter, FastAPI
from pymongo.asynchronous.database import AsyncDatabase

from storefront_api.api.app import create_app
from storefront_api.api.docs import mount_docs
from storefront_api.api.routers import ROUTE_COLLECTIONS
from storefront_api.api.routers.health import router as health_router
from storefront_api.db.client import MongoHandle, connect_mongo
from storefront_api.errors import FatalStartupError
from storefront_api.observability.logging import get_logger
from storefront_api.search.vector import VectorSearch, sync_products_index
from storefront_api.seed.seeder import SeedResult, seed_products
from storefront_api.settings import Settings
from storefront_api.startup.listener import UvicornListener
from storefront_api.startup.report import SearchMode, SeedOutcome, StartupReport

log = get_logger(__name__)

Connector = Callable[[Settings], Awaitable[MongoHandle]]
Seeder = Callable[..., Awaitable[SeedResult | None]]
Syncer = Callable[[Settings, AsyncDatabase], Awaitable[VectorSearch]]


class Listener(Protocol):
    def bind(self) -> socket.socket: ...

    async def serve(self, app: FastAPI, sock: socket.socket) -> None: ...


class StartupOrchestrator:
    def __init__(
        self,
        *,
        settings: Settings,
        app: FastAPI | None = None,
        connector: Connector = connect_mongo,
        seeder: Seeder = seed_products,
        syncer: Syncer = sync_products_index,
        listener: Listener | None = None,
        routes: Mapping[str, APIRouter] | None = None,
    ) -> None:
        self.settings = settings
        self.app = app or create_app(settings=settings)
        self.listener = listener or UvicornListener(host=settings.api_host, port=settings.port)
        self.routes = ROUTE_COLLECTIONS if routes is None else routes
        self._connector = connector
        self._seeder = seeder
        self._syncer = syncer
        self.handle: MongoHandle | None = None

    @property
    def report(self) -> StartupReport:
        return self.app.state.startup

    async def run(self) -> None:
        """Serve until shutdown; raises `FatalStartupError` on fatal stages."""

        log.info("startup_begin", port=self.settings.port)
        self.handle = await self.connect()
        try:
            await self.seed()
            await self.sync_vectors()
            self.mount()
            sock = self.listener.bind()
            log.info(
                "server_listening",
                host=self.settings.api_host,
                port=self.settings.port,
                **self.report.as_dict(),
            )
            await self.listener.serve(self.app, sock)
        finally:
            await self.handle.close()
            log.info("shutdown")

    async def connect(self) -> MongoHandle:
        handle = await self._connector(self.settings)
        self.app.state.db = handle.db
        log.info("mongo_connected", database=handle.db.name)
        return handle

    async def seed(self) -> None:
        if self.settings.skip_seed_on_start:
            log.info("seed_disabled")
            return

        force = self.settings.force_seed_on_start
        try:
            result = await self._seeder(self.handle.db, force=force, skip_if_exists=not force)
        except Exception as e:
            self.report.seed = SeedOutcome.failed
            log.error("seed_failed", error=str(e))
            return

        if result is not None and result.seeded:
            self.report.seed = SeedOutcome.seeded
            log.info("database_seeded", forced=force)
        elif result is not None and result.skipped:
            self.report.seed = SeedOutcome.skipped
            log.info("seed_skipped")
        else:
            self.report.seed = SeedOutcome.none

    async def sync_vectors(self) -> None:
        if not self.settings.enable_pinecone:
            return

        self.report.vector_requested = True
        try:
            search = await self._syncer(self.settings, self.handle.db)
        except Exception as e:
            log.warning("vector_sync_failed", error=str(e), search_mode=SearchMode.fallback.value)
            return

        self.app.state.vector_search = search
        self.report.search = SearchMode.vector
        log.info("vector_search_enabled")

    def mount(self) -> None:
        mount_docs(self.app)
        self.app.include_router(health_router, tags=["health"])
        for prefix, router in self.routes.items():
            self.app.include_router(router, prefix=prefix)
        log.info("routes_mounted", prefixes=list(self.routes))


async def launch(orchestrator: StartupOrchestrator) -> int:
    """Run the orchestrator and return the process exit code."""

    try:
        await orchestrator.run()
    except FatalStartupError as e:
        log.error("startup_failed", error=str(e), reason=type(e).__name__)
        return 1
    return 0


# --- Module Notes -----------------------------------------------------------
# Seed and vector sync share one policy: catch everything at the stage
# boundary, record the outcome on the startup report, keep going.
