"""
tests.test_startup

Startup orchestration: stage order, fatal vs recoverable failures, mounting.
"""

from __future__ import annotations

import httpx
import pytest
from fastapi import APIRouter

from fakes import FakeHandle, FakeListener, make_settings
from storefront_api.errors import DatabaseConnectionError, SeedError, VectorSyncConfigError
from storefront_api.seed.seeder import SeedResult
from storefront_api.startup.orchestrator import StartupOrchestrator, launch
from storefront_api.startup.report import SearchMode, SeedOutcome

PREFIXES = ("/api/products", "/api/checkout", "/api/orders", "/api/search", "/api/auth")


class Recorder:
    """Collects stage calls so tests can assert ordering and arguments."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, dict]] = []
        self.handle = FakeHandle()

    async def connector(self, settings):
        self.calls.append(("connect", {}))
        return self.handle

    def seeder(self, result: SeedResult | None = None, error: Exception | None = None):
        async def _seed(db, *, force, skip_if_exists):
            self.calls.append(("seed", {"force": force, "skip_if_exists": skip_if_exists}))
            if error is not None:
                raise error
            return result

        return _seed

    def syncer(self, error: Exception | None = None):
        async def _sync(settings, db):
            self.calls.append(("sync", {}))
            if error is not None:
                raise error
            return "vector-search"

        return _sync

    def stages(self) -> list[str]:
        return [name for name, _ in self.calls]


def stub_routes() -> dict[str, APIRouter]:
    routes = {}
    for prefix in PREFIXES:
        router = APIRouter()

        async def marker(prefix: str = prefix) -> dict[str, str]:
            return {"marker": prefix}

        router.add_api_route("/ping", marker, methods=["GET"])
        routes[prefix] = router
    return routes


def orchestrator(rec: Recorder, listener: FakeListener, *, seed=None, sync=None, **settings):
    return StartupOrchestrator(
        settings=make_settings(**settings),
        connector=rec.connector,
        seeder=seed or rec.seeder(SeedResult(skipped=True)),
        syncer=sync or rec.syncer(),
        listener=listener,
        routes=stub_routes(),
    )


@pytest.mark.asyncio
async def test_missing_mongo_uri_exits_1_without_binding() -> None:
    listener = FakeListener()
    orch = StartupOrchestrator(settings=make_settings(mongo_uri=None), listener=listener)

    assert await launch(orch) == 1
    assert not listener.bound
    assert not listener.served


@pytest.mark.asyncio
async def test_invalid_mongo_uri_exits_1() -> None:
    listener = FakeListener()
    orch = StartupOrchestrator(settings=make_settings(mongo_uri="http://db.test"), listener=listener)

    assert await launch(orch) == 1
    assert not listener.bound


@pytest.mark.asyncio
async def test_connection_failure_is_fatal() -> None:
    listener = FakeListener()

    async def unreachable(settings):
        raise DatabaseConnectionError("MongoDB connection failed: timed out")

    orch = StartupOrchestrator(settings=make_settings(), connector=unreachable, listener=listener)

    assert await launch(orch) == 1
    assert not listener.bound


@pytest.mark.asyncio
async def test_populated_store_skips_seed_and_listens() -> None:
    rec, listener = Recorder(), FakeListener()
    orch = orchestrator(rec, listener, seed=rec.seeder(SeedResult(skipped=True)))

    assert await launch(orch) == 0
    assert rec.stages() == ["connect", "seed"]
    assert rec.calls[1][1] == {"force": False, "skip_if_exists": True}
    assert orch.report.seed is SeedOutcome.skipped
    assert listener.bound and listener.served
    assert rec.handle.closed


@pytest.mark.asyncio
async def test_force_seed_bypasses_existence_check() -> None:
    rec, listener = Recorder(), FakeListener()
    orch = orchestrator(
        rec, listener, seed=rec.seeder(SeedResult(seeded=True)), force_seed_on_start=True
    )

    assert await launch(orch) == 0
    assert rec.calls[1][1] == {"force": True, "skip_if_exists": False}
    assert orch.report.seed is SeedOutcome.seeded


@pytest.mark.asyncio
async def test_seed_failure_does_not_block_listener() -> None:
    rec, listener = Recorder(), FakeListener()
    orch = orchestrator(
        rec, listener, seed=rec.seeder(error=SeedError("bulk write failed")), force_seed_on_start=True
    )

    assert await launch(orch) == 0
    assert orch.report.seed is SeedOutcome.failed
    assert orch.report.degraded
    assert listener.served


@pytest.mark.asyncio
async def test_seed_result_with_neither_flag() -> None:
    rec, listener = Recorder(), FakeListener()
    orch = orchestrator(rec, listener, seed=rec.seeder(None))

    assert await launch(orch) == 0
    assert orch.report.seed is SeedOutcome.none


@pytest.mark.asyncio
async def test_skip_seed_never_calls_seeder() -> None:
    rec, listener = Recorder(), FakeListener()
    orch = orchestrator(rec, listener, skip_seed_on_start=True)

    assert await launch(orch) == 0
    assert "seed" not in rec.stages()
    assert orch.report.seed is SeedOutcome.disabled


@pytest.mark.asyncio
async def test_vector_sync_disabled_by_default() -> None:
    rec, listener = Recorder(), FakeListener()
    orch = orchestrator(rec, listener)

    assert await launch(orch) == 0
    assert "sync" not in rec.stages()
    assert orch.report.search is SearchMode.fallback
    assert not orch.report.degraded


@pytest.mark.asyncio
async def test_vector_sync_success_enables_vector_search() -> None:
    rec, listener = Recorder(), FakeListener()
    orch = orchestrator(rec, listener, enable_pinecone=True)

    assert await launch(orch) == 0
    assert rec.stages() == ["connect", "seed", "sync"]
    assert orch.report.search is SearchMode.vector
    assert orch.app.state.vector_search == "vector-search"


@pytest.mark.asyncio
async def test_misconfigured_vector_sync_falls_back_and_listens() -> None:
    rec, listener = Recorder(), FakeListener()
    orch = orchestrator(
        rec,
        listener,
        sync=rec.syncer(error=VectorSyncConfigError("PINECONE_API_KEY is not set")),
        enable_pinecone=True,
    )

    assert await launch(orch) == 0
    assert orch.report.search is SearchMode.fallback
    assert orch.report.degraded
    assert orch.app.state.vector_search is None
    assert listener.served


@pytest.mark.asyncio
async def test_real_syncer_without_api_key_falls_back() -> None:
    rec, listener = Recorder(), FakeListener()
    orch = StartupOrchestrator(
        settings=make_settings(enable_pinecone=True, pinecone_api_key=None),
        connector=rec.connector,
        seeder=rec.seeder(SeedResult(skipped=True)),
        listener=listener,
        routes=stub_routes(),
    )

    assert await launch(orch) == 0
    assert orch.report.search is SearchMode.fallback
    assert listener.served


@pytest.mark.asyncio
async def test_bind_failure_exits_1_after_routes_are_mounted() -> None:
    rec, listener = Recorder(), FakeListener(fail=True)
    orch = orchestrator(rec, listener)

    assert await launch(orch) == 1
    assert not listener.served
    assert rec.handle.closed
    mounted = {getattr(r, "path", None) for r in orch.app.routes}
    assert {"/", "/api-docs", "/api-docs.json"} <= mounted
    assert {f"{p}/ping" for p in PREFIXES} <= mounted


@pytest.mark.asyncio
async def test_mounted_app_redirects_root_and_routes_each_prefix() -> None:
    rec, listener = Recorder(), FakeListener()
    orch = orchestrator(rec, listener)
    assert await launch(orch) == 0

    transport = httpx.ASGITransport(app=orch.app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        r = await client.get("/")
        assert r.status_code == 302
        assert r.headers["location"] == "/api-docs"

        for prefix in PREFIXES:
            r = await client.get(f"{prefix}/ping")
            assert r.status_code == 200
            assert r.json() == {"marker": prefix}


def test_docs_routes_precede_api_routes() -> None:
    orch = orchestrator(Recorder(), FakeListener())
    orch.mount()

    paths = [getattr(r, "path", None) for r in orch.app.routes]
    first_api = min(i for i, p in enumerate(paths) if p and p.startswith("/api/products"))
    assert paths.index("/") < paths.index("/api-docs.json") < paths.index("/api-docs") < first_api
