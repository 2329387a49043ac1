from __future__ import annotations

from collections import defaultdict
from typing import Any

import pytest
from pymongo.errors import DuplicateKeyError, ServerSelectionTimeoutError

from fakes import make_settings
from storefront_api.db import client as db_client
from storefront_api.errors import DatabaseConnectionError


class FakeCollection:
    def __init__(self) -> None:
        self.indexes: list[tuple[str, dict[str, Any]]] = []

    async def create_index(self, key: str, **kwargs: Any) -> str:
        self.indexes.append((key, kwargs))
        return f"{key}_1"


class FakeAdmin:
    def __init__(self, reachable: bool) -> None:
        self.reachable = reachable

    async def command(self, name: str) -> dict[str, Any]:
        if not self.reachable:
            raise ServerSelectionTimeoutError("no servers")
        return {"ok": 1.0}


class FakeMongoClient:
    reachable = True
    instances: list[FakeMongoClient] = []

    def __init__(self, uri: str, **kwargs: Any) -> None:
        self.uri = uri
        self.admin = FakeAdmin(self.reachable)
        self.db: defaultdict[str, FakeCollection] = defaultdict(FakeCollection)
        self.closed = False
        FakeMongoClient.instances.append(self)

    def get_default_database(self, default: str):
        return self.db

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_client(monkeypatch: pytest.MonkeyPatch) -> type[FakeMongoClient]:
    FakeMongoClient.reachable = True
    FakeMongoClient.instances = []
    monkeypatch.setattr(db_client, "AsyncMongoClient", FakeMongoClient)
    return FakeMongoClient


@pytest.mark.asyncio
async def test_connect_ensures_unique_indexes(fake_client: type[FakeMongoClient]) -> None:
    handle = await db_client.connect_mongo(make_settings(skip_seed_on_start=True))

    assert ("sku", {"unique": True}) in handle.db["products"].indexes
    assert ("email", {"unique": True}) in handle.db["users"].indexes


@pytest.mark.asyncio
async def test_index_failure_keeps_connection(
    fake_client: type[FakeMongoClient], monkeypatch: pytest.MonkeyPatch
) -> None:
    async def duplicates(db):
        raise DuplicateKeyError("E11000 duplicate key")

    monkeypatch.setattr(db_client, "ensure_indexes", duplicates)

    handle = await db_client.connect_mongo(make_settings())

    assert not handle.client.closed


@pytest.mark.asyncio
async def test_unreachable_server_closes_client(fake_client: type[FakeMongoClient]) -> None:
    fake_client.reachable = False

    with pytest.raises(DatabaseConnectionError):
        await db_client.connect_mongo(make_settings())
    assert fake_client.instances[0].closed
    assert not fake_client.instances[0].db
