"""
storefront_api.db.client

MongoDB client helpers.

Responsibilities:
- Build the async client from settings and verify it with a single ping.
- Resolve the target database (URI path first, configured name otherwise).
- Ensure the unique indexes on every connect, whether or not seeding runs.
"""

from __future__ import annotations

from dataclasses import dataclass

from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from storefront_api.db.indexes import ensure_indexes
from storefront_api.errors import ConfigurationError, DatabaseConnectionError
from storefront_api.observability.logging import get_logger
from storefront_api.settings import Settings

log = get_logger(__name__)


@dataclass(slots=True)
class MongoHandle:
    """Connection handle owned by the startup orchestrator."""

    client: AsyncMongoClient
    db: AsyncDatabase

    async def close(self) -> None:
        await self.client.close()


def create_client(settings: Settings) -> AsyncMongoClient:
    uri = (settings.mongo_uri or "").strip()
    if not uri:
        raise ConfigurationError("MONGO_URI is missing")
    try:
        # Client construction validates the URI but performs no I/O.
        return AsyncMongoClient(
            uri,
            serverSelectionTimeoutMS=settings.mongo_timeout_ms,
            tz_aware=True,
        )
    except (PyMongoError, ValueError) as e:
        raise ConfigurationError(f"invalid MONGO_URI: {e}") from e


async def connect_mongo(settings: Settings) -> MongoHandle:
    client = create_client(settings)
    try:
        await client.admin.command("ping")
    except PyMongoError as e:
        await client.close()
        raise DatabaseConnectionError(f"MongoDB connection failed: {e}") from e
    db = client.get_default_database(default=settings.mongo_db_name)
    try:
        await ensure_indexes(db)
    except PyMongoError as e:
        # Existing duplicates block a unique index; the API still serves.
        log.warning("ensure_indexes_failed", error=str(e))
    return MongoHandle(client=client, db=db)


# --- Module Notes -----------------------------------------------------------
# One attempt only: server selection timeout bounds the ping, and there is no
# retry loop around it.
