"""
storefront_api.search.vector

Pinecone-backed product vectors.

Responsibilities:
- Embed product text with Pinecone hosted inference.
- Upsert product vectors (sync job) and query them (search endpoint).

The Pinecone SDK is synchronous; every network call is pushed to a worker
thread so the event loop keeps serving.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterator
from typing import Any

from pinecone import Pinecone
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from storefront_api.db.repositories.products import ProductRepo
from storefront_api.errors import VectorSyncConfigError, VectorSyncError
from storefront_api.observability.logging import get_logger
from storefront_api.settings import Settings

log = get_logger(__name__)

# Hosted inference accepts at most 96 inputs per embed call.
EMBED_BATCH_SIZE = 96


def product_text(doc: dict[str, Any]) -> str:
    parts = (doc.get("name"), doc.get("description"), doc.get("category"))
    return ". ".join(str(p) for p in parts if p)


def _batches(items: list[Any], size: int) -> Iterator[list[Any]]:
    for start in range(0, len(items), size):
        yield items[start : start + size]


def check_config(settings: Settings) -> None:
    if not settings.pinecone_api_key:
        raise VectorSyncConfigError("PINECONE_API_KEY is not set")
    if not settings.pinecone_index:
        raise VectorSyncConfigError("PINECONE_INDEX is not set")


class VectorSearch:
    def __init__(self, *, settings: Settings, client: Pinecone | None = None) -> None:
        check_config(settings)
        self._settings = settings
        self._pc = client or Pinecone(api_key=settings.pinecone_api_key)
        self._index = self._pc.Index(settings.pinecone_index)

    def _embed(self, texts: list[str], *, input_type: str) -> list[list[float]]:
        embeddings = self._pc.inference.embed(
            model=self._settings.pinecone_embed_model,
            inputs=texts,
            parameters={"input_type": input_type, "truncate": "END"},
        )
        return [e["values"] for e in embeddings]

    def _upsert_batch(self, docs: list[dict[str, Any]]) -> int:
        values = self._embed([product_text(d) for d in docs], input_type="passage")
        vectors = [
            {
                "id": str(doc["_id"]),
                "values": vec,
                "metadata": {
                    "name": doc.get("name", ""),
                    "category": doc.get("category", ""),
                    "price": float(doc.get("price", 0.0)),
                },
            }
            for doc, vec in zip(docs, values, strict=True)
        ]
        self._index.upsert(vectors=vectors, namespace=self._settings.pinecone_namespace)
        return len(vectors)

    async def upsert_products(self, docs: list[dict[str, Any]]) -> int:
        total = 0
        for batch in _batches(docs, EMBED_BATCH_SIZE):
            total += await asyncio.to_thread(self._upsert_batch, batch)
        return total

    def _query(self, text: str, top_k: int) -> list[tuple[str, float]]:
        [vector] = self._embed([text], input_type="query")
        result = self._index.query(
            vector=vector,
            top_k=top_k,
            namespace=self._settings.pinecone_namespace,
            include_metadata=False,
        )
        return [(m["id"], float(m["score"])) for m in result["matches"]]

    async def query(self, text: str, *, top_k: int = 10) -> list[tuple[str, float]]:
        return await asyncio.to_thread(self._query, text, top_k)


async def sync_products_index(
    settings: Settings, db: AsyncDatabase, *, search: VectorSearch | None = None
) -> VectorSearch:
    """
    Push every product into the vector index.

    Returns the `VectorSearch` used, so the caller can keep it for queries.
    """

    check_config(settings)
    try:
        docs = await ProductRepo(db).all_documents()
    except PyMongoError as e:
        raise VectorSyncError(f"cannot read products for the vector index: {e}") from e

    search = search or VectorSearch(settings=settings)
    try:
        count = await search.upsert_products(docs)
    except Exception as e:
        # The SDK raises its own exception tree plus urllib3/requests errors.
        raise VectorSyncError(f"vector index sync failed: {e}") from e
    log.info("vector_index_synced", index=settings.pinecone_index, vectors=count)
    return search


# --- Module Notes -----------------------------------------------------------
# Vectors are keyed by the Mongo product id, so a query result maps straight
# back to `ProductRepo.get_many`.
