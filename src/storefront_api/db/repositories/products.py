"""
storefront_api.db.repositories.products

Repository for `Product` documents.

Responsibilities:
- Catalogue reads (list, get, bulk get, text fallback search).
- Stock reservation used by checkout.
"""

from __future__ import annotations

import re
from typing import Any

from pymongo import ASCENDING, ReturnDocument
from pymongo.asynchronous.database import AsyncDatabase

from storefront_api.db.collections import PRODUCTS
from storefront_api.db.models import Product, parse_object_id, utcnow


class ProductRepo:
    def __init__(self, db: AsyncDatabase) -> None:
        self._products = db[PRODUCTS]

    async def list(
        self, *, category: str | None = None, skip: int = 0, limit: int = 20
    ) -> list[Product]:
        query: dict[str, Any] = {}
        if category:
            query["category"] = category
        cursor = self._products.find(query).sort("name", ASCENDING).skip(skip).limit(limit)
        return [Product.from_doc(d) async for d in cursor]

    async def get(self, product_id: str) -> Product | None:
        oid = parse_object_id(product_id)
        if oid is None:
            return None
        doc = await self._products.find_one({"_id": oid})
        return Product.from_doc(doc) if doc else None

    async def get_many(self, product_ids: list[str]) -> list[Product]:
        """Fetch products preserving the order of `product_ids`; unknown ids are dropped."""
        oids = [oid for oid in map(parse_object_id, product_ids) if oid is not None]
        if not oids:
            return []
        found = {str(d["_id"]): d async for d in self._products.find({"_id": {"$in": oids}})}
        return [Product.from_doc(found[pid]) for pid in product_ids if pid in found]

    async def all_documents(self) -> list[dict[str, Any]]:
        return await self._products.find({}).to_list(length=None)

    async def create(self, data: dict[str, Any]) -> Product:
        now = utcnow()
        doc = {**data, "created_at": now, "updated_at": now}
        result = await self._products.insert_one(doc)
        doc["_id"] = result.inserted_id
        return Product.from_doc(doc)

    async def text_search(self, text: str, *, limit: int = 20) -> list[Product]:
        # Substring match; user input is escaped so it never acts as a pattern.
        pattern = {"$regex": re.escape(text.strip()), "$options": "i"}
        query = {"$or": [{"name": pattern}, {"description": pattern}, {"category": pattern}]}
        cursor = self._products.find(query).sort("name", ASCENDING).limit(limit)
        return [Product.from_doc(d) async for d in cursor]

    async def reserve_stock(self, product_id: str, quantity: int) -> Product | None:
        """Decrement stock only if enough is left; None means not reserved."""
        oid = parse_object_id(product_id)
        if oid is None:
            return None
        doc = await self._products.find_one_and_update(
            {"_id": oid, "stock": {"$gte": quantity}},
            {"$inc": {"stock": -quantity}, "$set": {"updated_at": utcnow()}},
            return_document=ReturnDocument.AFTER,
        )
        return Product.from_doc(doc) if doc else None

    async def release_stock(self, product_id: str, quantity: int) -> None:
        oid = parse_object_id(product_id)
        if oid is None:
            return
        await self._products.update_one(
            {"_id": oid},
            {"$inc": {"stock": quantity}, "$set": {"updated_at": utcnow()}},
        )
