"""
storefront_api.db.repositories.orders

Repository for `Order` documents.

Responsibilities:
- Persist placed orders.
- Read orders per user (newest first) or across all users for admins.
"""

from __future__ import annotations

from typing import Any

from pymongo import DESCENDING
from pymongo.asynchronous.database import AsyncDatabase

from storefront_api.db.collections import ORDERS
from storefront_api.db.models import Order, OrderItem, OrderStatus, parse_object_id, utcnow


class OrderRepo:
    def __init__(self, db: AsyncDatabase) -> None:
        self._orders = db[ORDERS]

    async def create(
        self,
        *,
        user_id: str,
        items: list[OrderItem],
        total: float,
        shipping: dict[str, Any],
    ) -> Order:
        doc = {
            "user_id": user_id,
            "items": [i.model_dump() for i in items],
            "total": total,
            "status": OrderStatus.placed.value,
            "shipping": shipping,
            "created_at": utcnow(),
        }
        result = await self._orders.insert_one(doc)
        doc["_id"] = result.inserted_id
        return Order.from_doc(doc)

    async def get(self, order_id: str) -> Order | None:
        oid = parse_object_id(order_id)
        if oid is None:
            return None
        doc = await self._orders.find_one({"_id": oid})
        return Order.from_doc(doc) if doc else None

    async def list(self, *, user_id: str | None = None, limit: int = 50) -> list[Order]:
        # user_id=None lists every order (admin view).
        query: dict[str, Any] = {} if user_id is None else {"user_id": user_id}
        cursor = self._orders.find(query).sort("created_at", DESCENDING).limit(limit)
        return [Order.from_doc(d) async for d in cursor]
