"""
storefront_api.db.indexes

Unique indexes the API depends on.
"""

from __future__ import annotations

from pymongo.asynchronous.database import AsyncDatabase

from storefront_api.db.collections import PRODUCTS, USERS


async def ensure_indexes(db: AsyncDatabase) -> None:
    await db[PRODUCTS].create_index("sku", unique=True)
    await db[USERS].create_index("email", unique=True)
