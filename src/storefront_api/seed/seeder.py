"""
storefront_api.seed.seeder

Product catalogue seeder.

Responsibilities:
- Skip when the catalogue already has data (unless forced).
- Merge the starter catalogue by `sku` so re-running never duplicates products.
"""

from __future__ import annotations

from dataclasses import dataclass

from pymongo import UpdateOne
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from storefront_api.db.collections import PRODUCTS
from storefront_api.db.models import utcnow
from storefront_api.errors import SeedError
from storefront_api.observability.logging import get_logger
from storefront_api.seed.catalog import SEED_PRODUCTS

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class SeedResult:
    seeded: bool = False
    skipped: bool = False
    upserted: int = 0
    modified: int = 0


async def seed_products(
    db: AsyncDatabase, *, force: bool = False, skip_if_exists: bool = True
) -> SeedResult:
    products = db[PRODUCTS]
    try:
        if skip_if_exists and not force:
            if await products.count_documents({}, limit=1):
                return SeedResult(skipped=True)

        now = utcnow()
        ops = [
            UpdateOne(
                {"sku": item["sku"]},
                {
                    "$set": {**item, "updated_at": now},
                    "$setOnInsert": {"created_at": now},
                },
                upsert=True,
            )
            for item in SEED_PRODUCTS
        ]
        result = await products.bulk_write(ops, ordered=False)
    except PyMongoError as e:
        raise SeedError(str(e)) from e

    log.info(
        "seed_applied",
        upserted=result.upserted_count,
        modified=result.modified_count,
        catalogue_size=len(SEED_PRODUCTS),
    )
    return SeedResult(
        seeded=True,
        upserted=result.upserted_count,
        modified=result.modified_count,
    )
