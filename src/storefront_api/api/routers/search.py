"""
storefront_api.api.routers.search

Product search endpoint.

Responsibilities:
- Query the vector index when the startup sync succeeded.
- Fall back to Mongo substring search otherwise, or when a vector query fails.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel
from starlette.status import HTTP_422_UNPROCESSABLE_ENTITY

from storefront_api.api.deps import product_repo, vector_search
from storefront_api.db.models import Product
from storefront_api.db.repositories.products import ProductRepo
from storefront_api.observability.logging import get_logger
from storefront_api.search.vector import VectorSearch
from storefront_api.startup.report import SearchMode

router = APIRouter(tags=["search"])
log = get_logger(__name__)


class SearchResponse(BaseModel):
    query: str
    mode: SearchMode
    results: list[Product]


@router.get("", response_model=SearchResponse)
async def search_products(
    q: str = Query(min_length=1, max_length=200),
    limit: int = Query(default=10, ge=1, le=50),
    products: ProductRepo = Depends(product_repo),
    vectors: VectorSearch | None = Depends(vector_search),
) -> SearchResponse:
    text = q.strip()
    if not text:
        raise HTTPException(status_code=HTTP_422_UNPROCESSABLE_ENTITY, detail="q must not be blank")

    if vectors is not None:
        try:
            matches = await vectors.query(text, top_k=limit)
        except Exception as e:
            log.warning("vector_query_failed", error=str(e))
        else:
            found = await products.get_many([pid for pid, _ in matches])
            return SearchResponse(query=text, mode=SearchMode.vector, results=found)

    found = await products.text_search(text, limit=limit)
    return SearchResponse(query=text, mode=SearchMode.fallback, results=found)
