"""
storefront_api.api.routers.products

Catalogue endpoints.

Responsibilities:
- List and fetch products.
- Admin-only product creation.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field
from pymongo.errors import DuplicateKeyError
from starlette.status import HTTP_201_CREATED, HTTP_404_NOT_FOUND, HTTP_409_CONFLICT

from storefront_api.api.deps import product_repo
from storefront_api.auth.deps import require_roles
from storefront_api.db.models import Product
from storefront_api.db.repositories.products import ProductRepo

router = APIRouter(tags=["products"])


class ProductCreateRequest(BaseModel):
    sku: str = Field(min_length=1, max_length=64)
    name: str = Field(min_length=1, max_length=200)
    description: str = Field(default="", max_length=4000)
    category: str = Field(default="", max_length=64)
    price: float = Field(ge=0)
    image: str | None = None
    stock: int = Field(default=0, ge=0)


@router.get("", response_model=list[Product])
async def list_products(
    category: str | None = None,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=20, ge=1, le=100),
    products: ProductRepo = Depends(product_repo),
) -> list[Product]:
    return await products.list(category=category, skip=skip, limit=limit)


@router.get("/{product_id}", response_model=Product)
async def get_product(product_id: str, products: ProductRepo = Depends(product_repo)) -> Product:
    product = await products.get(product_id)
    if product is None:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Product not found")
    return product


@router.post(
    "",
    response_model=Product,
    status_code=HTTP_201_CREATED,
    dependencies=[Depends(require_roles("admin"))],
)
async def create_product(
    body: ProductCreateRequest, products: ProductRepo = Depends(product_repo)
) -> Product:
    try:
        return await products.create(body.model_dump())
    except DuplicateKeyError as e:
        raise HTTPException(status_code=HTTP_409_CONFLICT, detail="SKU already exists") from e
