"""
storefront_api.api.routers.checkout

Checkout endpoint.

Responsibilities:
- Validate the cart against the catalogue.
- Reserve stock per line item, releasing earlier reservations if a later
  line cannot be fulfilled.
- Persist the order and return it.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from starlette.status import HTTP_201_CREATED, HTTP_404_NOT_FOUND, HTTP_409_CONFLICT

from storefront_api.api.deps import order_repo, product_repo
from storefront_api.auth.deps import get_principal
from storefront_api.auth.models import Principal
from storefront_api.db.models import Order, OrderItem
from storefront_api.db.repositories.orders import OrderRepo
from storefront_api.db.repositories.products import ProductRepo
from storefront_api.observability.logging import get_logger

router = APIRouter(tags=["checkout"])
log = get_logger(__name__)


class CartLine(BaseModel):
    product_id: str = Field(min_length=1)
    quantity: int = Field(ge=1, le=100)


class CheckoutRequest(BaseModel):
    items: list[CartLine] = Field(min_length=1, max_length=50)
    shipping: dict[str, Any] = Field(default_factory=dict)


def _merge_lines(lines: list[CartLine]) -> dict[str, int]:
    # The same product listed twice is one reservation.
    merged: dict[str, int] = {}
    for line in lines:
        merged[line.product_id] = merged.get(line.product_id, 0) + line.quantity
    return merged


@router.post("", response_model=Order, status_code=HTTP_201_CREATED)
async def checkout(
    body: CheckoutRequest,
    principal: Principal = Depends(get_principal),
    products: ProductRepo = Depends(product_repo),
    orders: OrderRepo = Depends(order_repo),
) -> Order:
    wanted = _merge_lines(body.items)

    catalogue = {p.id: p for p in await products.get_many(list(wanted))}
    missing = [pid for pid in wanted if pid not in catalogue]
    if missing:
        raise HTTPException(
            status_code=HTTP_404_NOT_FOUND,
            detail={"message": "Unknown products", "product_ids": missing},
        )

    reserved: list[tuple[str, int]] = []
    try:
        for pid, qty in wanted.items():
            if await products.reserve_stock(pid, qty) is None:
                raise HTTPException(
                    status_code=HTTP_409_CONFLICT,
                    detail={"message": "Insufficient stock", "product_id": pid},
                )
            reserved.append((pid, qty))

        items = [
            OrderItem(
                product_id=pid,
                name=catalogue[pid].name,
                unit_price=catalogue[pid].price,
                quantity=qty,
                line_total=round(catalogue[pid].price * qty, 2),
            )
            for pid, qty in wanted.items()
        ]
        total = round(sum(i.line_total for i in items), 2)
        order = await orders.create(
            user_id=principal.subject, items=items, total=total, shipping=body.shipping
        )
    except Exception:
        for pid, qty in reserved:
            await products.release_stock(pid, qty)
        raise

    log.info("order_placed", order_id=order.id, user_id=principal.subject, total=order.total)
    return order


# --- Module Notes -----------------------------------------------------------
# No payment step: orders are written in `placed` status and fulfilment is
# handled outside this service.
