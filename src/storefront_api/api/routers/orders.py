"""
storefront_api.api.routers.orders

Order history for the signed-in customer.

Responsibilities:
- List and fetch orders owned by the caller; admins see every order.
- Answer 404 for another customer's order rather than revealing it exists.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from starlette.status import HTTP_404_NOT_FOUND

from storefront_api.api.deps import order_repo
from storefront_api.auth.deps import get_principal
from storefront_api.auth.models import Principal
from storefront_api.db.models import Order
from storefront_api.db.repositories.orders import OrderRepo

router = APIRouter(tags=["orders"])


@router.get("", response_model=list[Order])
async def list_orders(
    limit: int = Query(default=50, ge=1, le=200),
    principal: Principal = Depends(get_principal),
    orders: OrderRepo = Depends(order_repo),
) -> list[Order]:
    # Admins see every order; customers only their own.
    user_id = None if principal.is_admin else principal.subject
    return await orders.list(user_id=user_id, limit=limit)


@router.get("/{order_id}", response_model=Order)
async def get_order(
    order_id: str,
    principal: Principal = Depends(get_principal),
    orders: OrderRepo = Depends(order_repo),
) -> Order:
    order = await orders.get(order_id)
    if order is None or (order.user_id != principal.subject and not principal.is_admin):
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Order not found")
    return order
