"""
storefront_api.api.routers

Route collections and the prefixes they are mounted under.
"""

from __future__ import annotations

from collections.abc import Mapping

from fastapi import APIRouter

from storefront_api.api.routers import auth, checkout, orders, products, search

# Prefixes are disjoint, so mount order among them carries no meaning.
ROUTE_COLLECTIONS: Mapping[str, APIRouter] = {
    "/api/products": products.router,
    "/api/checkout": checkout.router,
    "/api/orders": orders.router,
    "/api/search": search.router,
    "/api/auth": auth.router,
}
