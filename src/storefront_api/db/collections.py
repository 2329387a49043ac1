"""
storefront_api.db.collections

Collection names shared by repositories, the seeder and the index sync job.
"""

from __future__ import annotations

PRODUCTS = "products"
USERS = "users"
ORDERS = "orders"
