"""
storefront_api.db.models

Document schemas for the storefront collections.

Responsibilities:
- Define Pydantic models for products, users and orders as stored in MongoDB.
- Convert raw documents (`_id` as ObjectId) into API-friendly models.
"""

from __future__ import annotations

import enum
from datetime import UTC, datetime
from typing import Any

from bson import ObjectId
from bson.errors import InvalidId
from pydantic import BaseModel, ConfigDict, Field


def utcnow() -> datetime:
    return datetime.now(tz=UTC)


def parse_object_id(value: str) -> ObjectId | None:
    # Malformed ids behave like unknown ids (callers answer 404).
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


class OrderStatus(enum.StrEnum):
    placed = "placed"


class _Document(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")

    @classmethod
    def from_doc(cls, doc: dict[str, Any]):
        data = dict(doc)
        data["_id"] = str(data["_id"])
        return cls.model_validate(data)


class Product(_Document):
    sku: str
    name: str
    description: str = ""
    category: str = ""
    price: float = Field(ge=0)
    image: str | None = None
    stock: int = Field(default=0, ge=0)
    created_at: datetime | None = None
    updated_at: datetime | None = None


class User(_Document):
    email: str
    name: str = ""
    password_hash: str
    roles: list[str] = Field(default_factory=lambda: ["customer"])
    created_at: datetime | None = None


class OrderItem(BaseModel):
    product_id: str
    name: str
    unit_price: float
    quantity: int
    line_total: float


class Order(_Document):
    user_id: str
    items: list[OrderItem]
    total: float
    status: OrderStatus = OrderStatus.placed
    shipping: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime | None = None


# --- Module Notes -----------------------------------------------------------
# Monetary amounts are floats rounded to cents at write time; there is no
# currency handling beyond that.
