"""
storefront_api.db.repositories.users

Repository for `User` documents.
"""

from __future__ import annotations

from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import DuplicateKeyError

from storefront_api.db.collections import USERS
from storefront_api.db.models import User, parse_object_id, utcnow


class EmailTakenError(Exception):
    pass


class UserRepo:
    def __init__(self, db: AsyncDatabase) -> None:
        self._users = db[USERS]

    async def get(self, user_id: str) -> User | None:
        oid = parse_object_id(user_id)
        if oid is None:
            return None
        doc = await self._users.find_one({"_id": oid})
        return User.from_doc(doc) if doc else None

    async def get_by_email(self, email: str) -> User | None:
        doc = await self._users.find_one({"email": email.strip().lower()})
        return User.from_doc(doc) if doc else None

    async def create(
        self, *, email: str, name: str, password_hash: str, roles: list[str] | None = None
    ) -> User:
        email = email.strip().lower()
        # The unique index is the real guard; the lookup just gives a clean error
        # on the common path.
        if await self._users.find_one({"email": email}, projection={"_id": 1}):
            raise EmailTakenError(email)
        doc = {
            "email": email,
            "name": name,
            "password_hash": password_hash,
            "roles": roles or ["customer"],
            "created_at": utcnow(),
        }
        try:
            result = await self._users.insert_one(doc)
        except DuplicateKeyError as e:
            raise EmailTakenError(email) from e
        doc["_id"] = result.inserted_id
        return User.from_doc(doc)
