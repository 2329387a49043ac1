"""
storefront_api.auth.passwords

Password hashing helpers (passlib).
"""

from __future__ import annotations

from passlib.context import CryptContext

_pwd_ctx = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(raw: str) -> str:
    return _pwd_ctx.hash(raw)


def verify_password(raw: str, hashed: str | None) -> bool:
    if not hashed:
        return False
    try:
        return _pwd_ctx.verify(raw, hashed)
    except ValueError:
        # Unrecognized or corrupted hash format.
        return False
