"""
storefront_api.db

Persistence package (MongoDB via pymongo's asyncio client).

Responsibilities:
- Own the client lifecycle, document models and repositories.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Routers and services only see repositories; collection names live in
# `db.collections`.
