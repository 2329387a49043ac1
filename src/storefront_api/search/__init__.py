"""
storefront_api.search

Product search package.

Responsibilities:
- Pinecone index sync and vector queries.
- Mongo substring fallback when vector search is unavailable.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Vector search is optional at startup; nothing outside `api.routers.search`
# should depend on it being active.
