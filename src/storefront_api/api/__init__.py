"""
storefront_api.api

API package for the storefront backend.

Responsibilities:
- FastAPI app factory, docs mount and route collections.
- API-layer dependency wiring and request/response models.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The API layer should remain thin: request validation + auth + delegation to repositories.
