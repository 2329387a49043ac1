"""
storefront_api.auth

Authentication/authorization package.

Responsibilities:
- JWT issuing and validation for customer sessions.
- Password hashing.
- FastAPI auth dependencies (Principal + role checks).
"""

# Package marker.
