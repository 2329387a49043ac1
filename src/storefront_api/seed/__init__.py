"""
storefront_api.seed

Data seeding package.

Responsibilities:
- Starter catalogue and the idempotent seeder that writes it.
"""

# Package marker.
