"""
storefront_api.cli

Maintenance commands (`storefront-admin`).

Responsibilities:
- Run the catalogue seeder outside of server startup.
- Rebuild the vector index on demand.
"""

from __future__ import annotations

import asyncio

import click

from storefront_api.db.client import connect_mongo
from storefront_api.errors import StartupError
from storefront_api.observability.logging import configure_logging
from storefront_api.search.vector import sync_products_index
from storefront_api.seed.seeder import seed_products
from storefront_api.settings import get_settings


async def _seed(force: bool) -> str:
    settings = get_settings()
    handle = await connect_mongo(settings)
    try:
        result = await seed_products(handle.db, force=force, skip_if_exists=not force)
    finally:
        await handle.close()
    if result.skipped:
        return "Seed skipped: products already present (use --force to merge anyway)."
    return f"Seeded: {result.upserted} inserted, {result.modified} updated."


async def _sync_index() -> str:
    settings = get_settings()
    handle = await connect_mongo(settings)
    try:
        await sync_products_index(settings, handle.db)
    finally:
        await handle.close()
    return f"Vector index '{settings.pinecone_index}' synced."


@click.group()
def admin() -> None:
    """Storefront maintenance commands."""
    settings = get_settings()
    configure_logging(service_name=f"{settings.service_name}-admin", level=settings.log_level)


@admin.command()
@click.option("--force", is_flag=True, help="Merge the catalogue even if products exist.")
def seed(force: bool) -> None:
    """Write the starter product catalogue."""
    try:
        click.echo(asyncio.run(_seed(force)))
    except StartupError as e:
        raise click.ClickException(str(e)) from e


@admin.command("sync-index")
def sync_index() -> None:
    """Push every product into the Pinecone index."""
    try:
        click.echo(asyncio.run(_sync_index()))
    except StartupError as e:
        raise click.ClickException(str(e)) from e


if __name__ == "__main__":
    admin()
