"""
storefront_api.api.routers.health

Health and readiness endpoints.

Responsibilities:
- Provide liveness probe (`/healthz`).
- Provide readiness probe (`/readyz`) with DB connectivity validation and the
  outcome of the recoverable startup stages.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from pymongo.asynchronous.database import AsyncDatabase

from storefront_api.api.deps import database, startup_report
from storefront_api.startup.report import StartupReport

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(
    db: AsyncDatabase = Depends(database),
    report: StartupReport = Depends(startup_report),
) -> dict[str, Any]:
    # Degraded startups still report ready: the API serves, search may be
    # running on the fallback path.
    await db.command("ping")
    return {"status": "ready", "startup": report.as_dict()}
