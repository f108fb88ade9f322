"""
savings_api.api.routers.health

Liveness (`/healthz`) and readiness (`/readyz`) checks.

Readiness checks the store and reports which credential scheme this deployment
runs, since self-issued and delegated deployments need different secrets.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from savings_api.api.deps import db_session, settings_dep
from savings_api.settings import Settings

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
) -> dict[str, str]:
    await session.execute(text("SELECT 1"))
    return {
        "status": "ready",
        "database": session.bind.dialect.name,
        "authStrategy": settings.auth_strategy,
    }
