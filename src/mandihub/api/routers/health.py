"""
mandihub.api.routers.health

Health and readiness endpoints.

Responsibilities:
- Provide liveness check (`/healthz`).
- Provide readiness check (`/readyz`) that reaches both stores.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from mandihub.api.deps import mongo_database_from_app, sessionmaker_from_app

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(
    session_factory: async_sessionmaker[AsyncSession] = Depends(sessionmaker_from_app),
    mongo_db: AsyncIOMotorDatabase = Depends(mongo_database_from_app),
) -> dict[str, str]:
    async with session_factory() as session:
        await session.execute(text("SELECT 1"))
    await mongo_db.command("ping")
    return {"status": "ready"}
