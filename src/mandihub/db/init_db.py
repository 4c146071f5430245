"""
mandihub.db.init_db

DB initialization helpers (dev/test convenience).
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine

from mandihub.db import models  # noqa: F401  # register tables on Base.metadata
from mandihub.db.base import Base


async def init_db(engine: AsyncEngine) -> None:
    """
    Create the catalog tables if they don't exist. Schema migrations are out of
    scope; prod databases are expected to be provisioned ahead of time.
    """

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
