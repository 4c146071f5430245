"""
mandihub.docstore.client

Motor client lifecycle helpers.
"""

from __future__ import annotations

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from mandihub.docstore import CATEGORIES, PRODUCTS, SELLERS
from mandihub.observability.logging import get_logger
from mandihub.settings import Settings

log = get_logger(__name__)


def create_mongo_client(settings: Settings) -> AsyncIOMotorClient:
    # Motor connects lazily; the first operation (or `ping`) opens the pool.
    return AsyncIOMotorClient(
        settings.mongodb_url,
        serverSelectionTimeoutMS=settings.mongodb_server_selection_timeout_ms,
        tz_aware=True,
    )


async def ensure_indexes(database: AsyncIOMotorDatabase) -> None:
    await database[CATEGORIES].create_index("name", unique=True)
    await database[PRODUCTS].create_index("name")
    await database[PRODUCTS].create_index("fall_into_categories._id")
    await database[SELLERS].create_index("account_id", unique=True)
    await database[SELLERS].create_index("profile.first_name")
    log.info("mongo_indexes_ready", database=database.name)
