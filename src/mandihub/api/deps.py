"""
mandihub.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Pick the store bundle named by the `{backend}` path segment.
- Scope one relational session per request.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorDatabase
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from mandihub.stores import Backend, Catalog, mongo_catalog, sql_catalog


def sessionmaker_from_app(request: Request) -> async_sessionmaker[AsyncSession]:
    # Created on startup in `mandihub.api.app.create_app`.
    return request.app.state.sessionmaker  # type: ignore[attr-defined]


def mongo_database_from_app(request: Request) -> AsyncIOMotorDatabase:
    return request.app.state.mongo_db  # type: ignore[attr-defined]


async def catalog_dep(backend: Backend, request: Request) -> AsyncIterator[Catalog]:
    if backend is Backend.mongo:
        yield mongo_catalog(mongo_database_from_app(request))
        return
    async with sessionmaker_from_app(request)() as session:
        yield sql_catalog(session)
