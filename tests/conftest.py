"""
tests.conftest

Shared fixtures: throwaway stores for both backends and an app wired to them.

Responsibilities:
- Relational store: a sqlite file per test.
- Document store: an in-memory MongoDB (mongomock-motor) per test.
"""

from __future__ import annotations

import uuid
from collections.abc import AsyncIterator

import httpx
import pytest
import pytest_asyncio
from bson import ObjectId
from fastapi import FastAPI
from mongomock_motor import AsyncMongoMockClient
from sqlalchemy.ext.asyncio import AsyncSession

from mandihub.api.app import create_app
from mandihub.db.init_db import init_db
from mandihub.db.session import create_engine, create_sessionmaker
from mandihub.docstore.client import ensure_indexes
from mandihub.schemas import EntityId
from mandihub.settings import Settings
from mandihub.stores import Backend, Catalog, mongo_catalog, sql_catalog


def missing_id(backend: str) -> EntityId:
    # Well-formed for the backend, but never issued.
    return str(ObjectId()) if backend == Backend.mongo else 987654


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        env="test",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'mandihub-test.db'}",
        mongodb_database=f"mandihub_test_{uuid.uuid4().hex}",
        seed_on_startup=False,
        log_level="WARNING",
    )


@pytest.fixture
def mongo_client() -> AsyncMongoMockClient:
    return AsyncMongoMockClient()


@pytest_asyncio.fixture
async def sql_session(settings: Settings) -> AsyncIterator[AsyncSession]:
    engine = create_engine(settings)
    await init_db(engine)
    async with create_sessionmaker(engine)() as session:
        yield session
    await engine.dispose()


@pytest_asyncio.fixture(params=[Backend.mongo, Backend.mysql], ids=["mongo", "mysql"])
async def catalog(request, sql_session: AsyncSession, mongo_client, settings) -> Catalog:
    if request.param is Backend.mongo:
        database = mongo_client[settings.mongodb_database]
        await ensure_indexes(database)
        return mongo_catalog(database)
    return sql_catalog(sql_session)


@pytest_asyncio.fixture
async def app(settings: Settings, mongo_client) -> AsyncIterator[FastAPI]:
    app = create_app(settings=settings, mongo_client=mongo_client)
    # httpx's ASGITransport does not run lifespan events; drive them explicitly.
    async with app.router.lifespan_context(app):
        yield app


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture(params=["mongo", "mysql"])
def backend(request) -> str:
    return request.param
