"""
mandihub.api.app

FastAPI app factory for the MandiHub catalog service.

Responsibilities:
- Build the FastAPI application and register routers/middleware/error handlers.
- Open both store clients at startup and close them at shutdown.
- Seed fixture data when configured to.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from motor.motor_asyncio import AsyncIOMotorClient

from mandihub import __version__
from mandihub.api.routers.categories import router as categories_router
from mandihub.api.routers.health import router as health_router
from mandihub.api.routers.products import router as products_router
from mandihub.api.routers.sellers import router as sellers_router
from mandihub.db.init_db import init_db
from mandihub.db.session import create_engine, create_sessionmaker
from mandihub.docstore.client import create_mongo_client, ensure_indexes
from mandihub.errors import install_error_handlers
from mandihub.observability.logging import configure_logging, get_logger
from mandihub.observability.middleware import RequestContextMiddleware
from mandihub.services.seed import seed_all
from mandihub.settings import Settings
from mandihub.stores import mongo_catalog, sql_catalog

log = get_logger(__name__)


def create_app(*, settings: Settings, mongo_client: AsyncIOMotorClient | None = None) -> FastAPI:
    """
    `mongo_client` lets callers supply their own (e.g. in-memory) client; the app
    only closes clients it created itself.
    """
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        engine = create_engine(settings)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)

        client = mongo_client if mongo_client is not None else create_mongo_client(settings)
        app.state.mongo_client = client
        app.state.mongo_db = client[settings.mongodb_database]

        try:
            if settings.env in ("dev", "test"):
                # Prod databases are provisioned outside the service.
                await init_db(engine)
                await ensure_indexes(app.state.mongo_db)
            if settings.seed_on_startup:
                async with app.state.sessionmaker() as session:
                    await seed_all(
                        relational=sql_catalog(session),
                        document=mongo_catalog(app.state.mongo_db),
                    )
            yield
        finally:
            await engine.dispose()
            if mongo_client is None:
                client.close()
            log.info("shutdown")

    app = FastAPI(
        title="MandiHub Catalog",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(RequestContextMiddleware)
    install_error_handlers(app)
    app.include_router(health_router, tags=["health"])
    app.include_router(categories_router)
    app.include_router(products_router)
    app.include_router(sellers_router)

    return app


# --- Module Notes -----------------------------------------------------------
# App composition stays here; request handling lives in routers and services.
