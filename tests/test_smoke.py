"""
tests.test_smoke

Smoke tests: the app boots, serves health checks and seeds fixtures on startup.
"""

from __future__ import annotations

import httpx
import pytest

from mandihub.api.app import create_app
from mandihub.settings import Settings


@pytest.mark.asyncio
async def test_health_endpoint(client: httpx.AsyncClient) -> None:
    r = await client.get("/healthz")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"
    assert r.headers["x-request-id"]


@pytest.mark.asyncio
async def test_request_id_is_echoed(client: httpx.AsyncClient) -> None:
    r = await client.get("/healthz", headers={"x-request-id": "abc-123"})
    assert r.headers["x-request-id"] == "abc-123"


@pytest.mark.asyncio
async def test_unknown_backend_is_rejected(client: httpx.AsyncClient) -> None:
    r = await client.get("/category/all/postgres")
    assert r.status_code == 400
    assert r.json()["error"]["type"] == "ValidationFailed"


@pytest.mark.asyncio
async def test_startup_seeds_both_backends(settings: Settings, mongo_client) -> None:
    seeded = settings.model_copy(update={"seed_on_startup": True})
    app = create_app(settings=seeded, mongo_client=mongo_client)
    async with app.router.lifespan_context(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            mongo_products = (await client.get("/product/all/mongo")).json()
            mysql_products = (await client.get("/product/all/mysql")).json()
            assert len(mongo_products) == 3
            assert len(mysql_products) == 2

            wood = (await client.get("/category/mongo", params={"name": "Wood"})).json()
            by_name = {p["name"]: p["id"] for p in mongo_products}
            assert sorted(wood["products_of_category"]) == sorted(
                [by_name["A Wooden Desk"], by_name["Bamboo Spoon"]]
            )

            sellers = (await client.get("/seller/all/mysql")).json()
            assert {s["profile"]["first_name"] for s in sellers} == {"Peter", "Sara"}
