"""
mandihub.stores

Backend-neutral storage capability interface.

Responsibilities:
- Describe what the services need from a category, product and seller store.
- Bundle one implementation of each into a `Catalog` for a single request.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Protocol

from motor.motor_asyncio import AsyncIOMotorDatabase
from sqlalchemy.ext.asyncio import AsyncSession

from mandihub.db.repositories.categories import SqlCategoryRepo
from mandihub.db.repositories.products import SqlProductRepo
from mandihub.db.repositories.sellers import SqlSellerRepo
from mandihub.docstore.repositories.categories import MongoCategoryRepo
from mandihub.docstore.repositories.products import MongoProductRepo
from mandihub.docstore.repositories.sellers import MongoSellerRepo
from mandihub.schemas import (
    CategoryRecord,
    EmbeddedCategory,
    EntityId,
    ProductRecord,
    ProfileData,
    SellerRecord,
)


class Backend(enum.StrEnum):
    mongo = "mongo"
    mysql = "mysql"


class CategoryStore(Protocol):
    async def find_by_id(self, category_id: EntityId) -> CategoryRecord | None: ...

    async def get_by_name(self, name: str) -> CategoryRecord | None: ...

    async def get_all(self) -> list[CategoryRecord]: ...

    async def save(self, *, name: str) -> CategoryRecord: ...

    async def update_fields(self, category_id: EntityId, fields: Mapping[str, Any]) -> int:
        """Return the number of categories matched (0 or 1)."""
        ...

    async def add_product_reference(
        self, category_ids: Iterable[EntityId], product_id: EntityId
    ) -> int: ...

    async def remove_product_reference(
        self, category_ids: Iterable[EntityId], product_id: EntityId
    ) -> int: ...

    async def delete_all(self) -> None: ...

    async def count(self) -> int: ...


class ProductStore(Protocol):
    async def find_by_id(self, product_id: EntityId) -> ProductRecord | None: ...

    async def get_by_name(self, name: str) -> ProductRecord | None: ...

    async def get_all(self) -> list[ProductRecord]: ...

    async def save(
        self,
        *,
        name: str,
        description: str | None,
        price: Decimal,
        image_urls: Sequence[str],
        seller_id: EntityId,
        categories: Sequence[EmbeddedCategory],
    ) -> ProductRecord: ...

    async def update_fields(self, product_id: EntityId, fields: Mapping[str, Any]) -> int: ...

    async def rename_embedded_category(self, category_id: EntityId, name: str) -> int:
        """Rewrite denormalized category names; return the number of products changed."""
        ...

    async def delete_all(self) -> None: ...

    async def count(self) -> int: ...


class SellerStore(Protocol):
    async def find_by_id(self, seller_id: EntityId) -> SellerRecord | None: ...

    async def find_by_account_id(self, account_id: str) -> SellerRecord | None: ...

    async def find_by_first_name(self, first_name: str) -> list[SellerRecord]: ...

    async def get_all(self) -> list[SellerRecord]: ...

    async def save(self, *, account_id: str, profile: ProfileData) -> SellerRecord: ...

    async def update_fields(self, seller_id: EntityId, fields: Mapping[str, Any]) -> int: ...

    async def delete_all(self) -> None: ...

    async def count(self) -> int: ...


@dataclass(frozen=True)
class Catalog:
    backend: Backend
    categories: CategoryStore
    products: ProductStore
    sellers: SellerStore


def sql_catalog(session: AsyncSession) -> Catalog:
    return Catalog(
        backend=Backend.mysql,
        categories=SqlCategoryRepo(session),
        products=SqlProductRepo(session),
        sellers=SqlSellerRepo(session),
    )


def mongo_catalog(database: AsyncIOMotorDatabase) -> Catalog:
    return Catalog(
        backend=Backend.mongo,
        categories=MongoCategoryRepo(database),
        products=MongoProductRepo(database),
        sellers=MongoSellerRepo(database),
    )


# --- Module Notes -----------------------------------------------------------
# Services only ever see a `Catalog`; which database sits behind it is decided
# by the `{backend}` path segment in `api.deps`.
