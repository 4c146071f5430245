from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from motor.motor_asyncio import AsyncIOMotorDatabase

from mandihub.docstore import CATEGORIES
from mandihub.docstore.repositories import unique_violation_as
from mandihub.docstore.serializers import convert_object_ids, to_object_id, to_object_ids
from mandihub.schemas import CategoryRecord, EntityId


def category_record(doc: dict[str, Any]) -> CategoryRecord:
    doc = convert_object_ids(doc)
    return CategoryRecord(
        id=doc["_id"],
        name=doc["name"],
        products_of_category=doc.get("products_of_category", []),
    )


class MongoCategoryRepo:
    def __init__(self, database: AsyncIOMotorDatabase) -> None:
        self._collection = database[CATEGORIES]

    async def find_by_id(self, category_id: EntityId) -> CategoryRecord | None:
        oid = to_object_id(category_id)
        if oid is None:
            return None
        doc = await self._collection.find_one({"_id": oid})
        return category_record(doc) if doc is not None else None

    async def get_by_name(self, name: str) -> CategoryRecord | None:
        doc = await self._collection.find_one({"name": name})
        return category_record(doc) if doc is not None else None

    async def get_all(self) -> list[CategoryRecord]:
        docs = await self._collection.find({}).sort("_id", 1).to_list(length=None)
        return [category_record(d) for d in docs]

    async def save(self, *, name: str) -> CategoryRecord:
        doc: dict[str, Any] = {"name": name, "products_of_category": []}
        with unique_violation_as(f"A category named {name!r} already exists"):
            result = await self._collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        return category_record(doc)

    async def update_fields(self, category_id: EntityId, fields: Mapping[str, Any]) -> int:
        oid = to_object_id(category_id)
        if oid is None:
            return 0
        with unique_violation_as("A category with this name already exists"):
            result = await self._collection.update_one({"_id": oid}, {"$set": dict(fields)})
        return result.matched_count

    async def add_product_reference(
        self, category_ids: Iterable[EntityId], product_id: EntityId
    ) -> int:
        # $addToSet keeps the reverse collection free of duplicates.
        result = await self._collection.update_many(
            {"_id": {"$in": to_object_ids(category_ids)}},
            {"$addToSet": {"products_of_category": to_object_id(product_id)}},
        )
        return result.modified_count

    async def remove_product_reference(
        self, category_ids: Iterable[EntityId], product_id: EntityId
    ) -> int:
        result = await self._collection.update_many(
            {"_id": {"$in": to_object_ids(category_ids)}},
            {"$pull": {"products_of_category": to_object_id(product_id)}},
        )
        return result.modified_count

    async def delete_all(self) -> None:
        await self._collection.delete_many({})

    async def count(self) -> int:
        return await self._collection.count_documents({})
