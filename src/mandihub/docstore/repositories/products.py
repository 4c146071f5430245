from __future__ import annotations

from collections.abc import Mapping, Sequence
from decimal import Decimal
from typing import Any

from motor.motor_asyncio import AsyncIOMotorDatabase

from mandihub.docstore import PRODUCTS
from mandihub.docstore.serializers import (
    convert_object_ids,
    from_decimal128,
    to_decimal128,
    to_object_id,
)
from mandihub.schemas import EmbeddedCategory, EntityId, ProductRecord


def product_record(doc: dict[str, Any]) -> ProductRecord:
    price = from_decimal128(doc["price"])
    doc = convert_object_ids(doc)
    return ProductRecord(
        id=doc["_id"],
        name=doc["name"],
        description=doc.get("description"),
        price=price,
        image_urls=doc.get("image_urls", []),
        seller_id=doc.get("seller_id"),
        categories=[
            EmbeddedCategory(id=c["_id"], name=c["name"])
            for c in doc.get("fall_into_categories", [])
        ],
    )


def _embedded(categories: Sequence[EmbeddedCategory]) -> list[dict[str, Any]]:
    return [{"_id": to_object_id(c.id), "name": c.name} for c in categories]


class MongoProductRepo:
    def __init__(self, database: AsyncIOMotorDatabase) -> None:
        self._collection = database[PRODUCTS]

    async def find_by_id(self, product_id: EntityId) -> ProductRecord | None:
        oid = to_object_id(product_id)
        if oid is None:
            return None
        doc = await self._collection.find_one({"_id": oid})
        return product_record(doc) if doc is not None else None

    async def get_by_name(self, name: str) -> ProductRecord | None:
        docs = await self._collection.find({"name": name}).sort("_id", 1).to_list(length=1)
        return product_record(docs[0]) if docs else None

    async def get_all(self) -> list[ProductRecord]:
        docs = await self._collection.find({}).sort("_id", 1).to_list(length=None)
        return [product_record(d) for d in docs]

    async def save(
        self,
        *,
        name: str,
        description: str | None,
        price: Decimal,
        image_urls: Sequence[str],
        seller_id: EntityId,
        categories: Sequence[EmbeddedCategory],
    ) -> ProductRecord:
        doc: dict[str, Any] = {
            "name": name,
            "description": description,
            "price": to_decimal128(price),
            "image_urls": list(image_urls),
            "seller_id": to_object_id(seller_id),
            "fall_into_categories": _embedded(categories),
        }
        result = await self._collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        return product_record(doc)

    async def update_fields(self, product_id: EntityId, fields: Mapping[str, Any]) -> int:
        oid = to_object_id(product_id)
        if oid is None:
            return 0
        update: dict[str, Any] = {}
        for key, value in fields.items():
            if key == "categories":
                update["fall_into_categories"] = _embedded(value)
            elif key == "price":
                update["price"] = to_decimal128(value)
            elif key == "image_urls":
                update["image_urls"] = list(value)
            else:
                update[key] = value
        result = await self._collection.update_one({"_id": oid}, {"$set": update})
        return result.matched_count

    async def rename_embedded_category(self, category_id: EntityId, name: str) -> int:
        # `$` addresses the array element matched by the `fall_into_categories._id` filter.
        result = await self._collection.update_many(
            {"fall_into_categories._id": to_object_id(category_id)},
            {"$set": {"fall_into_categories.$.name": name}},
        )
        return result.modified_count

    async def delete_all(self) -> None:
        await self._collection.delete_many({})

    async def count(self) -> int:
        return await self._collection.count_documents({})
