from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from motor.motor_asyncio import AsyncIOMotorDatabase

from mandihub.docstore import SELLERS
from mandihub.docstore.repositories import unique_violation_as
from mandihub.docstore.serializers import (
    convert_object_ids,
    from_bson_date,
    to_bson_date,
    to_object_id,
)
from mandihub.schemas import EntityId, ProfileData, SellerRecord


def seller_record(doc: dict[str, Any]) -> SellerRecord:
    doc = convert_object_ids(doc)
    profile = dict(doc["profile"])
    profile["birthday"] = from_bson_date(profile.get("birthday"))
    return SellerRecord(id=doc["_id"], account_id=doc["account_id"], profile=ProfileData(**profile))


def _profile_doc(profile: ProfileData) -> dict[str, Any]:
    doc = profile.model_dump(mode="python")
    doc["birthday"] = to_bson_date(profile.birthday)
    doc["gender"] = profile.gender.value
    return doc


class MongoSellerRepo:
    def __init__(self, database: AsyncIOMotorDatabase) -> None:
        self._collection = database[SELLERS]

    async def find_by_id(self, seller_id: EntityId) -> SellerRecord | None:
        oid = to_object_id(seller_id)
        if oid is None:
            return None
        doc = await self._collection.find_one({"_id": oid})
        return seller_record(doc) if doc is not None else None

    async def find_by_account_id(self, account_id: str) -> SellerRecord | None:
        doc = await self._collection.find_one({"account_id": account_id})
        return seller_record(doc) if doc is not None else None

    async def find_by_first_name(self, first_name: str) -> list[SellerRecord]:
        cursor = self._collection.find({"profile.first_name": first_name}).sort("_id", 1)
        return [seller_record(d) for d in await cursor.to_list(length=None)]

    async def get_all(self) -> list[SellerRecord]:
        docs = await self._collection.find({}).sort("_id", 1).to_list(length=None)
        return [seller_record(d) for d in docs]

    async def save(self, *, account_id: str, profile: ProfileData) -> SellerRecord:
        doc: dict[str, Any] = {"account_id": account_id, "profile": _profile_doc(profile)}
        with unique_violation_as(f"A seller with account id {account_id!r} already exists"):
            result = await self._collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        return seller_record(doc)

    async def update_fields(self, seller_id: EntityId, fields: Mapping[str, Any]) -> int:
        oid = to_object_id(seller_id)
        if oid is None:
            return 0
        update: dict[str, Any] = {}
        for key, value in fields.items():
            if key == "profile":
                # Dotted paths rewrite the embedded profile field by field.
                for attr, attr_value in _profile_doc(value).items():
                    update[f"profile.{attr}"] = attr_value
            else:
                update[key] = value
        with unique_violation_as("A seller with this account id already exists"):
            result = await self._collection.update_one({"_id": oid}, {"$set": update})
        return result.matched_count

    async def delete_all(self) -> None:
        await self._collection.delete_many({})

    async def count(self) -> int:
        return await self._collection.count_documents({})
