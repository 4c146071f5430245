"""
mandihub.docstore.serializers

ObjectId / BSON conversion at the document store boundary.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any

from bson import ObjectId
from bson.decimal128 import Decimal128


def to_object_id(value: Any) -> ObjectId | None:
    """Parse an id coming from a client; malformed ids yield None."""
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return None


def to_object_ids(values: Iterable[Any]) -> list[ObjectId]:
    return [oid for oid in (to_object_id(v) for v in values) if oid is not None]


def convert_object_ids(doc: Any) -> Any:
    """Recursively replace ObjectId values with their hex strings."""
    if isinstance(doc, dict):
        return {key: convert_object_ids(value) for key, value in doc.items()}
    if isinstance(doc, list):
        return [convert_object_ids(item) for item in doc]
    if isinstance(doc, ObjectId):
        return str(doc)
    return doc


def to_decimal128(value: Decimal) -> Decimal128:
    return Decimal128(value)


def from_decimal128(value: Any) -> Decimal:
    if isinstance(value, Decimal128):
        return value.to_decimal()
    return Decimal(str(value))


def to_bson_date(value: date | None) -> datetime | None:
    # BSON has no plain date type.
    if value is None:
        return None
    return datetime.combine(value, time.min)


def from_bson_date(value: Any) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    return value
