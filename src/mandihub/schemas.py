"""
mandihub.schemas

Backend-neutral catalog models.

Responsibilities:
- Records returned by every store implementation (and by the API).
- Request payloads accepted by the category, product and seller routers.
"""

from __future__ import annotations

import enum
from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field

# Integer primary keys on the relational side, ObjectId hex strings on the document side.
EntityId = int | str


class Gender(enum.StrEnum):
    male = "Male"
    female = "Female"
    other = "Other"


class ProfileData(BaseModel):
    first_name: str = Field(min_length=1, max_length=128)
    last_name: str = Field(min_length=1, max_length=128)
    website: str | None = None
    birthday: date | None = None
    address: str | None = None
    email_address: str | None = None
    gender: Gender = Gender.other


class EmbeddedCategory(BaseModel):
    # Denormalized copy of a category, stored inside each product document.
    id: EntityId
    name: str


class CategoryRecord(BaseModel):
    id: EntityId
    name: str
    products_of_category: list[EntityId] = Field(default_factory=list)


class ProductRecord(BaseModel):
    id: EntityId
    name: str
    description: str | None = None
    price: Decimal
    image_urls: list[str] = Field(default_factory=list)
    seller_id: EntityId | None = None
    categories: list[EmbeddedCategory] = Field(default_factory=list)


class SellerRecord(BaseModel):
    id: EntityId
    account_id: str
    profile: ProfileData


class CategoryPayload(BaseModel):
    id: EntityId | None = None
    name: str | None = None


class ProductPayload(BaseModel):
    id: EntityId | None = None
    name: str = Field(min_length=1, max_length=256)
    description: str | None = None
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    image_urls: list[str] = Field(default_factory=list)
    seller_id: EntityId | None = None
    category_ids: list[EntityId] = Field(default_factory=list)


class SellerPayload(BaseModel):
    id: EntityId | None = None
    account_id: str
    profile: ProfileData


class MessageResponse(BaseModel):
    message: str


# --- Module Notes -----------------------------------------------------------
# Blank names and account ids are not rejected here: the services trim them and
# report blank ones, since whitespace-only strings pass field validation.
