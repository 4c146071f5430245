"""
mandihub.db.models

Relational schema for the catalog.

Responsibilities:
- Seller 1:1 Profile (profile row owned by exactly one seller).
- Seller 1:N Product (foreign key on products).
- Product N:M Category (association table `product_categories`).
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from sqlalchemy import JSON, Column, Date, Enum, ForeignKey, Numeric, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from mandihub.db.base import Base
from mandihub.schemas import Gender

product_categories = Table(
    "product_categories",
    Base.metadata,
    Column("product_id", ForeignKey("products.id", ondelete="CASCADE"), primary_key=True),
    Column("category_id", ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True),
)


class Category(Base):
    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False, unique=True)

    # Reverse side of the many-to-many; derived from the association table.
    products: Mapped[list[Product]] = relationship(
        secondary=product_categories, back_populates="categories", lazy="selectin"
    )


class Profile(Base):
    __tablename__ = "profiles"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    first_name: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    last_name: Mapped[str] = mapped_column(String(128), nullable=False)
    website: Mapped[str | None] = mapped_column(String(256), nullable=True)
    birthday: Mapped[date | None] = mapped_column(Date, nullable=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    email_address: Mapped[str | None] = mapped_column(String(256), nullable=True)
    gender: Mapped[Gender] = mapped_column(Enum(Gender), nullable=False, default=Gender.other)

    seller: Mapped[Seller] = relationship(back_populates="profile")


class Seller(Base):
    __tablename__ = "sellers"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    account_id: Mapped[str] = mapped_column(String(128), nullable=False, unique=True)
    profile_id: Mapped[int] = mapped_column(ForeignKey("profiles.id"), nullable=False, unique=True)

    profile: Mapped[Profile] = relationship(
        back_populates="seller",
        cascade="all, delete-orphan",
        single_parent=True,
        lazy="selectin",
    )
    products: Mapped[list[Product]] = relationship(back_populates="seller")


class Product(Base):
    __tablename__ = "products"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(256), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    image_urls: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    seller_id: Mapped[int] = mapped_column(ForeignKey("sellers.id"), nullable=False, index=True)

    seller: Mapped[Seller] = relationship(back_populates="products", lazy="selectin")
    categories: Mapped[list[Category]] = relationship(
        secondary=product_categories, back_populates="products", lazy="selectin"
    )


# --- Module Notes -----------------------------------------------------------
# Unlike the document store, nothing here is denormalized: product category
# names and category product lists are read through the association table.
