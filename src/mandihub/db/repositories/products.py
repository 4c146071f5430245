from __future__ import annotations

from collections.abc import Mapping, Sequence
from decimal import Decimal
from typing import Any

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from mandihub.db.models import Category, Product, Seller, product_categories
from mandihub.db.repositories import as_pk
from mandihub.schemas import EmbeddedCategory, EntityId, ProductRecord


def product_record(product: Product) -> ProductRecord:
    return ProductRecord(
        id=product.id,
        name=product.name,
        description=product.description,
        price=product.price,
        image_urls=list(product.image_urls or []),
        seller_id=product.seller_id,
        categories=[
            EmbeddedCategory(id=c.id, name=c.name)
            for c in sorted(product.categories, key=lambda c: c.id)
        ],
    )


class SqlProductRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def _categories(self, categories: Sequence[EmbeddedCategory]) -> list[Category]:
        pks = [pk for pk in (as_pk(c.id) for c in categories) if pk is not None]
        stmt = select(Category).where(Category.id.in_(pks))
        return list((await self._session.execute(stmt)).scalars().all())

    async def find_by_id(self, product_id: EntityId) -> ProductRecord | None:
        pk = as_pk(product_id)
        if pk is None:
            return None
        product = await self._session.get(Product, pk, populate_existing=True)
        return product_record(product) if product is not None else None

    async def get_by_name(self, name: str) -> ProductRecord | None:
        # Product names are not unique; the earliest match wins.
        stmt = (
            select(Product)
            .where(Product.name == name)
            .order_by(Product.id)
            .limit(1)
            .execution_options(populate_existing=True)
        )
        product = (await self._session.execute(stmt)).scalar_one_or_none()
        return product_record(product) if product is not None else None

    async def get_all(self) -> list[ProductRecord]:
        stmt = select(Product).order_by(Product.id).execution_options(populate_existing=True)
        return [product_record(p) for p in (await self._session.execute(stmt)).scalars().all()]

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
        seller = await self._session.get(Seller, as_pk(seller_id))
        product = Product(
            name=name,
            description=description,
            price=price,
            image_urls=list(image_urls),
            seller=seller,
            categories=await self._categories(categories),
        )
        self._session.add(product)
        await self._session.commit()
        return product_record(product)

    async def update_fields(self, product_id: EntityId, fields: Mapping[str, Any]) -> int:
        pk = as_pk(product_id)
        product = await self._session.get(Product, pk) if pk is not None else None
        if product is None:
            return 0
        for key, value in fields.items():
            if key == "categories":
                product.categories = await self._categories(value)
            elif key == "image_urls":
                product.image_urls = list(value)
            else:
                setattr(product, key, value)
        await self._session.commit()
        return 1

    async def rename_embedded_category(self, category_id: EntityId, name: str) -> int:
        # Category names are joined at read time; there are no copies to rewrite.
        return 0

    async def delete_all(self) -> None:
        await self._session.execute(delete(product_categories))
        await self._session.execute(delete(Product))
        await self._session.commit()
        self._session.expunge_all()

    async def count(self) -> int:
        stmt = select(func.count()).select_from(Product)
        return int((await self._session.execute(stmt)).scalar_one())
