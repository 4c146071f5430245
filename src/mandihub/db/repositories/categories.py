from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from mandihub.db.models import Category, product_categories
from mandihub.db.repositories import as_pk, commit_unique
from mandihub.schemas import CategoryRecord, EntityId


def category_record(category: Category) -> CategoryRecord:
    return CategoryRecord(
        id=category.id,
        name=category.name,
        products_of_category=sorted(p.id for p in category.products),
    )


class SqlCategoryRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_id(self, category_id: EntityId) -> CategoryRecord | None:
        pk = as_pk(category_id)
        if pk is None:
            return None
        category = await self._session.get(Category, pk, populate_existing=True)
        return category_record(category) if category is not None else None

    async def get_by_name(self, name: str) -> CategoryRecord | None:
        stmt = (
            select(Category)
            .where(Category.name == name)
            .execution_options(populate_existing=True)
        )
        category = (await self._session.execute(stmt)).scalar_one_or_none()
        return category_record(category) if category is not None else None

    async def get_all(self) -> list[CategoryRecord]:
        stmt = select(Category).order_by(Category.id).execution_options(populate_existing=True)
        return [category_record(c) for c in (await self._session.execute(stmt)).scalars().all()]

    async def save(self, *, name: str) -> CategoryRecord:
        category = Category(name=name, products=[])
        self._session.add(category)
        await commit_unique(self._session, f"A category named {name!r} already exists")
        return category_record(category)

    async def update_fields(self, category_id: EntityId, fields: Mapping[str, Any]) -> int:
        pk = as_pk(category_id)
        category = await self._session.get(Category, pk) if pk is not None else None
        if category is None:
            return 0
        for key, value in fields.items():
            setattr(category, key, value)
        await commit_unique(self._session, "A category with this name already exists")
        return 1

    async def add_product_reference(
        self, category_ids: Iterable[EntityId], product_id: EntityId
    ) -> int:
        # The association rows were written with the product; report how many exist.
        pks = [pk for pk in (as_pk(c) for c in category_ids) if pk is not None]
        stmt = (
            select(func.count())
            .select_from(product_categories)
            .where(
                product_categories.c.product_id == as_pk(product_id),
                product_categories.c.category_id.in_(pks),
            )
        )
        return int((await self._session.execute(stmt)).scalar_one())

    async def remove_product_reference(
        self, category_ids: Iterable[EntityId], product_id: EntityId
    ) -> int:
        # Replacing `Product.categories` already dropped the stale association rows.
        return 0

    async def delete_all(self) -> None:
        await self._session.execute(delete(product_categories))
        await self._session.execute(delete(Category))
        await self._session.commit()
        self._session.expunge_all()

    async def count(self) -> int:
        stmt = select(func.count()).select_from(Category)
        return int((await self._session.execute(stmt)).scalar_one())
