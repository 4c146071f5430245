"""
tests.test_synchronizer

Denormalization synchronizer against both real store implementations.
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from mandihub.errors import ReferentialError, ValidationFailed, WriteConflict
from mandihub.schemas import Gender, ProductRecord, ProfileData
from mandihub.services.synchronizer import DenormalizationSynchronizer
from mandihub.stores import Backend, Catalog
from tests.conftest import missing_id


class _Failing:
    """Delegates to a real store except for the named method, which raises."""

    def __init__(self, inner, method: str) -> None:
        self._inner = inner
        self._method = method

    def __getattr__(self, name: str):
        if name == self._method:
            async def _boom(*args, **kwargs):
                raise RuntimeError("store unavailable")

            return _boom
        return getattr(self._inner, name)


async def _desk(
    catalog: Catalog, sync: DenormalizationSynchronizer, *category_ids
) -> ProductRecord:
    seller = await catalog.sellers.save(
        account_id="acct-391",
        profile=ProfileData(first_name="Peter", last_name="Smith", gender=Gender.male),
    )
    categories = await sync.resolve_categories(category_ids)
    desk = await catalog.products.save(
        name="A Wooden Desk",
        description="Made with thick solid reclaimed wood",
        price=Decimal("249.99"),
        image_urls=["https://img.example/desk.jpg"],
        seller_id=seller.id,
        categories=categories,
    )
    await sync.link_product(desk.id, categories)
    return desk


def _sync(catalog: Catalog) -> DenormalizationSynchronizer:
    return DenormalizationSynchronizer(categories=catalog.categories, products=catalog.products)


@pytest.mark.asyncio
async def test_product_link_populates_reverse_references(catalog: Catalog) -> None:
    sync = _sync(catalog)
    wood = await catalog.categories.save(name="Wood")
    handmade = await catalog.categories.save(name="Handmade")

    desk = await _desk(catalog, sync, wood.id, handmade.id)

    stored = await catalog.products.find_by_id(desk.id)
    assert {(c.id, c.name) for c in stored.categories} == {
        (wood.id, "Wood"),
        (handmade.id, "Handmade"),
    }
    assert (await catalog.categories.find_by_id(wood.id)).products_of_category == [desk.id]
    assert (await catalog.categories.find_by_id(handmade.id)).products_of_category == [desk.id]


@pytest.mark.asyncio
async def test_relinking_does_not_duplicate_reverse_references(catalog: Catalog) -> None:
    sync = _sync(catalog)
    wood = await catalog.categories.save(name="Wood")
    desk = await _desk(catalog, sync, wood.id)

    categories = await sync.resolve_categories([wood.id, wood.id])
    assert len(categories) == 1
    await sync.link_product(desk.id, categories)

    assert (await catalog.categories.find_by_id(wood.id)).products_of_category == [desk.id]


@pytest.mark.asyncio
async def test_dropped_category_loses_reverse_reference(catalog: Catalog) -> None:
    sync = _sync(catalog)
    wood = await catalog.categories.save(name="Wood")
    handmade = await catalog.categories.save(name="Handmade")
    desk = await _desk(catalog, sync, wood.id, handmade.id)

    remaining = await sync.resolve_categories([handmade.id])
    assert await catalog.products.update_fields(desk.id, {"categories": remaining}) == 1
    await sync.link_product(desk.id, remaining, previous=desk.categories)

    assert (await catalog.categories.find_by_id(wood.id)).products_of_category == []
    assert (await catalog.categories.find_by_id(handmade.id)).products_of_category == [desk.id]


@pytest.mark.asyncio
async def test_rename_rewrites_only_the_renamed_copy(catalog: Catalog) -> None:
    sync = _sync(catalog)
    wood = await catalog.categories.save(name="Wood")
    handmade = await catalog.categories.save(name="Handmade")
    desk = await _desk(catalog, sync, wood.id, handmade.id)

    rewritten = await sync.on_category_renamed(wood.id, "Reclaimed Wood")

    # Relational products join category names live, so nothing needs rewriting there.
    assert rewritten == (1 if catalog.backend is Backend.mongo else 0)
    assert (await catalog.categories.find_by_id(wood.id)).name == "Reclaimed Wood"
    names = {c.id: c.name for c in (await catalog.products.find_by_id(desk.id)).categories}
    assert names == {wood.id: "Reclaimed Wood", handmade.id: "Handmade"}


@pytest.mark.asyncio
async def test_rename_leaves_other_products_alone(catalog: Catalog) -> None:
    sync = _sync(catalog)
    wood = await catalog.categories.save(name="Wood")
    kitchen = await catalog.categories.save(name="Kitchen")
    desk = await _desk(catalog, sync, wood.id)
    kitchen_copies = await sync.resolve_categories([kitchen.id])
    spoon = await catalog.products.save(
        name="Bamboo Spoon",
        description=None,
        price=Decimal("13.11"),
        image_urls=[],
        seller_id=desk.seller_id,
        categories=kitchen_copies,
    )

    await sync.on_category_renamed(wood.id, "Oak")

    stored = await catalog.products.find_by_id(spoon.id)
    assert [(c.id, c.name) for c in stored.categories] == [(kitchen.id, "Kitchen")]


@pytest.mark.asyncio
async def test_rename_with_blank_name_is_rejected(catalog: Catalog) -> None:
    wood = await catalog.categories.save(name="Wood")

    with pytest.raises(ValidationFailed):
        await _sync(catalog).on_category_renamed(wood.id, "   ")

    assert (await catalog.categories.find_by_id(wood.id)).name == "Wood"


@pytest.mark.asyncio
async def test_rename_of_unknown_category_is_a_write_conflict(catalog: Catalog) -> None:
    with pytest.raises(WriteConflict):
        await _sync(catalog).on_category_renamed(missing_id(catalog.backend), "Oak")


@pytest.mark.asyncio
async def test_failed_rename_never_touches_products(catalog: Catalog) -> None:
    sync = _sync(catalog)
    wood = await catalog.categories.save(name="Wood")
    desk = await _desk(catalog, sync, wood.id)

    with pytest.raises(WriteConflict):
        await sync.on_category_renamed(missing_id(catalog.backend), "Oak")

    stored = await catalog.products.find_by_id(desk.id)
    assert [c.name for c in stored.categories] == ["Wood"]


@pytest.mark.asyncio
async def test_resolve_requires_at_least_one_category(catalog: Catalog) -> None:
    with pytest.raises(ValidationFailed):
        await _sync(catalog).resolve_categories([])


@pytest.mark.asyncio
async def test_resolve_rejects_all_when_one_id_is_unknown(catalog: Catalog) -> None:
    wood = await catalog.categories.save(name="Wood")
    unknown = missing_id(catalog.backend)

    with pytest.raises(ReferentialError) as exc_info:
        await _sync(catalog).resolve_categories([wood.id, unknown])

    assert exc_info.value.details == {"category_id": str(unknown)}
    assert (await catalog.categories.find_by_id(wood.id)).products_of_category == []


@pytest.mark.asyncio
async def test_resolve_treats_malformed_ids_as_unknown(catalog: Catalog) -> None:
    with pytest.raises(ReferentialError):
        await _sync(catalog).resolve_categories(["not-an-id"])


@pytest.mark.asyncio
async def test_reverse_reference_failure_is_tolerated(catalog: Catalog) -> None:
    wood = await catalog.categories.save(name="Wood")
    broken = DenormalizationSynchronizer(
        categories=_Failing(catalog.categories, "add_product_reference"),
        products=catalog.products,
    )
    categories = await broken.resolve_categories([wood.id])

    assert await broken.link_product("whatever", categories) == 0


@pytest.mark.asyncio
async def test_embedded_rewrite_failure_does_not_fail_rename(catalog: Catalog) -> None:
    wood = await catalog.categories.save(name="Wood")
    broken = DenormalizationSynchronizer(
        categories=catalog.categories,
        products=_Failing(catalog.products, "rename_embedded_category"),
    )

    assert await broken.on_category_renamed(wood.id, "Oak") == 0
    assert (await catalog.categories.find_by_id(wood.id)).name == "Oak"
