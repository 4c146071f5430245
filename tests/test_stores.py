"""
tests.test_stores

Store-level unique constraints, below the services' own duplicate checks.
"""

from __future__ import annotations

import pytest

from mandihub.errors import ValidationFailed
from mandihub.schemas import Gender, ProfileData
from mandihub.stores import Catalog

_PROFILE = ProfileData(first_name="Peter", last_name="Smith", gender=Gender.male)


@pytest.mark.asyncio
async def test_duplicate_category_save_is_validation_error(catalog: Catalog) -> None:
    await catalog.categories.save(name="Wood")

    with pytest.raises(ValidationFailed):
        await catalog.categories.save(name="Wood")

    assert [c.name for c in await catalog.categories.get_all()] == ["Wood"]


@pytest.mark.asyncio
async def test_rename_onto_taken_name_is_validation_error(catalog: Catalog) -> None:
    await catalog.categories.save(name="Wood")
    kitchen = await catalog.categories.save(name="Kitchen")

    with pytest.raises(ValidationFailed):
        await catalog.categories.update_fields(kitchen.id, {"name": "Wood"})

    assert (await catalog.categories.find_by_id(kitchen.id)).name == "Kitchen"


@pytest.mark.asyncio
async def test_duplicate_seller_account_id_is_validation_error(catalog: Catalog) -> None:
    await catalog.sellers.save(account_id="acct-391", profile=_PROFILE)

    with pytest.raises(ValidationFailed):
        await catalog.sellers.save(account_id="acct-391", profile=_PROFILE)

    assert await catalog.sellers.count() == 1
