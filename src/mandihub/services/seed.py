"""
mandihub.services.seed

Startup fixture loader.

Responsibilities:
- Wipe a catalog (products, categories, sellers) and repopulate it.
- Go through the services so reverse references are maintained the same way
  as for API writes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from mandihub.observability.logging import get_logger
from mandihub.schemas import (
    CategoryPayload,
    Gender,
    ProductPayload,
    ProfileData,
    SellerPayload,
)
from mandihub.services.catalog_service import CategoryService, ProductService, SellerService
from mandihub.stores import Catalog

log = get_logger(__name__)


@dataclass(frozen=True)
class FixtureProduct:
    name: str
    description: str
    price: Decimal
    seller: str  # account id
    categories: tuple[str, ...]  # category names
    image_urls: tuple[str, ...] = ()


@dataclass(frozen=True)
class Fixture:
    sellers: tuple[SellerPayload, ...]
    categories: tuple[str, ...]
    products: tuple[FixtureProduct, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class SeedReport:
    sellers: int
    categories: int
    products: int


_PETER = SellerPayload(
    account_id="Peter's account id = 391",
    profile=ProfileData(first_name="Peter", last_name="Smith", gender=Gender.male),
)
_SARA = SellerPayload(
    account_id="Sara's account id = 542",
    profile=ProfileData(
        first_name="Sara",
        last_name="Miller",
        website="https://sara-miller.example",
        gender=Gender.female,
    ),
)

_CATEGORIES = ("Furniture", "Handmade", "Kitchen", "Wood")

_DESK = FixtureProduct(
    name="A Wooden Desk",
    description="Made with thick solid reclaimed wood, Easy to Assemble",
    price=Decimal("249.99"),
    seller=_PETER.account_id,
    categories=("Wood", "Handmade"),
)

DOCUMENT_FIXTURE = Fixture(
    sellers=(_PETER,),
    categories=_CATEGORIES,
    products=(
        _DESK,
        FixtureProduct(
            name="Antique Dining Chair",
            description="This mid-century fashionable chair is quite comfortable and attractive.",
            price=Decimal("234.20"),
            seller=_PETER.account_id,
            categories=("Furniture",),
        ),
        FixtureProduct(
            name="Bamboo Spoon",
            description=(
                "This is more durable than traditional hardwood spoon, "
                "safe to use any cookware."
            ),
            price=Decimal("13.11"),
            seller=_PETER.account_id,
            categories=("Handmade", "Wood", "Kitchen"),
        ),
    ),
)

RELATIONAL_FIXTURE = Fixture(
    sellers=(_PETER, _SARA),
    categories=_CATEGORIES,
    products=(
        _DESK,
        FixtureProduct(
            name="Walnut Cutting Board",
            description="End-grain walnut board, finished with food-safe oil.",
            price=Decimal("45.50"),
            seller=_SARA.account_id,
            categories=("Kitchen", "Handmade"),
        ),
    ),
)


async def reset_catalog(catalog: Catalog) -> None:
    # Products first: they reference both sellers and categories.
    await catalog.products.delete_all()
    await catalog.categories.delete_all()
    await catalog.sellers.delete_all()


async def seed_catalog(catalog: Catalog, fixture: Fixture) -> SeedReport:
    await reset_catalog(catalog)

    sellers = SellerService(catalog)
    seller_ids = {}
    for payload in fixture.sellers:
        seller = await sellers.create(payload)
        seller_ids[seller.account_id] = seller.id

    categories = CategoryService(catalog)
    category_ids = {}
    for name in fixture.categories:
        category = await categories.create(CategoryPayload(name=name))
        category_ids[category.name] = category.id

    products = ProductService(catalog)
    for item in fixture.products:
        await products.create(
            ProductPayload(
                name=item.name,
                description=item.description,
                price=item.price,
                image_urls=list(item.image_urls),
                seller_id=seller_ids[item.seller],
                category_ids=[category_ids[name] for name in item.categories],
            )
        )

    report = SeedReport(
        sellers=await catalog.sellers.count(),
        categories=await catalog.categories.count(),
        products=await catalog.products.count(),
    )
    log.info(
        "catalog_seeded",
        backend=catalog.backend.value,
        sellers=report.sellers,
        categories=report.categories,
        products=report.products,
    )
    return report


async def seed_all(*, relational: Catalog, document: Catalog) -> dict[str, SeedReport]:
    return {
        relational.backend.value: await seed_catalog(relational, RELATIONAL_FIXTURE),
        document.backend.value: await seed_catalog(document, DOCUMENT_FIXTURE),
    }
