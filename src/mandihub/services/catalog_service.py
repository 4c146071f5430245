"""
mandihub.services.catalog_service

Backend-neutral handling for the category, product and seller resources.

Responsibilities:
- Validate payloads and map missing records to catalog errors.
- Route every write that touches category names or memberships through the
  denormalization synchronizer.
"""

from __future__ import annotations

from mandihub.errors import NotFound, ReferentialError, ValidationFailed, WriteConflict
from mandihub.observability.logging import get_logger
from mandihub.schemas import (
    CategoryPayload,
    CategoryRecord,
    EntityId,
    ProductPayload,
    ProductRecord,
    SellerPayload,
    SellerRecord,
)
from mandihub.services.synchronizer import DenormalizationSynchronizer
from mandihub.stores import Catalog

log = get_logger(__name__)


def _required(value: str | None, field: str) -> str:
    # Names and account ids are stored trimmed; blank ones are rejected.
    if value is None or not value.strip():
        raise ValidationFailed(f"{field} must not be blank")
    return value.strip()


def _require_single_match(matched: int, resource: str, record_id: EntityId) -> None:
    if matched != 1:
        raise WriteConflict(
            f"The {resource} update did not match exactly one record",
            details={"id": str(record_id), "matched": matched},
        )


class CategoryService:
    def __init__(self, catalog: Catalog) -> None:
        self._categories = catalog.categories
        self._sync = DenormalizationSynchronizer(
            categories=catalog.categories, products=catalog.products
        )

    async def get_by_name(self, name: str) -> CategoryRecord:
        category = await self._categories.get_by_name(name)
        if category is None:
            log.info("category_not_found", name=name)
            raise NotFound(f"There isn't any category with name: {name}")
        return category

    async def list_all(self) -> list[CategoryRecord]:
        return await self._categories.get_all()

    async def create(self, payload: CategoryPayload) -> CategoryRecord:
        name = _required(payload.name, "Category name")
        if await self._categories.get_by_name(name) is not None:
            raise ValidationFailed(f"A category named {name!r} already exists")
        category = await self._categories.save(name=name)
        log.info("category_created", category_id=str(category.id), name=category.name)
        return category

    async def update(self, payload: CategoryPayload) -> None:
        if payload.id is None:
            raise ValidationFailed("Category id is required")
        name = _required(payload.name, "Category name")
        if await self._categories.find_by_id(payload.id) is None:
            raise NotFound("This category doesn't exist", details={"id": str(payload.id)})
        holder = await self._categories.get_by_name(name)
        if holder is not None and str(holder.id) != str(payload.id):
            raise ValidationFailed(f"A category named {name!r} already exists")
        await self._sync.on_category_renamed(payload.id, name)


class ProductService:
    def __init__(self, catalog: Catalog) -> None:
        self._products = catalog.products
        self._sellers = catalog.sellers
        self._sync = DenormalizationSynchronizer(
            categories=catalog.categories, products=catalog.products
        )

    async def get_by_name(self, name: str) -> ProductRecord:
        product = await self._products.get_by_name(name)
        if product is None:
            log.info("product_not_found", name=name)
            raise NotFound(f"There isn't any product with name: {name}")
        return product

    async def list_all(self) -> list[ProductRecord]:
        return await self._products.get_all()

    async def create(self, payload: ProductPayload) -> ProductRecord:
        name = _required(payload.name, "Product name")
        categories = await self._sync.resolve_categories(payload.category_ids)
        if payload.seller_id is None or await self._sellers.find_by_id(payload.seller_id) is None:
            raise ReferentialError(
                "The seller of this product doesn't exist",
                details={"seller_id": str(payload.seller_id)},
            )

        product = await self._products.save(
            name=name,
            description=payload.description,
            price=payload.price,
            image_urls=payload.image_urls,
            seller_id=payload.seller_id,
            categories=categories,
        )
        await self._sync.link_product(product.id, categories)
        log.info("product_created", product_id=str(product.id), name=product.name)
        return product

    async def update(self, payload: ProductPayload) -> None:
        if payload.id is None:
            raise ValidationFailed("Product id is required")
        name = _required(payload.name, "Product name")
        existing = await self._products.find_by_id(payload.id)
        if existing is None:
            raise NotFound("This product doesn't exist", details={"id": str(payload.id)})
        categories = await self._sync.resolve_categories(payload.category_ids)

        # The seller is fixed at creation; only the descriptive fields and memberships move.
        matched = await self._products.update_fields(
            payload.id,
            {
                "name": name,
                "description": payload.description,
                "price": payload.price,
                "image_urls": payload.image_urls,
                "categories": categories,
            },
        )
        _require_single_match(matched, "product", payload.id)
        await self._sync.link_product(existing.id, categories, previous=existing.categories)
        log.info("product_updated", product_id=str(existing.id), name=name)


class SellerService:
    def __init__(self, catalog: Catalog) -> None:
        self._sellers = catalog.sellers

    async def find_by_first_name(self, first_name: str) -> list[SellerRecord]:
        sellers = await self._sellers.find_by_first_name(first_name)
        if not sellers:
            raise NotFound(f"There isn't any seller with first name: {first_name}")
        log.info("sellers_found", first_name=first_name, count=len(sellers))
        return sellers

    async def list_all(self) -> list[SellerRecord]:
        return await self._sellers.get_all()

    async def create(self, payload: SellerPayload) -> SellerRecord:
        account_id = _required(payload.account_id, "Seller account id")
        if await self._sellers.find_by_account_id(account_id) is not None:
            raise ValidationFailed(f"A seller with account id {account_id!r} already exists")
        seller = await self._sellers.save(account_id=account_id, profile=payload.profile)
        log.info("seller_created", seller_id=str(seller.id))
        return seller

    async def update(self, payload: SellerPayload) -> None:
        if payload.id is None:
            raise ValidationFailed("Seller id is required")
        account_id = _required(payload.account_id, "Seller account id")
        if await self._sellers.find_by_id(payload.id) is None:
            raise NotFound("This seller doesn't exist", details={"id": str(payload.id)})
        holder = await self._sellers.find_by_account_id(account_id)
        if holder is not None and str(holder.id) != str(payload.id):
            raise ValidationFailed(f"A seller with account id {account_id!r} already exists")
        matched = await self._sellers.update_fields(
            payload.id, {"account_id": account_id, "profile": payload.profile}
        )
        _require_single_match(matched, "seller", payload.id)
        log.info("seller_updated", seller_id=str(payload.id))


# --- Module Notes -----------------------------------------------------------
# Update handlers re-read the record before writing so an unknown id is a 404;
# a zero-match write after that read means the record vanished mid-request.
