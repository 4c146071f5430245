"""
mandihub.services.synchronizer

Denormalization synchronizer.

Responsibilities:
- Propagate a category rename into the `{id, name}` copies embedded in products.
- Resolve a product's category ids into fresh copies, rejecting the whole write
  when any id is unknown.
- Maintain each category's reverse collection of product ids after a product write.

Nothing here locks or retries. A rename racing a product write can leave the old
name embedded until the next rename or product update touches it.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from mandihub.errors import ReferentialError, ValidationFailed, WriteConflict
from mandihub.observability.logging import get_logger
from mandihub.schemas import EmbeddedCategory, EntityId
from mandihub.stores import CategoryStore, ProductStore

log = get_logger(__name__)


class DenormalizationSynchronizer:
    def __init__(self, *, categories: CategoryStore, products: ProductStore) -> None:
        self._categories = categories
        self._products = products

    async def on_category_renamed(self, category_id: EntityId, new_name: str) -> int:
        """
        Rename the authoritative category, then rewrite every embedded copy.

        Returns the number of products whose copy changed. That count is
        informational: the rewrite pass is best-effort once the rename itself
        has matched exactly one category.
        """
        if new_name is None or not new_name.strip():
            raise ValidationFailed("Category name must not be blank")
        new_name = new_name.strip()

        matched = await self._categories.update_fields(category_id, {"name": new_name})
        if matched != 1:
            raise WriteConflict(
                "Category rename did not match exactly one record",
                details={"category_id": str(category_id), "matched": matched},
            )

        try:
            rewritten = await self._products.rename_embedded_category(category_id, new_name)
        except Exception:
            log.exception("embedded_category_rewrite_failed", category_id=str(category_id))
            return 0
        log.info(
            "category_renamed",
            category_id=str(category_id),
            name=new_name,
            products_rewritten=rewritten,
        )
        return rewritten

    async def resolve_categories(
        self, category_ids: Iterable[EntityId]
    ) -> list[EmbeddedCategory]:
        # Reject-all: every id is checked before the caller writes anything.
        unique_ids = list(dict.fromkeys(category_ids))
        if not unique_ids:
            raise ValidationFailed("The product must belong to at least one category")

        resolved: list[EmbeddedCategory] = []
        for category_id in unique_ids:
            category = await self._categories.find_by_id(category_id)
            if category is None:
                raise ReferentialError(
                    "One of the categories the product falls into doesn't exist",
                    details={"category_id": str(category_id)},
                )
            resolved.append(EmbeddedCategory(id=category.id, name=category.name))
        return resolved

    async def link_product(
        self,
        product_id: EntityId,
        categories: Sequence[EmbeddedCategory],
        *,
        previous: Sequence[EmbeddedCategory] = (),
    ) -> int:
        """
        Add the product to the reverse collection of each category it lists and
        pull it from categories it no longer lists.

        The product write is already committed when this runs, so failures are
        logged and left for the next product update to repair.
        """
        current_ids = [c.id for c in categories]
        dropped_ids = [c.id for c in previous if c.id not in current_ids]
        try:
            linked = await self._categories.add_product_reference(current_ids, product_id)
            unlinked = 0
            if dropped_ids:
                unlinked = await self._categories.remove_product_reference(dropped_ids, product_id)
        except Exception:
            log.exception(
                "reverse_reference_update_failed",
                product_id=str(product_id),
                category_ids=[str(c) for c in current_ids],
            )
            return 0
        log.info(
            "product_linked",
            product_id=str(product_id),
            categories_updated=linked,
            categories_unlinked=unlinked,
        )
        return linked
