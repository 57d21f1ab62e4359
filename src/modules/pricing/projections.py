"""Catalog-pricing projection.

Joins the full catalog with one user's active special prices to produce
the prices that user actually pays.  The result is rebuilt on every call
and never stored, so it always reflects the current catalog and the
current special prices.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List
from uuid import UUID

import structlog

from modules.pricing.dtos import ProductPricingDTO
from modules.pricing.exceptions import storage_errors

if TYPE_CHECKING:
    from modules.pricing.repositories.interfaces import ISpecialPriceRepository
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class CatalogPricingProjector:
    """Builds a user's effective-price view of the catalog."""

    def __init__(
        self,
        product_repository: IProductRepository,
        special_price_repository: ISpecialPriceRepository,
    ) -> None:
        self._product_repo = product_repository
        self._special_price_repo = special_price_repository

    def get_catalog_with_pricing_for_user(self, user_id: UUID) -> List[ProductPricingDTO]:
        """Return one entry per catalog product, in catalog order.

        A product is overridden only when the user holds an *active* special
        price for it; inactive ones are ignored.  A user without special
        prices simply sees the catalog prices.

        Raises:
            PricingStorageError: if either store read fails.
        """
        with storage_errors("project_catalog"):
            products = self._product_repo.list()
            overrides = {
                sp.product_id: sp
                for sp in self._special_price_repo.list_active_by_user(user_id)
            }

        view = [
            ProductPricingDTO.build(product, overrides.get(product.id))
            for product in products
        ]
        logger.info(
            "catalog_pricing.projected",
            user_id=str(user_id),
            product_count=len(view),
            overridden_count=sum(1 for entry in view if entry.is_overridden),
        )
        return view
