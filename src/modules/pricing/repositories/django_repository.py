"""Django ORM implementation of the SpecialPrice repository.

Missing or malformed IDs yield ``None`` (Null Object pattern).  Database
errors are not caught here: ``IntegrityError`` from the
``special_prices_user_product_unique`` constraint and any other
``DatabaseError`` propagate to ``SpecialPriceService``.

``update()`` locks the row with ``select_for_update()`` so concurrent
partial updates of the same special price are serialised.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional
from uuid import UUID

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction

from modules.pricing.filters import SpecialPriceFilter
from modules.pricing.models import SpecialPrice
from modules.pricing.repositories.interfaces import ISpecialPriceRepository

logger = structlog.get_logger(__name__)


class SpecialPriceDjangoRepository(ISpecialPriceRepository):
    """Concrete SpecialPrice repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # IRepository contract
    # ------------------------------------------------------------------

    def get_by_id(self, id: str) -> Optional[SpecialPrice]:
        """Retrieve a special price by primary key.

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return SpecialPrice.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[SpecialPrice]:
        """List special prices, optionally narrowed by ``SpecialPriceFilter``.

        Examples of valid filters::

            {"user_id": "0190..."}
            {"product_id": "0190...", "is_active": "true"}
        """
        queryset = SpecialPrice.objects.all()
        if filters:
            queryset = SpecialPriceFilter(filters, queryset=queryset).qs
        return list(queryset)

    @transaction.atomic
    def save(self, entity: SpecialPrice) -> SpecialPrice:
        """Persist (create or update) a special price."""
        is_new = entity._state.adding
        entity.save()
        logger.info(
            "special_price.saved",
            special_price_id=str(entity.id),
            user_id=str(entity.user_id),
            product_id=str(entity.product_id),
            is_new=is_new,
        )
        return entity

    @transaction.atomic
    def delete(self, id: str) -> bool:
        """Permanently delete a special price.

        Returns ``False`` if no special price exists with the given ID.
        """
        special_price = self.get_by_id(id)
        if not special_price:
            return False
        special_price.delete()
        logger.info("special_price.deleted", special_price_id=str(id))
        return True

    # ------------------------------------------------------------------
    # Pricing-specific
    # ------------------------------------------------------------------

    @transaction.atomic
    def update(self, id: UUID, changes: Dict[str, Any]) -> Optional[SpecialPrice]:
        """Apply ``changes`` under a row lock and save only those columns.

        Returns ``None`` when the row no longer exists.
        """
        special_price = SpecialPrice.objects.select_for_update().filter(id=id).first()
        if not special_price:
            return None

        for field, value in changes.items():
            setattr(special_price, field, value)

        special_price.save(update_fields=list(changes))
        logger.info(
            "special_price.updated",
            special_price_id=str(id),
            fields=sorted(changes),
        )
        return special_price

    def get_by_user_and_product(
        self, user_id: UUID, product_id: UUID
    ) -> Optional[SpecialPrice]:
        try:
            return SpecialPrice.objects.filter(
                user_id=user_id, product_id=product_id
            ).first()
        except (ValueError, ValidationError):
            return None

    def list_by_user(self, user_id: UUID) -> List[SpecialPrice]:
        try:
            return list(SpecialPrice.objects.filter(user_id=user_id))
        except (ValueError, ValidationError):
            return []

    def list_active_by_user(self, user_id: UUID) -> List[SpecialPrice]:
        try:
            return list(SpecialPrice.objects.filter(user_id=user_id, is_active=True))
        except (ValueError, ValidationError):
            return []
