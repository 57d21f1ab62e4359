"""SpecialPrice model: one user's reduced price for one product.

Business rules implemented:
- At most one special price per (user, product): ``UNIQUE(user_id,
  product_id)`` is the storage-level guard behind the service pre-check.
- Special price must be greater than zero and discount within 0..100
  (field validators + DB check constraints).
- ``user_name``, ``email`` and ``product_name`` are copies taken at creation
  time.  They are plain columns, not foreign keys, and are never refreshed
  when the user or the product changes.
- Delete is physical (no soft delete, unlike users).

The "special price < product price" rule depends on the live catalog and is
enforced by ``SpecialPriceService``, not here.
"""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from modules.core.models import BaseModel


class SpecialPrice(BaseModel):
    """Override of the catalog price for a single (user, product) pair."""

    user_id = models.UUIDField(db_index=True)
    user_name = models.CharField(max_length=255)
    email = models.EmailField(max_length=254)
    product_id = models.UUIDField(db_index=True)
    product_name = models.CharField(max_length=255)
    special_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    discount = models.PositiveSmallIntegerField(
        validators=[MaxValueValidator(100)],
    )
    is_active = models.BooleanField(default=True)
    notes = models.TextField(blank=True, default="")

    class Meta:
        db_table = "special_prices"
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(
                fields=["user_id", "is_active"],
                name="special_prices_user_active_idx",
            ),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["user_id", "product_id"],
                name="special_prices_user_product_unique",
            ),
            models.CheckConstraint(
                condition=models.Q(special_price__gt=0),
                name="special_prices_price_positive",
            ),
            models.CheckConstraint(
                condition=models.Q(discount__gte=0, discount__lte=100),
                name="special_prices_discount_range",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.product_name} @ {self.special_price} for {self.user_name}"
