"""Product model: the catalog every special price is measured against.

Business rules implemented:
- Product name is unique in the catalog.
- Price must be greater than zero (field validator + DB check constraint).
- Stock cannot be negative.
- Products are removed physically; there is no soft delete in the catalog.

``price`` is the reference value: a special price is only valid while it
stays strictly below the product's *current* price.
"""

from __future__ import annotations

from decimal import Decimal

import structlog

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel

logger = structlog.get_logger(__name__)


class Product(BaseModel):
    """Product aggregate root.

    Default ordering (``created_at``, then the time-ordered UUIDv7 ``id``)
    is the catalog order exposed to clients and preserved by the
    effective-price view.
    """

    name = models.CharField(max_length=255, unique=True)
    description = models.TextField()
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    category = models.CharField(max_length=100, db_index=True)
    stock = models.PositiveIntegerField(default=0)
    brand = models.CharField(max_length=100, blank=True, default="")
    sku = models.CharField(max_length=64, blank=True, default="")
    tags = models.JSONField(default=list, blank=True)

    class Meta:
        db_table = "products"
        ordering = ["created_at", "id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gt=0),
                name="products_price_positive",
            ),
        ]

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def clean(self) -> None:
        super().clean()
        if self.price is not None and self.price <= 0:
            raise ValidationError({"price": "Price must be greater than zero."})
        if self.stock is not None and self.stock < 0:
            raise ValidationError({"stock": "Stock cannot be negative."})
        if not isinstance(self.tags, list):
            raise ValidationError({"tags": "Tags must be a list of strings."})

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self, *args, **kwargs) -> None:
        is_new = self._state.adding
        if self.sku:
            self.sku = self.sku.strip().upper()
        super().save(*args, **kwargs)
        if is_new:
            logger.info(
                "product_created",
                product_id=str(self.id),
                name=self.name,
                category=self.category,
            )

    def __str__(self) -> str:
        return f"{self.name} ({self.category})"
