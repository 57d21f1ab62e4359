"""User model: the people special prices are granted to.

Business rules implemented:
- Email is unique among users that have not been deleted.
- Soft delete via ``deleted_at`` (inherited from SoftDeleteModel); deleted
  users never appear in look-ups.

The pricing engine only reads users: the name and email stored on a special
price are copies taken when the price was created, not references.
"""

from __future__ import annotations

import structlog

from django.db import models

from modules.core.models import SoftDeleteModel

logger = structlog.get_logger(__name__)


class UserRole(models.TextChoices):
    ADMIN = "admin", "Admin"
    CUSTOMER = "customer", "Customer"
    SELLER = "seller", "Seller"


class User(SoftDeleteModel):
    """Catalog user aggregate root.

    There is no authentication: ``User`` is a business record, unrelated to
    ``django.contrib.auth``.  ``email`` is stored lower-cased.
    """

    name = models.CharField(max_length=255)
    email = models.EmailField(max_length=254)
    role = models.CharField(
        max_length=20,
        choices=UserRole.choices,
        default=UserRole.CUSTOMER,
    )

    class Meta:
        db_table = "users"
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["email"],
                condition=models.Q(deleted_at__isnull=True),
                name="users_email_unique_alive",
            ),
        ]

    def save(self, *args, **kwargs) -> None:
        is_new = self._state.adding
        if self.email:
            self.email = self.email.strip().lower()
        super().save(*args, **kwargs)
        if is_new:
            logger.info("user_created", user_id=str(self.id), role=self.role)

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"
