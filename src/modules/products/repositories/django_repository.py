"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern: methods return ``None``
instead of raising HTTP-level exceptions; the Service Layer decides
how to translate a missing entity into an API response.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog

from django.core.exceptions import ValidationError
from django.db import transaction

from modules.products.filters import ProductFilter
from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[Product]:
        """Retrieve a product by primary key.

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return Product.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Product]:
        """List the catalog, optionally narrowed by ``ProductFilter`` params.

        Examples of valid filters::

            {"category": "Electronics"}
            {"search": "widget", "max_price": "50"}
        """
        queryset = Product.objects.all()
        if filters:
            queryset = ProductFilter(filters, queryset=queryset).qs
        return list(queryset)

    @transaction.atomic
    def save(self, entity: Product) -> Product:
        """Persist (create or update) a product."""
        entity.save()
        logger.info(
            "product.saved",
            product_id=str(entity.id),
            price=str(entity.price),
        )
        return entity

    @transaction.atomic
    def delete(self, id: str) -> bool:
        """Permanently delete a product by ID.

        Returns ``True`` if the product was found and removed,
        ``False`` if no product exists with the given ID.
        """
        product = self.get_by_id(id)
        if not product:
            return False
        product.delete()
        logger.info("product.deleted", product_id=str(id))
        return True

    def get_by_name(self, name: str) -> Optional[Product]:
        return Product.objects.filter(name=name.strip()).first()

    def list_by_category(self, category: str) -> List[Product]:
        return list(Product.objects.filter(category=category))

    def search(self, query: str) -> List[Product]:
        return self.list({"search": query})
