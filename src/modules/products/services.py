"""Product service layer (Use Cases).

Orchestrates business logic for the Product aggregate, delegating
persistence to the injected ``IProductRepository``.

Business rules enforced here:
- Product name must be unique in the catalog.
- Price must be greater than zero and stock non-negative (validated by DTO).
- Delete is physical; existing special prices keep their snapshot fields.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

import structlog
from django.db import transaction

from modules.products.exceptions import ProductAlreadyExists, ProductNotFound
from modules.products.models import Product

if TYPE_CHECKING:
    from modules.products.dtos import CreateProductDTO, UpdateProductDTO
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)

_UPDATABLE_FIELDS = (
    "name",
    "description",
    "price",
    "category",
    "stock",
    "brand",
    "sku",
    "tags",
)


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: IProductRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_product(self, dto: CreateProductDTO) -> Product:
        """Create a new product after enforcing name uniqueness.

        Raises:
            ProductAlreadyExists: if the name is already taken.
        """
        log = logger.bind(product_name=dto.name)

        if self._repo.get_by_name(dto.name):
            log.warning("product.duplicate_name")
            raise ProductAlreadyExists(
                f"A product named '{dto.name}' already exists."
            )

        product = Product(
            name=dto.name,
            description=dto.description,
            price=dto.price,
            category=dto.category,
            stock=dto.stock,
            brand=dto.brand,
            sku=dto.sku,
            tags=list(dto.tags),
        )
        product = self._repo.save(product)
        log.info("product.created", product_id=str(product.id))
        return product

    @transaction.atomic
    def update_product(self, id: str, dto: UpdateProductDTO) -> Product:
        """Update an existing product with the supplied fields.

        A price change is picked up by the next special-price validation;
        existing special prices are not re-checked here.

        Raises:
            ProductNotFound: if the product does not exist.
            ProductAlreadyExists: if the new name collides with another product.
        """
        product = self._repo.get_by_id(id)
        if not product:
            raise ProductNotFound(f"Product {id} not found.")

        log = logger.bind(product_id=str(id))

        if dto.name is not None and dto.name != product.name:
            existing = self._repo.get_by_name(dto.name)
            if existing and existing.id != product.id:
                log.warning("product.duplicate_name")
                raise ProductAlreadyExists(
                    f"A product named '{dto.name}' already exists."
                )

        for field in _UPDATABLE_FIELDS:
            value = getattr(dto, field)
            if value is not None:
                setattr(product, field, value)

        product = self._repo.save(product)
        log.info("product.updated")
        return product

    @transaction.atomic
    def delete_product(self, id: str) -> None:
        """Permanently delete a product.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        product = self._repo.get_by_id(id)
        if not product:
            raise ProductNotFound(f"Product {id} not found.")
        self._repo.delete(id)
        logger.info("product.deleted", product_id=str(id))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_products(self, filters: Optional[Dict[str, Any]] = None) -> List[Product]:
        """Return the catalog, optionally filtered."""
        return self._repo.list(filters)

    def get_product(self, id: str) -> Product:
        """Retrieve a single product by ID.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        product = self._repo.get_by_id(id)
        if not product:
            raise ProductNotFound(f"Product {id} not found.")
        logger.info("product.retrieved", product_id=str(id))
        return product

    def list_by_category(self, category: str) -> List[Product]:
        return self._repo.list_by_category(category)

    def search_products(self, query: Optional[str]) -> List[Product]:
        """Free-text search; a blank query returns the whole catalog."""
        if not query or not query.strip():
            return self._repo.list()
        return self._repo.search(query.strip())
