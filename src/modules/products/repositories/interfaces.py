"""Product repository interface (the Catalog Store contract).

Extends ``IRepository[Product]`` with the look-ups the catalog offers:
name uniqueness, category listing and free-text search.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate.

    ``list()`` without filters returns the full catalog in catalog order.
    """

    @abstractmethod
    def get_by_name(self, name: str) -> Optional[Product]:
        """Retrieve a product by its exact name."""

    @abstractmethod
    def list_by_category(self, category: str) -> List[Product]:
        """Return every product in ``category``, in catalog order."""

    @abstractmethod
    def search(self, query: str) -> List[Product]:
        """Case-insensitive substring search over name, description and category."""
