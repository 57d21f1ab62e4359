"""Special price repository interface.

Extends ``IRepository[SpecialPrice]`` with the per-user and per-pair
look-ups the pricing engine and the catalog projector need.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List, Optional
from uuid import UUID

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.pricing.models import SpecialPrice


class ISpecialPriceRepository(IRepository["SpecialPrice"]):
    """Repository contract for special prices.

    ``save()`` on a new entity must surface the database's
    ``IntegrityError`` untouched when the (user, product) pair is taken;
    the service turns it into a domain error.
    """

    @abstractmethod
    def update(self, id: UUID, changes: Dict[str, Any]) -> Optional[SpecialPrice]:
        """Merge ``changes`` into the row identified by ``id``.

        Returns the updated entity, or ``None`` if it does not exist.
        """

    @abstractmethod
    def get_by_user_and_product(
        self, user_id: UUID, product_id: UUID
    ) -> Optional[SpecialPrice]:
        """Return the special price for the pair, active or not."""

    @abstractmethod
    def list_by_user(self, user_id: UUID) -> List[SpecialPrice]:
        """Return every special price granted to ``user_id``."""

    @abstractmethod
    def list_active_by_user(self, user_id: UUID) -> List[SpecialPrice]:
        """Return only the active special prices of ``user_id``."""
