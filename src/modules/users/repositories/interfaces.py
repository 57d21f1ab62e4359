"""User repository interface.

Every look-up excludes soft-deleted users.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.users.models import User


class IUserRepository(IRepository["User"]):
    """Repository contract for the User aggregate."""

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[User]:
        """Retrieve an active user by email address (case-insensitive)."""

    @abstractmethod
    def list_by_role(self, role: str) -> List[User]:
        """Return active users holding ``role``."""

    @abstractmethod
    def search(self, query: str) -> List[User]:
        """Substring search over name and email."""
