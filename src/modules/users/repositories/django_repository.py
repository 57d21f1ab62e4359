"""Django ORM implementation of the User repository.

Reads go through ``User.objects.alive()`` so soft-deleted users are
invisible to every caller.  Missing or malformed IDs yield ``None``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction

from modules.users.filters import UserFilter
from modules.users.models import User
from modules.users.repositories.interfaces import IUserRepository

logger = structlog.get_logger(__name__)


class UserDjangoRepository(IUserRepository):
    """Concrete User repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[User]:
        try:
            return User.objects.alive().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[User]:
        """List active users, optionally narrowed by ``UserFilter`` params."""
        queryset = User.objects.alive()
        if filters:
            queryset = UserFilter(filters, queryset=queryset).qs
        return list(queryset)

    @transaction.atomic
    def save(self, entity: User) -> User:
        is_new = entity._state.adding
        entity.save()
        logger.info("user.saved", user_id=str(entity.id), is_new=is_new)
        return entity

    @transaction.atomic
    def delete(self, id: str) -> bool:
        """Soft-delete a user by ID.

        Returns ``False`` when no active user has that ID.
        """
        user = self.get_by_id(id)
        if not user:
            return False
        user.delete()
        logger.info("user.soft_deleted", user_id=str(id))
        return True

    def get_by_email(self, email: str) -> Optional[User]:
        return User.objects.alive().filter(email__iexact=email.strip()).first()

    def list_by_role(self, role: str) -> List[User]:
        return list(User.objects.alive().filter(role=role))

    def search(self, query: str) -> List[User]:
        return self.list({"search": query})
