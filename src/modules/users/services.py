"""User service layer (Use Cases).

Business rules enforced here:
- Email must be unique among active users.
- Delete is a soft delete; the user disappears from every look-up.
- Special prices already granted to a user keep their copied name/email.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

import structlog
from django.db import transaction

from modules.users.exceptions import UserAlreadyExists, UserNotFound
from modules.users.models import User

if TYPE_CHECKING:
    from modules.users.dtos import CreateUserDTO, UpdateUserDTO
    from modules.users.repositories.interfaces import IUserRepository

logger = structlog.get_logger(__name__)


class UserService:
    """Application service for User use-cases."""

    def __init__(self, repository: IUserRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_user(self, dto: CreateUserDTO) -> User:
        """Create a user.

        Raises:
            UserAlreadyExists: if the email belongs to another active user.
        """
        log = logger.bind(email_domain=dto.email.split("@")[-1])

        if self._repo.get_by_email(dto.email):
            log.warning("user.duplicate_email")
            raise UserAlreadyExists("A user with this email already exists.")

        user = User(name=dto.name, email=dto.email, role=dto.role)
        user = self._repo.save(user)
        log.info("user.created", user_id=str(user.id))
        return user

    @transaction.atomic
    def update_user(self, id: str, dto: UpdateUserDTO) -> User:
        """Update an active user with the supplied fields.

        Raises:
            UserNotFound: if the user does not exist or was deleted.
            UserAlreadyExists: if the new email collides with another user.
        """
        user = self._repo.get_by_id(id)
        if not user:
            raise UserNotFound(f"User {id} not found.")

        log = logger.bind(user_id=str(id))

        if dto.email is not None and dto.email != user.email:
            existing = self._repo.get_by_email(dto.email)
            if existing and existing.id != user.id:
                log.warning("user.duplicate_email")
                raise UserAlreadyExists("A user with this email already exists.")

        for field in ("name", "email", "role"):
            value = getattr(dto, field)
            if value is not None:
                setattr(user, field, value)

        user = self._repo.save(user)
        log.info("user.updated")
        return user

    @transaction.atomic
    def delete_user(self, id: str) -> None:
        """Soft-delete a user.

        Raises:
            UserNotFound: if the user does not exist or was already deleted.
        """
        if not self._repo.delete(id):
            raise UserNotFound(f"User {id} not found.")
        logger.info("user.soft_deleted", user_id=str(id))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_user(self, id: str) -> User:
        user = self._repo.get_by_id(id)
        if not user:
            raise UserNotFound(f"User {id} not found.")
        return user

    def list_users(self, filters: Optional[Dict[str, Any]] = None) -> List[User]:
        return self._repo.list(filters)

    def list_by_role(self, role: str) -> List[User]:
        return self._repo.list_by_role(role)

    def search_users(self, query: Optional[str]) -> List[User]:
        """Name/email substring search; a blank query returns every user."""
        if not query or not query.strip():
            return self._repo.list()
        return self._repo.search(query.strip())
