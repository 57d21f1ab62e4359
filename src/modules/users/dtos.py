"""User DTOs for the Service Layer.

- ``CreateUserDTO``: input for user creation.
- ``UpdateUserDTO``: input for partial updates.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, EmailStr, field_validator


class UserRoleEnum(StrEnum):
    ADMIN = "admin"
    CUSTOMER = "customer"
    SELLER = "seller"


class CreateUserDTO(BaseModel):
    """Immutable DTO for user creation requests."""

    model_config = ConfigDict(frozen=True)

    name: str
    email: EmailStr
    role: UserRoleEnum = UserRoleEnum.CUSTOMER

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Name must not be empty.")
        return v.strip()

    @field_validator("email")
    @classmethod
    def normalise_email(cls, v: str) -> str:
        return v.lower()


class UpdateUserDTO(BaseModel):
    """Immutable DTO for user update requests.

    All fields are optional; only supplied fields will be updated.
    """

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    email: EmailStr | None = None
    role: UserRoleEnum | None = None

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            raise ValueError("Name must not be empty.")
        return v.strip() if v is not None else v

    @field_validator("email")
    @classmethod
    def normalise_email(cls, v: str | None) -> str | None:
        return v.lower() if v is not None else v

