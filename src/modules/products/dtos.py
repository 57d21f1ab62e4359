"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF Serializers)
and the Service layer.  DTOs are immutable (``frozen=True``).

- ``CreateProductDTO``: input for product creation.
- ``UpdateProductDTO``: input for partial product updates.
- ``ProductOutputDTO``: output with all product fields.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, List
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

if TYPE_CHECKING:
    from modules.products.models import Product


def _not_blank(v: str | None) -> str | None:
    if v is not None and not v.strip():
        raise ValueError("must not be empty.")
    return v.strip() if v is not None else v


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateProductDTO(BaseModel):
    """Immutable DTO for product creation requests.

    Validates:
    - ``name``, ``description`` and ``category`` are non-blank.
    - ``price`` is a Decimal greater than zero.
    - ``stock`` is non-negative.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    price: Decimal
    category: str
    stock: int = 0
    brand: str = ""
    sku: str = ""
    tags: List[str] = Field(default_factory=list)

    @field_validator("name", "description", "category")
    @classmethod
    def text_must_not_be_blank(cls, v: str | None) -> str | None:
        return _not_blank(v)

    @field_validator("price")
    @classmethod
    def price_must_be_positive(cls, v: Decimal) -> Decimal:
        if v <= 0:
            raise ValueError("Price must be greater than zero.")
        return v

    @field_validator("stock")
    @classmethod
    def stock_must_be_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Stock cannot be negative.")
        return v


class UpdateProductDTO(BaseModel):
    """Immutable DTO for product update requests.

    All fields are optional; only supplied fields will be updated.
    """

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    description: str | None = None
    price: Decimal | None = None
    category: str | None = None
    stock: int | None = None
    brand: str | None = None
    sku: str | None = None
    tags: List[str] | None = None

    @field_validator("name", "description", "category")
    @classmethod
    def text_must_not_be_blank(cls, v: str | None) -> str | None:
        return _not_blank(v)

    @field_validator("price")
    @classmethod
    def price_must_be_positive(cls, v: Decimal | None) -> Decimal | None:
        if v is not None and v <= 0:
            raise ValueError("Price must be greater than zero.")
        return v

    @field_validator("stock")
    @classmethod
    def stock_must_be_non_negative(cls, v: int | None) -> int | None:
        if v is not None and v < 0:
            raise ValueError("Stock cannot be negative.")
        return v


# ---------------------------------------------------------------------------
# Output DTO
# ---------------------------------------------------------------------------


class ProductOutputDTO(BaseModel):
    """Immutable DTO for product API responses."""

    model_config = ConfigDict(frozen=True)

    id: UUID
    name: str
    description: str
    price: Decimal
    category: str
    stock: int
    brand: str
    sku: str
    tags: List[str]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, product: Product) -> ProductOutputDTO:
        """Build an output DTO from a Product model instance."""
        return cls(
            id=product.id,
            name=product.name,
            description=product.description,
            price=product.price,
            category=product.category,
            stock=product.stock,
            brand=product.brand,
            sku=product.sku,
            tags=list(product.tags or []),
            created_at=product.created_at,
            updated_at=product.updated_at,
        )
