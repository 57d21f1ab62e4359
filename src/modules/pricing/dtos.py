"""Special pricing DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.  DTOs are
immutable (``frozen=True``).  Validation never stops at the first bad
field: Pydantic reports every violation, and the service turns them into
a single ``SpecialPriceValidationError``.

- ``CreateSpecialPriceDTO``: input for creation (user/product snapshot).
- ``UpdateSpecialPriceDTO``: partial update of price, discount, status, notes.
- ``SpecialPriceOutputDTO``: a stored special price.
- ``UserPricingSummaryDTO``: a user's active special prices.
- ``ProductPricingDTO``: one catalog product with its effective price.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from modules.products.dtos import ProductOutputDTO

if TYPE_CHECKING:
    from modules.pricing.models import SpecialPrice
    from modules.products.models import Product

def _check_special_price(v: Decimal | None) -> Decimal | None:
    if v is not None and v <= 0:
        raise ValueError("Special price must be a positive number.")
    return v


def _check_discount(v: int | None) -> int | None:
    if v is not None and not 0 <= v <= 100:
        raise ValueError("Discount must be a number between 0 and 100.")
    return v


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateSpecialPriceDTO(BaseModel):
    """Immutable DTO for special price creation requests.

    ``user_name``, ``email`` and ``product_name`` are the snapshot copied
    onto the record; they are not checked against the users or the catalog.
    """

    model_config = ConfigDict(frozen=True)

    user_id: UUID
    user_name: str
    email: EmailStr
    product_id: UUID
    product_name: str
    special_price: Decimal = Field(max_digits=10, decimal_places=2)
    discount: int
    notes: str = ""

    @field_validator("user_name", "product_name")
    @classmethod
    def name_must_not_be_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty.")
        return v.strip()

    @field_validator("special_price")
    @classmethod
    def special_price_must_be_positive(cls, v: Decimal) -> Decimal:
        return _check_special_price(v)

    @field_validator("discount")
    @classmethod
    def discount_in_range(cls, v: int) -> int:
        return _check_discount(v)


class UpdateSpecialPriceDTO(BaseModel):
    """Immutable DTO for partial updates.

    Only the fields a caller supplied are applied; identity and snapshot
    fields cannot be changed through an update and are ignored if sent.
    """

    model_config = ConfigDict(frozen=True)

    special_price: Optional[Decimal] = Field(
        default=None, max_digits=10, decimal_places=2
    )
    discount: Optional[int] = None
    is_active: Optional[bool] = None
    notes: Optional[str] = None

    @field_validator("special_price")
    @classmethod
    def special_price_must_be_positive(cls, v: Decimal | None) -> Decimal | None:
        return _check_special_price(v)

    @field_validator("discount")
    @classmethod
    def discount_in_range(cls, v: int | None) -> int | None:
        return _check_discount(v)

    def changes(self) -> dict:
        """Return the supplied, non-null fields as a ``{field: value}`` dict."""
        return {
            field: value
            for field, value in self.model_dump(exclude_unset=True).items()
            if value is not None
        }


# ---------------------------------------------------------------------------
# Output DTOs
# ---------------------------------------------------------------------------


class SpecialPriceOutputDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID
    user_id: UUID
    user_name: str
    email: str
    product_id: UUID
    product_name: str
    special_price: Decimal
    discount: int
    is_active: bool
    notes: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, special_price: SpecialPrice) -> SpecialPriceOutputDTO:
        """Build an output DTO from a SpecialPrice model instance."""
        return cls(
            id=special_price.id,
            user_id=special_price.user_id,
            user_name=special_price.user_name,
            email=special_price.email,
            product_id=special_price.product_id,
            product_name=special_price.product_name,
            special_price=special_price.special_price,
            discount=special_price.discount,
            is_active=special_price.is_active,
            notes=special_price.notes,
            created_at=special_price.created_at,
            updated_at=special_price.updated_at,
        )


class UserPricingSummaryDTO(BaseModel):
    """Whether a user has special pricing, with the active entries."""

    model_config = ConfigDict(frozen=True)

    user_id: UUID
    has_special_pricing: bool
    special_prices: List[SpecialPriceOutputDTO]


class ProductPricingDTO(BaseModel):
    """A catalog product as one particular user sees it.

    ``effective_price`` is the special price when ``is_overridden``,
    otherwise the catalog price.
    """

    model_config = ConfigDict(frozen=True)

    product: ProductOutputDTO
    effective_price: Decimal
    special_price: Optional[Decimal] = None
    is_overridden: bool = False

    @classmethod
    def build(
        cls, product: Product, special_price: SpecialPrice | None
    ) -> ProductPricingDTO:
        if special_price is None:
            return cls(
                product=ProductOutputDTO.from_entity(product),
                effective_price=product.price,
            )
        return cls(
            product=ProductOutputDTO.from_entity(product),
            effective_price=special_price.special_price,
            special_price=special_price.special_price,
            is_overridden=True,
        )
