"""Special pricing service layer (Use Cases).

Orchestrates the lifecycle of special prices, delegating persistence to
the injected ``ISpecialPriceRepository`` and reading live catalog prices
through an ``IProductRepository``.

Business rules enforced here:
- Every invalid field is reported at once (``SpecialPriceValidationError``).
- The referenced product must exist.
- At most one special price per (user, product); a concurrent insert
  that slips past the pre-check is caught by the unique constraint and
  reported the same way.
- The special price must be strictly below the product's *current* price,
  on creation and on every update that changes the price.
- The stored discount is the caller's value; it is never recomputed.

Checks run in that order and the first failing one wins.  Any other
database failure surfaces as ``PricingStorageError``; nothing is retried.
"""

from __future__ import annotations

from typing import (
    TYPE_CHECKING,
    Any,
    Dict,
    List,
    Mapping,
    Optional,
    Type,
    TypeVar,
    Union,
)
from uuid import UUID

import structlog
from django.db import IntegrityError, transaction
from pydantic import BaseModel as PydanticModel
from pydantic import ValidationError as PydanticValidationError

from modules.core.validation import validation_messages
from modules.pricing.dtos import (
    CreateSpecialPriceDTO,
    SpecialPriceOutputDTO,
    UpdateSpecialPriceDTO,
    UserPricingSummaryDTO,
)
from modules.pricing.exceptions import (
    DuplicateSpecialPrice,
    PriceNotBelowOriginal,
    ProductNotFound,
    SpecialPriceNotFound,
    SpecialPriceValidationError,
    storage_errors,
)
from modules.pricing.models import SpecialPrice

if TYPE_CHECKING:
    from modules.pricing.repositories.interfaces import ISpecialPriceRepository
    from modules.products.models import Product
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)

DTO = TypeVar("DTO", bound=PydanticModel)


def _validated(dto_cls: Type[DTO], data: Union[DTO, Mapping[str, Any]]) -> DTO:
    """Return ``data`` as a ``dto_cls`` instance, collecting every violation."""
    if isinstance(data, dto_cls):
        return data
    try:
        return dto_cls.model_validate(data)
    except PydanticValidationError as exc:
        raise SpecialPriceValidationError(validation_messages(exc)) from exc


class SpecialPriceService:
    """Application service for special price use-cases.

    Receives its repositories via constructor injection (DIP).
    """

    def __init__(
        self,
        repository: ISpecialPriceRepository,
        product_repository: IProductRepository,
    ) -> None:
        self._repo = repository
        self._product_repo = product_repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_special_price(
        self, data: Union[CreateSpecialPriceDTO, Mapping[str, Any]]
    ) -> SpecialPrice:
        """Create a special price for one (user, product) pair.

        Raises:
            SpecialPriceValidationError: if any field is invalid.
            ProductNotFound: if the product does not exist.
            DuplicateSpecialPrice: if the pair already has a special price.
            PriceNotBelowOriginal: if the price is not below the product price.
            PricingStorageError: on any other database failure.
        """
        dto = _validated(CreateSpecialPriceDTO, data)
        log = logger.bind(user_id=str(dto.user_id), product_id=str(dto.product_id))

        with storage_errors("create"), transaction.atomic():
            product = self._require_product(dto.product_id)

            if self._repo.get_by_user_and_product(dto.user_id, dto.product_id):
                log.warning("special_price.duplicate")
                raise DuplicateSpecialPrice()

            self._ensure_below_original(dto.special_price, product)

            special_price = SpecialPrice(
                user_id=dto.user_id,
                user_name=dto.user_name,
                email=dto.email,
                product_id=dto.product_id,
                product_name=dto.product_name,
                special_price=dto.special_price,
                discount=dto.discount,
                is_active=True,
                notes=dto.notes,
            )
            try:
                special_price = self._repo.save(special_price)
            except IntegrityError as exc:
                log.warning("special_price.duplicate", source="unique_constraint")
                raise DuplicateSpecialPrice() from exc

        log.info(
            "special_price.created",
            special_price_id=str(special_price.id),
            discount=special_price.discount,
            email_domain=dto.email.split("@")[-1],
        )
        return special_price

    def update_special_price(
        self, id: UUID, data: Union[UpdateSpecialPriceDTO, Mapping[str, Any]]
    ) -> SpecialPrice:
        """Apply a partial update to an existing special price.

        A new ``special_price`` is checked against the product's price as it
        is now, not as it was when the special price was created.  When the
        product has since been deleted there is no price to compare with and
        the check is skipped.  Nothing is written unless every check passes.

        Raises:
            SpecialPriceNotFound: if the special price does not exist.
            SpecialPriceValidationError: if any supplied field is invalid.
            PriceNotBelowOriginal: if the new price is not below the product price.
            PricingStorageError: on any other database failure.
        """
        log = logger.bind(special_price_id=str(id))

        with storage_errors("update"), transaction.atomic():
            existing = self._repo.get_by_id(id)
            if not existing:
                raise SpecialPriceNotFound(f"Special price {id} not found.")

            dto = _validated(UpdateSpecialPriceDTO, data)
            changes = dto.changes()

            if "special_price" in changes:
                product = self._product_repo.get_by_id(existing.product_id)
                if product:
                    self._ensure_below_original(changes["special_price"], product)
                else:
                    log.info(
                        "special_price.product_gone",
                        product_id=str(existing.product_id),
                    )

            special_price = self._repo.update(existing.id, changes)
            if special_price is None:
                raise SpecialPriceNotFound(f"Special price {id} not found.")

        log.info("special_price.updated", fields=sorted(changes))
        return special_price

    def delete_special_price(self, id: UUID) -> None:
        """Permanently delete a special price.

        Raises:
            SpecialPriceNotFound: if the special price does not exist.
        """
        with storage_errors("delete"), transaction.atomic():
            if not self._repo.delete(id):
                raise SpecialPriceNotFound(f"Special price {id} not found.")
        logger.info("special_price.deleted", special_price_id=str(id))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_special_price(self, id: UUID) -> SpecialPrice:
        """Retrieve a single special price by ID.

        Raises:
            SpecialPriceNotFound: if the special price does not exist.
        """
        with storage_errors("get"):
            special_price = self._repo.get_by_id(id)
        if not special_price:
            raise SpecialPriceNotFound(f"Special price {id} not found.")
        return special_price

    def list_special_prices(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> List[SpecialPrice]:
        with storage_errors("list"):
            return self._repo.list(filters)

    def get_special_price_for_user_and_product(
        self, user_id: UUID, product_id: UUID
    ) -> Optional[SpecialPrice]:
        """Return the pair's special price, or ``None`` when there is none."""
        with storage_errors("get_for_user_and_product"):
            return self._repo.get_by_user_and_product(user_id, product_id)

    def get_special_prices_for_user(self, user_id: UUID) -> List[SpecialPrice]:
        """Return every special price of a user, active or not."""
        with storage_errors("list_for_user"):
            return self._repo.list_by_user(user_id)

    def get_active_special_prices_for_user(self, user_id: UUID) -> List[SpecialPrice]:
        with storage_errors("list_active_for_user"):
            return self._repo.list_active_by_user(user_id)

    def get_user_pricing_summary(self, user_id: UUID) -> UserPricingSummaryDTO:
        """Summarise a user's active special prices."""
        active = self.get_active_special_prices_for_user(user_id)
        return UserPricingSummaryDTO(
            user_id=user_id,
            has_special_pricing=bool(active),
            special_prices=[SpecialPriceOutputDTO.from_entity(sp) for sp in active],
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _require_product(self, product_id: UUID) -> Product:
        product = self._product_repo.get_by_id(product_id)
        if not product:
            logger.warning("special_price.product_not_found", product_id=str(product_id))
            raise ProductNotFound(f"Product {product_id} not found.")
        return product

    @staticmethod
    def _ensure_below_original(special_price, product: Product) -> None:
        if special_price >= product.price:
            logger.warning(
                "special_price.not_below_original",
                product_id=str(product.id),
                special_price=str(special_price),
                original_price=str(product.price),
            )
            raise PriceNotBelowOriginal(
                f"Special price ({special_price}) must be lower than the "
                f"product price ({product.price})."
            )
