"""Special pricing domain exceptions.

Raised by the pricing service; the API layer (Views) maps each kind to an
HTTP status.  Every failure of a pricing operation surfaces as exactly one
of these.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterable, Iterator

import structlog
from django.db import DatabaseError

logger = structlog.get_logger(__name__)

DUPLICATE_MESSAGE = (
    "A special price already exists for this user and product. "
    "Please update the existing one instead."
)


class PricingError(Exception):
    """Base class for every special pricing failure."""


class SpecialPriceValidationError(PricingError):
    """One or more input fields are invalid.

    ``errors`` holds every violation found, not just the first one.
    """

    def __init__(self, errors: Iterable[str]) -> None:
        self.errors = list(errors)
        super().__init__("Validation errors: " + ", ".join(self.errors))


class ProductNotFound(PricingError):
    """The product referenced by a special price does not exist."""


class SpecialPriceNotFound(PricingError):
    """The requested special price does not exist."""


class DuplicateSpecialPrice(PricingError):
    """A special price already exists for this (user, product) pair.

    Raised by the pre-check and when the database rejects a concurrent
    insert through the unique constraint.
    """

    def __init__(self, message: str = DUPLICATE_MESSAGE) -> None:
        super().__init__(message)


class PriceNotBelowOriginal(PricingError):
    """The special price is not strictly below the product's current price."""


class PricingStorageError(PricingError):
    """The underlying store failed (connection loss, timeout, ...)."""


@contextmanager
def storage_errors(operation: str) -> Iterator[None]:
    """Re-raise database failures as ``PricingStorageError``.

    ``IntegrityError`` is a ``DatabaseError`` too, so callers that give it
    a different meaning must catch it inside the block.
    """
    try:
        yield
    except DatabaseError as exc:
        logger.error(
            "special_price.storage_error",
            operation=operation,
            error=str(exc),
            exc_type=type(exc).__name__,
        )
        raise PricingStorageError(f"Storage failure during {operation}.") from exc
