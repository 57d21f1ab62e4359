"""Special price repositories package."""

from modules.pricing.repositories.django_repository import SpecialPriceDjangoRepository
from modules.pricing.repositories.interfaces import ISpecialPriceRepository

__all__ = ["ISpecialPriceRepository", "SpecialPriceDjangoRepository"]
