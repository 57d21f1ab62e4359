"""Unit tests for SpecialPriceService.

Repositories are ``MagicMock`` instances; only the service's own rules
and the order in which they are checked are under test.
"""

from __future__ import annotations

import uuid
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from django.db import IntegrityError, OperationalError

from modules.pricing.exceptions import (
    DUPLICATE_MESSAGE,
    DuplicateSpecialPrice,
    PriceNotBelowOriginal,
    PricingError,
    PricingStorageError,
    ProductNotFound,
    SpecialPriceNotFound,
    SpecialPriceValidationError,
)
from modules.pricing.models import SpecialPrice
from modules.pricing.services import SpecialPriceService
from modules.products.models import Product

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def mock_repo():
    repo = MagicMock()
    repo.get_by_user_and_product.return_value = None
    repo.save.side_effect = lambda sp: sp
    return repo


@pytest.fixture()
def mock_product_repo():
    return MagicMock()


@pytest.fixture()
def service(mock_repo, mock_product_repo):
    return SpecialPriceService(
        repository=mock_repo, product_repository=mock_product_repo
    )


@pytest.fixture()
def product(mock_product_repo):
    product = Product(
        name="Widget",
        description="A widget",
        price=Decimal("100.00"),
        category="Tools",
    )
    mock_product_repo.get_by_id.return_value = product
    return product


def _payload(product_id, **overrides) -> dict:
    data = {
        "user_id": str(uuid.uuid4()),
        "user_name": "Ana Souza",
        "email": "ana@example.com",
        "product_id": str(product_id),
        "product_name": "Widget",
        "special_price": "90.00",
        "discount": 10,
    }
    data.update(overrides)
    return data


def _existing(product: Product, **overrides) -> SpecialPrice:
    defaults = {
        "user_id": uuid.uuid4(),
        "user_name": "Ana Souza",
        "email": "ana@example.com",
        "product_id": product.id,
        "product_name": product.name,
        "special_price": Decimal("90.00"),
        "discount": 10,
    }
    defaults.update(overrides)
    return SpecialPrice(**defaults)


# ===========================================================================
# create_special_price
# ===========================================================================


class TestCreateSpecialPrice:
    def test_success(self, service, mock_repo, product):
        sp = service.create_special_price(_payload(product.id))

        assert sp.special_price == Decimal("90.00")
        assert sp.discount == 10
        assert sp.is_active is True
        assert sp.product_id == product.id
        mock_repo.save.assert_called_once()

    def test_snapshot_fields_copied_verbatim(self, service, product):
        sp = service.create_special_price(
            _payload(product.id, product_name="Old name", user_name="Someone")
        )
        assert sp.product_name == "Old name"
        assert sp.user_name == "Someone"

    def test_discount_stored_as_given(self, service, product):
        sp = service.create_special_price(
            _payload(product.id, special_price="90.00", discount=42)
        )
        assert sp.discount == 42

    def test_collects_every_validation_error(self, service, mock_repo, product):
        data = _payload(product.id, user_name="", special_price="0", discount=200)
        del data["email"]

        with pytest.raises(SpecialPriceValidationError) as exc_info:
            service.create_special_price(data)

        errors = exc_info.value.errors
        assert len(errors) == 4
        assert any(e.startswith("email") for e in errors)
        assert any(e.startswith("discount") for e in errors)
        mock_repo.save.assert_not_called()

    def test_validation_precedes_product_lookup(
        self, service, mock_product_repo, product
    ):
        with pytest.raises(SpecialPriceValidationError):
            service.create_special_price(_payload(product.id, email="bad"))
        mock_product_repo.get_by_id.assert_not_called()

    def test_unknown_product(self, service, mock_repo, mock_product_repo):
        mock_product_repo.get_by_id.return_value = None

        with pytest.raises(ProductNotFound):
            service.create_special_price(_payload(uuid.uuid4()))
        mock_repo.get_by_user_and_product.assert_not_called()

    def test_duplicate_pair(self, service, mock_repo, product):
        mock_repo.get_by_user_and_product.return_value = _existing(product)

        with pytest.raises(DuplicateSpecialPrice) as exc_info:
            service.create_special_price(_payload(product.id))

        assert str(exc_info.value) == DUPLICATE_MESSAGE
        mock_repo.save.assert_not_called()

    def test_duplicate_reported_before_price_check(self, service, mock_repo, product):
        mock_repo.get_by_user_and_product.return_value = _existing(product)

        with pytest.raises(DuplicateSpecialPrice):
            service.create_special_price(_payload(product.id, special_price="500.00"))

    @pytest.mark.parametrize("price", ["100.00", "150.00"])
    def test_price_not_below_original(self, service, mock_repo, product, price):
        with pytest.raises(PriceNotBelowOriginal):
            service.create_special_price(_payload(product.id, special_price=price))
        mock_repo.save.assert_not_called()

    def test_concurrent_insert_reported_as_duplicate(self, service, mock_repo, product):
        mock_repo.save.side_effect = IntegrityError("UNIQUE constraint failed")

        with pytest.raises(DuplicateSpecialPrice) as exc_info:
            service.create_special_price(_payload(product.id))

        assert isinstance(exc_info.value.__cause__, IntegrityError)

    def test_storage_failure(self, service, mock_repo, product):
        mock_repo.get_by_user_and_product.side_effect = OperationalError("timeout")

        with pytest.raises(PricingStorageError):
            service.create_special_price(_payload(product.id))

    def test_accepts_dto(self, service, product):
        from modules.pricing.dtos import CreateSpecialPriceDTO

        dto = CreateSpecialPriceDTO.model_validate(_payload(product.id))
        assert service.create_special_price(dto).discount == 10

    def test_every_failure_is_a_pricing_error(self, service, mock_product_repo):
        mock_product_repo.get_by_id.return_value = None
        with pytest.raises(PricingError):
            service.create_special_price(_payload(uuid.uuid4()))


# ===========================================================================
# update_special_price
# ===========================================================================


class TestUpdateSpecialPrice:
    def test_partial_update(self, service, mock_repo, mock_product_repo, product):
        existing = _existing(product)
        mock_repo.get_by_id.return_value = existing
        mock_repo.update.return_value = existing

        service.update_special_price(existing.id, {"notes": "vip", "is_active": False})

        mock_repo.update.assert_called_once_with(
            existing.id, {"notes": "vip", "is_active": False}
        )
        mock_product_repo.get_by_id.assert_not_called()

    def test_price_checked_against_current_product_price(
        self, service, mock_repo, product
    ):
        existing = _existing(product)
        mock_repo.get_by_id.return_value = existing
        product.price = Decimal("80.00")

        with pytest.raises(PriceNotBelowOriginal):
            service.update_special_price(existing.id, {"special_price": "85.00"})
        mock_repo.update.assert_not_called()

    def test_valid_price_change(self, service, mock_repo, product):
        existing = _existing(product)
        mock_repo.get_by_id.return_value = existing

        service.update_special_price(
            existing.id, {"special_price": "70.00", "discount": 30}
        )

        mock_repo.update.assert_called_once_with(
            existing.id, {"special_price": Decimal("70.00"), "discount": 30}
        )

    def test_not_found_precedes_validation(self, service, mock_repo):
        mock_repo.get_by_id.return_value = None

        with pytest.raises(SpecialPriceNotFound):
            service.update_special_price(uuid.uuid4(), {"discount": 500})

    def test_validation_errors(self, service, mock_repo, product):
        mock_repo.get_by_id.return_value = _existing(product)

        with pytest.raises(SpecialPriceValidationError) as exc_info:
            service.update_special_price(
                uuid.uuid4(), {"special_price": "-1", "discount": 500}
            )
        assert len(exc_info.value.errors) == 2
        mock_repo.update.assert_not_called()

    def test_product_gone_skips_price_check(
        self, service, mock_repo, mock_product_repo, product
    ):
        existing = _existing(product)
        mock_repo.get_by_id.return_value = existing
        mock_repo.update.return_value = existing
        mock_product_repo.get_by_id.return_value = None

        result = service.update_special_price(existing.id, {"special_price": "150.00"})

        assert result is existing
        mock_repo.update.assert_called_once_with(
            existing.id, {"special_price": Decimal("150.00")}
        )

    def test_row_deleted_before_write(self, service, mock_repo, product):
        mock_repo.get_by_id.return_value = _existing(product)
        mock_repo.update.return_value = None

        with pytest.raises(SpecialPriceNotFound):
            service.update_special_price(uuid.uuid4(), {"notes": "late"})

    def test_scenario_price_raised_above_original(self, service, mock_repo, product):
        existing = _existing(product)
        mock_repo.get_by_id.return_value = existing

        with pytest.raises(PriceNotBelowOriginal):
            service.update_special_price(existing.id, {"special_price": "150.00"})

        assert existing.special_price == Decimal("90.00")
        mock_repo.update.assert_not_called()


# ===========================================================================
# delete / queries
# ===========================================================================


class TestDeleteSpecialPrice:
    def test_success(self, service, mock_repo):
        mock_repo.delete.return_value = True
        sp_id = uuid.uuid4()

        service.delete_special_price(sp_id)

        mock_repo.delete.assert_called_once_with(sp_id)

    def test_unknown_id(self, service, mock_repo):
        mock_repo.delete.return_value = False

        with pytest.raises(SpecialPriceNotFound):
            service.delete_special_price(uuid.uuid4())

    def test_storage_failure(self, service, mock_repo):
        mock_repo.delete.side_effect = OperationalError("connection lost")

        with pytest.raises(PricingStorageError) as exc_info:
            service.delete_special_price(uuid.uuid4())
        assert isinstance(exc_info.value.__cause__, OperationalError)


class TestQueries:
    def test_get_special_price(self, service, mock_repo, product):
        existing = _existing(product)
        mock_repo.get_by_id.return_value = existing
        assert service.get_special_price(existing.id) is existing

    def test_get_special_price_not_found(self, service, mock_repo):
        mock_repo.get_by_id.return_value = None
        with pytest.raises(SpecialPriceNotFound):
            service.get_special_price(uuid.uuid4())

    def test_pair_lookup_absent_returns_none(self, service, mock_repo):
        assert (
            service.get_special_price_for_user_and_product(uuid.uuid4(), uuid.uuid4())
            is None
        )

    def test_list_delegates_filters(self, service, mock_repo):
        mock_repo.list.return_value = []
        service.list_special_prices({"is_active": "true"})
        mock_repo.list.assert_called_once_with({"is_active": "true"})

    def test_user_lists(self, service, mock_repo):
        user_id = uuid.uuid4()
        service.get_special_prices_for_user(user_id)
        service.get_active_special_prices_for_user(user_id)

        mock_repo.list_by_user.assert_called_once_with(user_id)
        mock_repo.list_active_by_user.assert_called_once_with(user_id)

    def test_query_storage_failure(self, service, mock_repo):
        mock_repo.list_by_user.side_effect = OperationalError("timeout")
        with pytest.raises(PricingStorageError):
            service.get_special_prices_for_user(uuid.uuid4())


class TestUserPricingSummary:
    def test_without_special_prices(self, service, mock_repo):
        mock_repo.list_active_by_user.return_value = []
        user_id = uuid.uuid4()

        summary = service.get_user_pricing_summary(user_id)

        assert summary.user_id == user_id
        assert summary.has_special_pricing is False
        assert summary.special_prices == []

    def test_with_active_special_prices(self, service, mock_repo):
        product = Product.objects.create(
            name="Widget",
            description="A widget",
            price=Decimal("100.00"),
            category="Tools",
        )
        saved = _existing(product)
        saved.save()
        mock_repo.list_active_by_user.return_value = [saved]

        summary = service.get_user_pricing_summary(saved.user_id)

        assert summary.has_special_pricing is True
        assert [sp.id for sp in summary.special_prices] == [saved.id]
        assert summary.special_prices[0].special_price == Decimal("90.00")
