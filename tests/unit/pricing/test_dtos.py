"""Unit tests for the special pricing DTOs."""

from __future__ import annotations

import uuid
from decimal import Decimal

import pytest
from pydantic import ValidationError

from modules.pricing.dtos import CreateSpecialPriceDTO, UpdateSpecialPriceDTO

pytestmark = pytest.mark.unit


def _payload(**overrides) -> dict:
    data = {
        "user_id": str(uuid.uuid4()),
        "user_name": "Ana Souza",
        "email": "ana@example.com",
        "product_id": str(uuid.uuid4()),
        "product_name": "Widget",
        "special_price": "90.00",
        "discount": 10,
    }
    data.update(overrides)
    return data


class TestCreateSpecialPriceDTO:
    def test_valid_payload(self):
        dto = CreateSpecialPriceDTO.model_validate(_payload())

        assert isinstance(dto.user_id, uuid.UUID)
        assert dto.special_price == Decimal("90.00")
        assert dto.discount == 10
        assert dto.notes == ""

    def test_is_frozen(self):
        dto = CreateSpecialPriceDTO.model_validate(_payload())
        with pytest.raises(ValidationError):
            dto.discount = 50

    def test_strips_names(self):
        dto = CreateSpecialPriceDTO.model_validate(
            _payload(user_name="  Ana  ", product_name=" Widget ")
        )
        assert dto.user_name == "Ana"
        assert dto.product_name == "Widget"

    @pytest.mark.parametrize("price", ["0", "-1.00"])
    def test_non_positive_price_rejected(self, price):
        with pytest.raises(ValidationError, match="positive"):
            CreateSpecialPriceDTO.model_validate(_payload(special_price=price))

    def test_more_than_two_decimals_rejected(self):
        with pytest.raises(ValidationError):
            CreateSpecialPriceDTO.model_validate(_payload(special_price="9.999"))

    @pytest.mark.parametrize("discount", [-1, 101])
    def test_discount_out_of_range_rejected(self, discount):
        with pytest.raises(ValidationError, match="between 0 and 100"):
            CreateSpecialPriceDTO.model_validate(_payload(discount=discount))

    @pytest.mark.parametrize("discount", [0, 100])
    def test_discount_bounds_accepted(self, discount):
        dto = CreateSpecialPriceDTO.model_validate(_payload(discount=discount))
        assert dto.discount == discount

    def test_invalid_email_rejected(self):
        with pytest.raises(ValidationError):
            CreateSpecialPriceDTO.model_validate(_payload(email="not-an-email"))

    def test_every_violation_reported(self):
        data = _payload(user_name="", email="nope", special_price="-5", discount=150)
        del data["product_id"]

        with pytest.raises(ValidationError) as exc_info:
            CreateSpecialPriceDTO.model_validate(data)

        fields = {err["loc"][0] for err in exc_info.value.errors()}
        assert fields == {
            "user_name",
            "email",
            "product_id",
            "special_price",
            "discount",
        }

    def test_discount_required(self):
        data = _payload()
        del data["discount"]
        with pytest.raises(ValidationError, match="discount"):
            CreateSpecialPriceDTO.model_validate(data)


class TestUpdateSpecialPriceDTO:
    def test_empty_update_is_valid(self):
        dto = UpdateSpecialPriceDTO.model_validate({})
        assert dto.changes() == {}

    def test_changes_only_contains_supplied_fields(self):
        dto = UpdateSpecialPriceDTO.model_validate(
            {"special_price": "80.00", "is_active": False}
        )
        assert dto.changes() == {"special_price": Decimal("80.00"), "is_active": False}

    def test_null_values_are_not_changes(self):
        dto = UpdateSpecialPriceDTO.model_validate({"notes": None, "discount": 5})
        assert dto.changes() == {"discount": 5}

    def test_identity_fields_ignored(self):
        dto = UpdateSpecialPriceDTO.model_validate(
            {"user_id": str(uuid.uuid4()), "notes": "vip"}
        )
        assert dto.changes() == {"notes": "vip"}

    def test_invalid_values_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            UpdateSpecialPriceDTO.model_validate({"special_price": "0", "discount": 101})
        assert len(exc_info.value.errors()) == 2
