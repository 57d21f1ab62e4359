"""Unit tests for the discount arithmetic."""

from __future__ import annotations

from decimal import Decimal

import pytest

from modules.pricing.discounts import discount_from_prices, price_from_discount

pytestmark = pytest.mark.unit


class TestDiscountFromPrices:
    def test_ten_percent(self):
        assert discount_from_prices(Decimal("100.00"), Decimal("90.00")) == 10

    def test_rounds_half_up(self):
        # (200 - 199) / 200 * 100 == 0.5
        assert discount_from_prices(Decimal("200.00"), Decimal("199.00")) == 1

    def test_rounds_down_below_half(self):
        # 1/3 off == 33.33...%
        assert discount_from_prices(Decimal("30.00"), Decimal("20.00")) == 33

    @pytest.mark.parametrize("original", [Decimal("0"), Decimal("-5.00")])
    def test_non_positive_original_yields_zero(self, original):
        assert discount_from_prices(original, Decimal("5.00")) == 0

    def test_special_above_original_clamped_to_zero(self):
        assert discount_from_prices(Decimal("50.00"), Decimal("80.00")) == 0

    def test_negative_special_clamped_to_hundred(self):
        assert discount_from_prices(Decimal("50.00"), Decimal("-10.00")) == 100

    def test_accepts_plain_numbers(self):
        assert discount_from_prices(100, 75) == 25
        assert discount_from_prices(19.99, 9.99) == 50


class TestPriceFromDiscount:
    def test_ten_percent(self):
        assert price_from_discount(Decimal("100.00"), 10) == Decimal("90.00")

    def test_quantized_to_cents(self):
        assert price_from_discount(Decimal("19.99"), 15) == Decimal("16.99")

    def test_rounds_half_up(self):
        # 0.25 * 0.9 == 0.225
        assert price_from_discount(Decimal("0.25"), 10) == Decimal("0.23")

    def test_zero_discount_keeps_price(self):
        assert price_from_discount(Decimal("42.50"), 0) == Decimal("42.50")

    def test_full_discount_is_zero(self):
        assert price_from_discount(Decimal("42.50"), 100) == Decimal("0.00")


class TestConversionsAgree:
    @pytest.mark.parametrize(
        "original,special",
        [
            (Decimal("100.00"), Decimal("90.00")),
            (Decimal("80.00"), Decimal("60.00")),
            (Decimal("250.00"), Decimal("200.00")),
        ],
    )
    def test_price_to_discount_to_price(self, original, special):
        discount = discount_from_prices(original, special)
        assert abs(price_from_discount(original, discount) - special) <= Decimal("0.01")

    def test_discount_to_price_to_discount_within_one_point(self):
        original = Decimal("7.99")
        for percent in range(0, 101):
            price = price_from_discount(original, percent)
            assert abs(discount_from_prices(original, price) - percent) <= 1
