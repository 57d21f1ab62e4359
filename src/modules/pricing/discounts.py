"""Discount arithmetic shared by the API and the web client.

The two conversions are deliberately not exact inverses: a discount is a
whole percentage while a price is kept to the cent.  Going price → discount
→ price lands back on the original price to the cent in the usual cases;
going discount → price → discount may drift by one percentage point.

Both functions use half-up rounding on ``Decimal`` so ``x.5`` always rounds
away from zero, the way currency amounts are rounded at the till.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Union

Number = Union[Decimal, int, float, str]

CENT = Decimal("0.01")
HUNDRED = Decimal(100)


def _to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() keeps floats such as 19.99 from expanding to their binary value.
    return Decimal(str(value))


def discount_from_prices(original_price: Number, special_price: Number) -> int:
    """Return the whole-percent discount that takes ``original_price`` to ``special_price``.

    ``round((original - special) / original * 100)``, clamped to ``[0, 100]``.
    A non-positive original price yields ``0``.

    >>> discount_from_prices(100, 90)
    10
    >>> discount_from_prices(0, 5)
    0
    """
    original = _to_decimal(original_price)
    special = _to_decimal(special_price)
    if original <= 0:
        return 0

    percent = ((original - special) / original * HUNDRED).quantize(
        Decimal(1), rounding=ROUND_HALF_UP
    )
    return int(min(max(percent, Decimal(0)), HUNDRED))


def price_from_discount(original_price: Number, discount_percent: Number) -> Decimal:
    """Apply ``discount_percent`` to ``original_price``, rounded to the cent.

    >>> price_from_discount(100, 10)
    Decimal('90.00')
    >>> price_from_discount("19.99", 15)
    Decimal('16.99')
    """
    original = _to_decimal(original_price)
    percent = _to_decimal(discount_percent)
    price = original * (Decimal(1) - percent / HUNDRED)
    return price.quantize(CENT, rounding=ROUND_HALF_UP)
