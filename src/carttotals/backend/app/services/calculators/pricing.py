"""Discount and tax primitives applied to a single monetary amount."""

from __future__ import annotations

from .utils import InvalidArgumentError, ensure_non_negative_price, round_currency


def apply_discount(price: float, discount_percent: float) -> float:
    """Return ``price`` reduced by ``discount_percent`` percent.

    The result is left unrounded so callers can aggregate before rounding.
    """

    ensure_non_negative_price(price)
    if discount_percent < 0:
        raise InvalidArgumentError("Discount cannot be negative")
    if discount_percent > 100:
        raise InvalidArgumentError("Discount cannot exceed 100%")

    multiplier = 1 - discount_percent / 100
    return price * multiplier


def calculate_tax(
    price: float,
    tax_rate: float,
    is_tax_exempt: bool = False,
) -> float:
    """Return the tax owed on ``price`` at ``tax_rate`` percent, rounded to cents."""

    ensure_non_negative_price(price)
    if tax_rate < 0:
        raise InvalidArgumentError("Tax rate cannot be negative")

    if is_tax_exempt:
        return 0.0

    return round_currency(price * (tax_rate / 100))


__all__ = ["apply_discount", "calculate_tax"]
