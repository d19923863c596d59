"""Utility helpers for calculator modules."""

from __future__ import annotations

import math


class InvalidArgumentError(ValueError):
    """Raised when a monetary input falls outside its permitted range."""


def ensure_non_negative_price(price: float) -> None:
    """Reject negative monetary amounts."""

    if price < 0:
        raise InvalidArgumentError("Price cannot be negative")


def format_percentage(value: float) -> str:
    """Return a human-readable label for a percentage ``value`` (``10`` -> ``10%``)."""

    if not math.isfinite(value):
        return f"{value}%"
    if float(int(value)) == value:
        return f"{int(value)}%"
    return f"{value:.2f}%"


def round_currency(value: float) -> float:
    """Round monetary amounts to cents, resolving half-cent ties upwards.

    Infinite and NaN amounts are returned unchanged.
    """

    if not math.isfinite(value):
        return value
    return math.floor(value * 100 + 0.5) / 100


__all__ = [
    "InvalidArgumentError",
    "ensure_non_negative_price",
    "format_percentage",
    "round_currency",
]
