"""Cart aggregation: subtotal, discount, tax and grand total."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import asdict, dataclass

from .pricing import apply_discount, calculate_tax
from .utils import round_currency


@dataclass(frozen=True)
class CartItem:
    """A single cart line."""

    price: float
    quantity: int = 1
    is_tax_exempt: bool = False

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


@dataclass(frozen=True)
class CartTotals:
    """Rounded monetary totals for a cart."""

    subtotal: float = 0.0
    discount: float = 0.0
    tax: float = 0.0
    total: float = 0.0

    def as_dict(self) -> dict[str, float]:
        return asdict(self)


def _sum_line_totals(items: Iterable[CartItem]) -> float:
    total = 0.0
    for item in items:
        total += item.line_total
    return total


def calculate_total(
    items: Sequence[CartItem],
    discount_percent: float = 0,
    tax_rate: float = 0,
) -> CartTotals:
    """Aggregate ``items`` into discounted, taxed totals.

    The discount percentage is applied once to the whole subtotal and again,
    proportionally, to the taxable slice of the cart. Tax is charged only on
    that discounted taxable slice. Invalid discount or tax values raise
    :class:`InvalidArgumentError` from the underlying primitives.
    """

    if not items:
        return CartTotals()

    subtotal = _sum_line_totals(items)
    discounted_subtotal = apply_discount(subtotal, discount_percent)
    discount = subtotal - discounted_subtotal

    taxable_subtotal = _sum_line_totals(item for item in items if not item.is_tax_exempt)
    taxable_after_discount = apply_discount(taxable_subtotal, discount_percent)
    tax = calculate_tax(taxable_after_discount, tax_rate, False)

    total = discounted_subtotal + tax

    return CartTotals(
        subtotal=round_currency(subtotal),
        discount=round_currency(discount),
        tax=round_currency(tax),
        total=round_currency(total),
    )


__all__ = ["CartItem", "CartTotals", "calculate_total"]
