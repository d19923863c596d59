"""Domain-specific calculation helpers."""

from .cart import CartItem, CartTotals, calculate_total
from .pricing import apply_discount, calculate_tax
from .utils import InvalidArgumentError, format_percentage, round_currency

__all__ = [
    "CartItem",
    "CartTotals",
    "InvalidArgumentError",
    "apply_discount",
    "calculate_tax",
    "calculate_total",
    "format_percentage",
    "round_currency",
]
