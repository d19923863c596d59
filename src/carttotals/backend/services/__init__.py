"""Service-layer helpers for the cart totals backend."""

from carttotals.backend.app.services.totals_service import calculate_cart_totals

from .request_parser import parse_totals_payload
from .response_builder import build_totals_response

__all__ = [
    "calculate_cart_totals",
    "parse_totals_payload",
    "build_totals_response",
]
