"""Typed request/response models shared across the totals services.

Requests are validated with Pydantic before the arithmetic runs; derived
results come back from the calculators as frozen dataclasses and are
re-validated on the way out through :class:`CartTotalsResponse`.
"""

from __future__ import annotations

from .api import (
    TAX_SOURCE_CONFLICT_ERROR,
    CartItemInput,
    CartTotalsRequest,
    CartTotalsResponse,
    LineEntry,
    ResponseMeta,
    TotalsSummary,
    format_validation_error,
)

__all__ = [
    "CartItemInput",
    "CartTotalsRequest",
    "CartTotalsResponse",
    "LineEntry",
    "ResponseMeta",
    "TotalsSummary",
    "format_validation_error",
    "TAX_SOURCE_CONFLICT_ERROR",
]
