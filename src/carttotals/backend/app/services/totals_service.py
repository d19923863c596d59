"""Orchestrate request validation, rate resolution, and cart calculations.

The totals service accepts raw mappings or validated request models, fills in
discount and tax values from the pricing configuration, and hands plain
``CartItem`` records to the calculators. Profiling hooks live here so the
calculators stay free of side effects.
"""

from __future__ import annotations

import logging
import math
import os
from collections.abc import Mapping
from contextlib import contextmanager
from dataclasses import dataclass
from time import perf_counter
from typing import Any

from pydantic import ValidationError

from carttotals.backend.app.models import (
    CartTotalsRequest,
    CartTotalsResponse,
    format_validation_error,
)
from carttotals.backend.config.pricing_config import (
    PricingConfiguration,
    load_pricing_configuration,
)

from .calculators import (
    CartItem,
    calculate_total,
    format_percentage,
    round_currency,
)

_LOGGER = logging.getLogger(__name__)

TOTALS_OUT_OF_RANGE_ERROR = "Cart totals exceed the representable monetary range"


def _profiling_enabled() -> bool:
    """Return ``True`` when calculation profiling should be captured."""

    flag = os.getenv("CARTTOTALS_PROFILE_CALCULATIONS", "")
    return flag.strip().lower() in {"1", "true", "yes", "on"}


@contextmanager
def _profile_section(name: str, store: dict[str, float] | None):
    """Capture the duration of a named section when profiling is enabled."""

    if store is None:
        yield
        return

    start = perf_counter()
    try:
        yield
    finally:
        store[name] = perf_counter() - start


@dataclass(frozen=True)
class AppliedRates:
    discount_percent: float
    tax_rate: float
    tax_label: str
    tax_profile: str | None = None


def _resolve_rates(
    request: CartTotalsRequest, config: PricingConfiguration
) -> AppliedRates:
    if request.discount_percent is not None:
        discount_percent = request.discount_percent
    else:
        discount_percent = config.defaults.discount_percent

    profile_name = request.tax_profile
    if request.tax_rate is not None:
        tax_rate = request.tax_rate
    elif profile_name is not None:
        try:
            tax_rate = config.get_profile(profile_name).rate
        except KeyError as exc:
            raise ValueError(f"Unknown tax profile '{profile_name}'") from exc
    else:
        profile_name = config.defaults.tax_profile
        tax_rate = config.default_tax_rate

    tax_label = format_percentage(tax_rate)
    if profile_name is not None:
        profile = config.get_profile(profile_name)
        if profile.label:
            tax_label = f"{profile.label} ({tax_label})"

    return AppliedRates(
        discount_percent=discount_percent,
        tax_rate=tax_rate,
        tax_label=tax_label,
        tax_profile=profile_name,
    )


def _validate_request(payload: Mapping[str, Any] | CartTotalsRequest) -> CartTotalsRequest:
    if isinstance(payload, CartTotalsRequest):
        data: Any = payload.model_dump(mode="python")
    elif isinstance(payload, Mapping):
        data = payload
    else:
        raise ValueError("Payload must be a mapping")

    try:
        return CartTotalsRequest.model_validate(data)
    except ValidationError as exc:
        raise ValueError(format_validation_error(exc)) from exc


def calculate_cart_totals(
    payload: Mapping[str, Any] | CartTotalsRequest,
) -> dict[str, Any]:
    """Compute cart totals for the provided payload."""

    timings: dict[str, float] | None = {} if _profiling_enabled() else None
    overall_start = perf_counter() if timings is not None else None

    with _profile_section("validate_request", timings):
        request_model = _validate_request(payload)

    config = load_pricing_configuration()
    rates = _resolve_rates(request_model, config)

    items = [
        CartItem(
            price=entry.price,
            quantity=entry.quantity,
            is_tax_exempt=entry.is_tax_exempt,
        )
        for entry in request_model.items
    ]

    with _profile_section("calculate_total", timings):
        totals = calculate_total(items, rates.discount_percent, rates.tax_rate)

    if not all(math.isfinite(value) for value in totals.as_dict().values()):
        raise ValueError(TOTALS_OUT_OF_RANGE_ERROR)

    if timings is not None and overall_start is not None:
        timings["total"] = perf_counter() - overall_start
        _LOGGER.debug(
            "calculate_cart_totals timings (ms): %s",
            {name: round(duration * 1000, 3) for name, duration in timings.items()},
        )

    lines = [
        {
            "index": index,
            "price": item.price,
            "quantity": item.quantity,
            "line_total": round_currency(item.line_total),
            "is_tax_exempt": item.is_tax_exempt,
        }
        for index, item in enumerate(items)
    ]

    meta: dict[str, Any] = {
        "discount_percent": rates.discount_percent,
        "discount_label": format_percentage(rates.discount_percent),
        "tax_rate": rates.tax_rate,
        "tax_label": rates.tax_label,
        "item_count": len(items),
        "taxable_item_count": sum(1 for item in items if not item.is_tax_exempt),
    }
    if rates.tax_profile is not None:
        meta["tax_profile"] = rates.tax_profile

    response_model = CartTotalsResponse.model_validate(
        {
            "totals": totals.as_dict(),
            "lines": lines,
            "meta": meta,
        }
    )

    return response_model.model_dump(mode="json", exclude_none=True)


__all__ = ["AppliedRates", "TOTALS_OUT_OF_RANGE_ERROR", "calculate_cart_totals"]
