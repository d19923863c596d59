"""REST endpoints for cart totals."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, request

from carttotals.backend.services import (
    build_totals_response,
    calculate_cart_totals,
    parse_totals_payload,
)

blueprint = Blueprint("totals", __name__, url_prefix="/api/v1")


@blueprint.post("/totals")
def create_totals() -> tuple[Any, int]:
    """Compute cart totals for the submitted JSON payload."""

    payload = parse_totals_payload(request)
    result = calculate_cart_totals(payload)

    return build_totals_response(result)
