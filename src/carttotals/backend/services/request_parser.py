"""Helpers for normalising incoming totals requests."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import Any

from flask import Request
from werkzeug.exceptions import BadRequest

logger = logging.getLogger(__name__)

# Query parameters that may stand in for body fields on simple clients.
_QUERY_OVERRIDES = {
    "discount_percent": "discountPercent",
    "tax_rate": "taxRate",
    "tax_profile": "taxProfile",
}
_NUMERIC_QUERY_FIELDS = {"discount_percent", "tax_rate"}


def _apply_query_overrides(req: Request, payload: dict[str, Any]) -> None:
    """Fill discount and tax fields from query parameters when the body omits them."""

    for field, alias in _QUERY_OVERRIDES.items():
        raw = req.args.get(field)
        if raw is None or field in payload or alias in payload:
            continue
        if field not in _NUMERIC_QUERY_FIELDS:
            payload[field] = raw
            continue
        try:
            value = float(raw)
        except ValueError:
            logger.warning("Ignoring invalid value for %s: %s", field, raw)
            continue
        if not math.isfinite(value):
            logger.warning("Ignoring non-finite value for %s: %s", field, raw)
            continue
        payload[field] = value


def parse_totals_payload(req: Request) -> dict[str, Any]:
    """Extract and validate a JSON payload from ``req``."""

    data = req.get_json(silent=True)
    if data is None:
        raise BadRequest("Request body must be valid JSON")
    if not isinstance(data, Mapping):
        raise BadRequest("Request JSON must be an object")

    payload = dict(data)
    _apply_query_overrides(req, payload)

    return payload
