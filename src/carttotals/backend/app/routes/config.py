"""Expose pricing configuration so clients can offer the same tax profiles."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, jsonify

from carttotals.backend.app.http import problem_response
from carttotals.backend.config.pricing_config import (
    TaxProfile,
    available_tax_profiles,
    load_pricing_configuration,
)
from carttotals.backend.version import get_project_version

blueprint = Blueprint("config", __name__, url_prefix="/api/v1/config")


def get_configuration_metadata() -> dict[str, Any]:
    """Expose runtime metadata derived from the pricing configuration."""

    return {
        "version": get_project_version(),
        "tax_profiles": list(available_tax_profiles()),
    }


def _serialise_profile(name: str, profile: TaxProfile) -> dict[str, Any]:
    payload = profile.model_dump(mode="json", exclude_none=True)
    payload["name"] = name
    return payload


@blueprint.get("/pricing")
def get_pricing_configuration():
    """Return pricing defaults together with every declared tax profile."""

    config = load_pricing_configuration()
    profiles = [
        _serialise_profile(name, config.tax_profiles[name])
        for name in available_tax_profiles()
    ]
    return jsonify(
        {
            "version": get_project_version(),
            "defaults": {
                **config.defaults.model_dump(mode="json"),
                "effective_tax_rate": config.default_tax_rate,
            },
            "tax_profiles": profiles,
        }
    )


@blueprint.get("/tax-profiles/<string:name>")
def get_tax_profile(name: str):
    """Return a single tax profile by name."""

    config = load_pricing_configuration()
    try:
        profile = config.get_profile(name)
    except KeyError:
        return problem_response(
            "not_found",
            status=404,
            message=f"Unknown tax profile '{name}'",
            available=list(available_tax_profiles()),
        ).to_response()

    return jsonify(_serialise_profile(name, profile))
