"""Configuration loader wrapping the pricing schema models."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Sequence

import yaml
from pydantic import ValidationError

from .schema import (
    ConfigurationError,
    PricingConfiguration,
    PricingDefaults,
    TaxProfile,
)

CONFIG_DIRECTORY = Path(__file__).resolve().parent / "data"
CONFIG_FILE = CONFIG_DIRECTORY / "pricing.yaml"
CONFIG_FILE_ENV = "CARTTOTALS_CONFIG_FILE"


def _load_yaml(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ConfigurationError("Configuration file must define a mapping at the top level")
    return data


def resolve_config_path() -> Path:
    """Return the configuration file path, honouring the environment override."""

    override = os.getenv(CONFIG_FILE_ENV, "").strip()
    if override:
        return Path(override).expanduser()
    return CONFIG_FILE


def parse_pricing_configuration(path: Path) -> PricingConfiguration:
    """Read and validate the pricing configuration stored at ``path``."""

    if not path.exists():
        raise FileNotFoundError(f"Pricing configuration not found: {path}")

    raw_config = _load_yaml(path)

    try:
        return PricingConfiguration.model_validate(raw_config)
    except ValidationError as error:
        raise ConfigurationError(f"Pricing configuration validation failed: {error}") from error


@lru_cache(maxsize=1)
def load_pricing_configuration() -> PricingConfiguration:
    """Load and cache the active pricing configuration."""

    return parse_pricing_configuration(resolve_config_path())


def available_tax_profiles() -> Sequence[str]:
    """Return the declared tax profile names in sorted order."""

    return sorted(load_pricing_configuration().tax_profiles)


__all__ = [
    "CONFIG_DIRECTORY",
    "CONFIG_FILE",
    "CONFIG_FILE_ENV",
    "ConfigurationError",
    "PricingConfiguration",
    "PricingDefaults",
    "TaxProfile",
    "available_tax_profiles",
    "load_pricing_configuration",
    "parse_pricing_configuration",
    "resolve_config_path",
]
