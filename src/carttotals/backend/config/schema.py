"""Pydantic models describing the pricing configuration schema."""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing_extensions import Self


class ConfigurationError(ValueError):
    """Raised when configuration values violate schema expectations."""


class ImmutableModel(BaseModel):
    """Base class that freezes instances and rejects unknown fields."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


class TaxProfile(ImmutableModel):
    """A named tax rate, expressed in percent."""

    rate: float
    label: str | None = None
    description: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _coerce_scalar(cls, data: Any) -> Any:
        if isinstance(data, (int, float)) and not isinstance(data, bool):
            return {"rate": data}
        return data

    @model_validator(mode="after")
    def _validate_rate(self) -> Self:
        if self.rate < 0:
            raise ConfigurationError("Tax profile rates must be non-negative")
        return self


class PricingDefaults(ImmutableModel):
    """Fallback values used when a request omits discount or tax inputs."""

    discount_percent: float = 0.0
    tax_rate: float = 0.0
    tax_profile: str | None = None

    @model_validator(mode="after")
    def _validate_ranges(self) -> Self:
        if not 0 <= self.discount_percent <= 100:
            raise ConfigurationError("Default discount must be between 0 and 100 percent")
        if self.tax_rate < 0:
            raise ConfigurationError("Default tax rate must be non-negative")
        return self


class PricingConfiguration(ImmutableModel):
    """Complete pricing configuration loaded from YAML."""

    defaults: PricingDefaults = Field(default_factory=PricingDefaults)
    tax_profiles: Mapping[str, TaxProfile] = Field(default_factory=dict)

    @field_validator("tax_profiles", mode="before")
    @classmethod
    def _coerce_profiles(cls, value: Any) -> Any:
        if value is None:
            return {}
        if not isinstance(value, Mapping):
            raise ConfigurationError("Tax profiles must be provided as a mapping")
        return {str(name): profile for name, profile in value.items()}

    @model_validator(mode="after")
    def _validate_default_profile(self) -> Self:
        profile = self.defaults.tax_profile
        if profile is not None and profile not in self.tax_profiles:
            raise ConfigurationError(f"Default tax profile '{profile}' is not declared")
        return self

    def get_profile(self, name: str) -> TaxProfile:
        try:
            return self.tax_profiles[name]
        except KeyError as exc:
            raise KeyError(f"Unknown tax profile '{name}'") from exc

    @property
    def default_tax_rate(self) -> float:
        """Tax rate applied when a request provides neither rate nor profile."""

        if self.defaults.tax_profile is not None:
            return self.tax_profiles[self.defaults.tax_profile].rate
        return self.defaults.tax_rate


__all__ = [
    "ConfigurationError",
    "ImmutableModel",
    "PricingConfiguration",
    "PricingDefaults",
    "TaxProfile",
]
