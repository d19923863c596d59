"""Utilities for validating pricing configuration data and surfacing issues."""

from __future__ import annotations

import argparse
from collections import Counter
from pathlib import Path
from typing import Sequence

from .pricing_config import (
    ConfigurationError,
    PricingConfiguration,
    parse_pricing_configuration,
    resolve_config_path,
)


def _format_scope(scope: str, message: str) -> str:
    return f"{scope}: {message}"


def _validate_profiles(config: PricingConfiguration) -> list[str]:
    errors: list[str] = []

    for name, profile in sorted(config.tax_profiles.items()):
        scope = f"tax_profiles.{name}"
        if profile.rate > 100:
            errors.append(_format_scope(scope, "rate exceeds 100 percent"))
        if profile.label is not None and not profile.label.strip():
            errors.append(_format_scope(scope, "label must not be blank"))

    labels = [
        profile.label.strip().lower()
        for profile in config.tax_profiles.values()
        if profile.label
    ]
    duplicates = sorted(label for label, count in Counter(labels).items() if count > 1)
    if duplicates:
        errors.append(
            _format_scope("tax_profiles", f"duplicate labels detected: {duplicates}")
        )

    return errors


def _validate_defaults(config: PricingConfiguration) -> list[str]:
    errors: list[str] = []
    defaults = config.defaults

    if defaults.tax_profile is not None and defaults.tax_rate:
        profile_rate = config.tax_profiles[defaults.tax_profile].rate
        if profile_rate != defaults.tax_rate:
            errors.append(
                _format_scope(
                    "defaults",
                    f"tax_rate {defaults.tax_rate} is shadowed by profile "
                    f"'{defaults.tax_profile}' ({profile_rate})",
                )
            )

    return errors


def validate_pricing_configuration(config: PricingConfiguration) -> list[str]:
    """Return human-readable issues detected in ``config``."""

    return [*_validate_defaults(config), *_validate_profiles(config)]


def _build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate the pricing configuration and report issues.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        type=Path,
        help="Configuration file to validate (defaults to the active configuration)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for running validations from the command line."""

    parser = _build_argument_parser()
    args = parser.parse_args(argv)
    path: Path = args.path or resolve_config_path()

    try:
        config = parse_pricing_configuration(path)
    except (FileNotFoundError, ConfigurationError) as error:
        print(f"[{path.name}] failed to load configuration: {error}")
        return 1

    issues = validate_pricing_configuration(config)
    if issues:
        print(f"[{path.name}] {len(issues)} issue(s) detected:")
        for issue in issues:
            print(f"  - {issue}")
        return 1

    print(f"[{path.name}] OK")
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    raise SystemExit(main())
