"""Regression coverage ensuring totals outputs stay stable."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from carttotals.backend.app.services.totals_service import calculate_cart_totals

_DATA_PATH = Path(__file__).resolve().parents[1] / "data" / "regression_scenarios.json"


@pytest.mark.parametrize(
    "scenario",
    json.loads(_DATA_PATH.read_text("utf-8")),
    ids=lambda item: item["name"],
)
def test_calculate_cart_totals_matches_regression_scenario(
    scenario: dict[str, object],
) -> None:
    """The totals service returns the expected results for known payloads."""

    expectations = scenario["expectations"]

    result = calculate_cart_totals(scenario["payload"])

    for key, value in expectations["totals"].items():
        assert result["totals"][key] == pytest.approx(value)
    for key, value in expectations["meta"].items():
        assert result["meta"][key] == value
