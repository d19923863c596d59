"""Integration tests for the cart totals REST endpoint."""

from __future__ import annotations

import json
from http import HTTPStatus
from pathlib import Path
from typing import Dict, Iterable

import pytest
from flask.testing import FlaskClient

DATA_PATH = Path(__file__).resolve().parents[1] / "data" / "regression_scenarios.json"


def _load_scenarios() -> Iterable[Dict[str, object]]:
    with DATA_PATH.open("r", encoding="utf-8") as handle:
        return json.load(handle)


@pytest.mark.parametrize("scenario", _load_scenarios(), ids=lambda item: item["name"])
def test_totals_endpoint_matches_regression_scenarios(
    client: FlaskClient, scenario: Dict[str, object]
) -> None:
    """Each regression scenario should remain stable over time."""

    response = client.post("/api/v1/totals", json=scenario["payload"])
    assert response.status_code == HTTPStatus.OK

    result = response.get_json()
    expected = scenario["expectations"]

    for key, value in expected["totals"].items():
        assert result["totals"][key] == pytest.approx(value)
    for key, value in expected["meta"].items():
        assert result["meta"][key] == value


def test_totals_endpoint_accepts_query_parameters(client: FlaskClient) -> None:
    response = client.post(
        "/api/v1/totals?discount_percent=10&tax_rate=10",
        json={"items": [{"price": 20}]},
    )

    assert response.status_code == HTTPStatus.OK
    totals = response.get_json()["totals"]
    assert totals["tax"] == pytest.approx(1.8)
    assert totals["total"] == pytest.approx(19.8)


def test_totals_endpoint_rejects_invalid_json(client: FlaskClient) -> None:
    """Malformed bodies should return a structured 400 response."""

    response = client.post(
        "/api/v1/totals",
        data="not-json",
        content_type="text/plain",
    )

    assert response.status_code == HTTPStatus.BAD_REQUEST
    payload = response.get_json()
    assert payload["error"] == "bad_request"
    assert "JSON" in payload["message"].upper()


def test_totals_endpoint_reports_validation_errors(client: FlaskClient) -> None:
    response = client.post("/api/v1/totals", json={"items": [{"price": -1}]})

    assert response.status_code == HTTPStatus.BAD_REQUEST
    payload = response.get_json()
    assert payload["error"] == "validation_error"
    assert "cannot be negative" in payload["message"].lower()


@pytest.mark.parametrize(
    ("body", "message"),
    [
        ({"items": [{"price": 10}], "discount_percent": 150}, "Discount cannot exceed 100%"),
        ({"items": [{"price": 10}], "discount_percent": -1}, "Discount cannot be negative"),
        ({"items": [{"price": 10}], "tax_rate": -3}, "Tax rate cannot be negative"),
        ({"items": [], "tax_profile": "luxury"}, "Unknown tax profile 'luxury'"),
    ],
)
def test_totals_endpoint_surfaces_domain_errors(
    client: FlaskClient, body: Dict[str, object], message: str
) -> None:
    """Calculator errors reach the client unchanged."""

    response = client.post("/api/v1/totals", json=body)

    assert response.status_code == HTTPStatus.BAD_REQUEST
    payload = response.get_json()
    assert payload == {"error": "validation_error", "message": message}


def test_totals_endpoint_returns_line_breakdown(client: FlaskClient) -> None:
    response = client.post(
        "/api/v1/totals",
        json={"items": [{"price": 2.5, "quantity": 4}, {"price": 1, "isTaxExempt": True}]},
    )

    assert response.status_code == HTTPStatus.OK
    lines = response.get_json()["lines"]
    assert lines == [
        {"index": 0, "price": 2.5, "quantity": 4, "line_total": 10.0, "is_tax_exempt": False},
        {"index": 1, "price": 1.0, "quantity": 1, "line_total": 1.0, "is_tax_exempt": True},
    ]


@pytest.mark.parametrize(
    "body",
    [
        '{"items": [{"price": 1}], "taxRate": Infinity}',
        '{"items": [{"price": 1}], "discountPercent": NaN}',
        '{"items": [{"price": -Infinity}]}',
    ],
)
def test_totals_endpoint_rejects_non_finite_numbers(
    client: FlaskClient, body: str
) -> None:
    """JSON extensions such as Infinity and NaN are validation errors, not crashes."""

    response = client.post("/api/v1/totals", data=body, content_type="application/json")

    assert response.status_code == HTTPStatus.BAD_REQUEST
    payload = response.get_json()
    assert payload["error"] == "validation_error"
    assert "finite number" in payload["message"]


def test_totals_endpoint_ignores_non_finite_query_rates(client: FlaskClient) -> None:
    response = client.post("/api/v1/totals?tax_rate=inf", json={"items": [{"price": 20}]})

    assert response.status_code == HTTPStatus.OK
    result = response.get_json()
    assert result["totals"] == {"subtotal": 20, "discount": 0, "tax": 0, "total": 20}
    assert result["meta"]["tax_rate"] == 0


def test_totals_endpoint_rejects_overflowing_carts(client: FlaskClient) -> None:
    response = client.post(
        "/api/v1/totals", json={"items": [{"price": 1e307, "quantity": 100}]}
    )

    assert response.status_code == HTTPStatus.BAD_REQUEST
    payload = response.get_json()
    assert payload["error"] == "validation_error"
    assert "representable" in payload["message"]
