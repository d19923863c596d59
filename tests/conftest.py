"""Test configuration utilities and shared fixtures."""

import sys
from pathlib import Path

# Make ``src`` importable when pytest runs from a plain checkout without an
# editable install.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import pytest  # noqa: E402
from flask import Flask  # noqa: E402
from flask.testing import FlaskClient  # noqa: E402

from carttotals.backend.app import create_app  # noqa: E402
from carttotals.backend.config.pricing_config import (  # noqa: E402
    CONFIG_FILE_ENV,
    load_pricing_configuration,
)


@pytest.fixture(autouse=True)
def _reset_pricing_configuration(monkeypatch: pytest.MonkeyPatch):
    """Ensure every test starts from the bundled pricing configuration."""

    monkeypatch.delenv(CONFIG_FILE_ENV, raising=False)
    load_pricing_configuration.cache_clear()
    yield
    load_pricing_configuration.cache_clear()


@pytest.fixture()
def app() -> Flask:
    """Return a configured Flask application for integration tests."""

    application = create_app()
    application.config.update(TESTING=True)
    return application


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Provide a test client bound to the configured Flask app."""

    return app.test_client()
