"""Blueprint registrations for application routes."""

from flask import Flask

from .config import blueprint as config_blueprint
from .totals import blueprint as totals_blueprint


def register_routes(app: Flask) -> None:
    """Register all Flask blueprints with the provided application."""

    app.register_blueprint(totals_blueprint)
    app.register_blueprint(config_blueprint)
