"""WSGI entrypoint for deploying the cart totals backend under Passenger."""

from carttotals.backend.app import create_app

# Passenger looks up a module-level variable named ``application``.
application = create_app()
