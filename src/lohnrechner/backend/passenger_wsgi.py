"""WSGI entrypoint for deploying the payroll backend behind Passenger."""

from lohnrechner.backend.app import create_app

# Passenger expects a module-level variable named ``application``.
application = create_app()
