"""WSGI entrypoint for Passenger/gunicorn style deployments."""

from wagecalc.backend.app import create_app

application = create_app()
