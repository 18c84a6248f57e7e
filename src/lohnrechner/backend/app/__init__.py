"""Flask application factory for the payroll calculation API."""

import logging
import os

from flask import Flask, jsonify

from .http import register_error_handlers
from .routes import register_routes
from .routes.config import get_configuration_metadata

LOG_LEVEL_ENV = "LOHNRECHNER_LOG_LEVEL"

_LOGGER = logging.getLogger(__name__)


def _configure_logging(app: Flask) -> None:
    """Apply the log level requested through the environment, if any."""

    level_name = os.getenv(LOG_LEVEL_ENV, "").strip().upper()
    if not level_name:
        return

    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        _LOGGER.warning("Ignoring unknown log level %r from %s", level_name, LOG_LEVEL_ENV)
        return

    logging.getLogger("lohnrechner").setLevel(level)
    app.logger.setLevel(level)


def create_app() -> Flask:
    """Create the application with calculation and configuration routes."""

    app = Flask(__name__)
    _configure_logging(app)

    register_routes(app)
    register_error_handlers(app)

    @app.get("/health")
    def health_check():
        """Report liveness together with the configured payroll years."""

        return jsonify({"status": "ok", **get_configuration_metadata()})

    return app
