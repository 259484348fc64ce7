"""Flask app factory — creates and configures the JSON API."""

from __future__ import annotations

from flask import Flask

from antenna.config import AntennaConfig


def create_app(config: AntennaConfig, clock=None) -> Flask:
    """Create the Flask app with config values and registered routes.

    Args:
        config: AntennaConfig with openclaw_dir, port and host.
        clock: Optional clock handed to every AggregationClient (tests pin it).

    Returns:
        Configured Flask application.
    """
    app = Flask(__name__)

    app.config["OPENCLAW_DIR"] = config.openclaw_dir
    app.config["CLOCK"] = clock

    from antenna.web.routes import bp

    app.register_blueprint(bp)

    return app
