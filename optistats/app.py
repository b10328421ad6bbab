"""Application factory for the statistics service."""

from __future__ import annotations

import logging

from typing import Any, Mapping, Optional, Union

from flask import Flask

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("optistats")

from .config import Config
from .routes.statistics import bp as statistics_bp
from .services.api_client import StatisticsClient
from .services.formatting import Formatter


def create_app(
    config_object: Optional[Union[str, Mapping[str, Any], type]] = None,
) -> Flask:
    """Create and configure the Flask application."""
    app = Flask(__name__)
    app.config.from_object(Config)

    if isinstance(config_object, Mapping):
        app.config.from_mapping(config_object)
    elif config_object is not None:
        app.config.from_object(config_object)

    # keep payload keys in build order
    app.json.sort_keys = False

    app.extensions["formatter"] = Formatter.from_config(app.config)
    app.extensions["statistics_client"] = StatisticsClient(app.config)

    app.register_blueprint(statistics_bp)
    logger.info("Statistics service configured for %s", app.config["API_BASE_URL"])

    return app


__all__ = ["create_app"]
