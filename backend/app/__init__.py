"""Application factory and app-wide configuration."""

#setup: pip install -e ".[test]"
#setup: flask --app backend.app run --port 5000 --debug

from typing import Optional

from flask import Flask
from flask_cors import CORS

from backend import config
from backend.app.api.routes import api_bp
from backend.core.clock import Clock, SystemClock
from backend.logging_config import configure_logging
from backend.models import default_rules


def create_app(clock: Optional[Clock] = None) -> Flask:
    """Build the Flask app instance."""
    configure_logging(config.LOG_LEVEL)

    app = Flask(__name__)
    app.config["CLOCK"] = clock or SystemClock(config.TIMEZONE)
    app.config["EXPIRATION_SCAN_LIMIT"] = config.EXPIRATION_SCAN_LIMIT
    # invalid renewal limits fail here, not on the first request
    app.config["RENEWAL_RULES"] = default_rules()

    CORS(
        app,
        resources={r"/api/*": {"origins": config.CORS_ORIGINS}},
        supports_credentials=True,
    )

    app.register_blueprint(api_bp, url_prefix="/api")
    app.logger.info("compliance backend ready (jurisdiction=%s)", config.JURISDICTION)
    return app
