"""
Stub Automation API - Application Factory.

A Flask stand-in for the remote companies/employees service, used when the
suite is not pointed at a live host.  State lives in an in-memory
``ResourceStore`` attached to the app, so each app instance starts empty.
"""

from __future__ import annotations

import logging

from flask import Flask

from automation_client.resources import RESOURCES
from config import get_config

from .store import ResourceStore

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(config_name: str | None = None) -> Flask:
    """
    Construct and configure the stub Flask application.

    Args:
        config_name: Optional environment key ("testing", "live").  When
            None, the API_TEST_ENV environment variable is consulted.

    Returns:
        A Flask application serving the automation API contract.
    """
    app = Flask(__name__)
    config_class = get_config(config_name)
    app.config.from_object(config_class)
    # LiveConfig carries no signing key; the stub always needs one.
    app.config.setdefault("STUB_SECRET_KEY", get_config("testing").STUB_SECRET_KEY)
    app.config.setdefault(
        "STUB_TOKEN_EXPIRY_SECONDS", get_config("testing").STUB_TOKEN_EXPIRY_SECONDS
    )

    logger.info("Creating stub app with config: %s", config_class.__name__)

    app.extensions["automation_store"] = ResourceStore(RESOURCES)

    from .routes import stub_bp

    app.register_blueprint(stub_bp)
    return app
