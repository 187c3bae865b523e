from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .api.controller import register as register_api
from .container import build_container
from .core.exceptions import ConfigurationError
from .snapshot.loader import load_snapshot

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(debug: bool = False) -> None:
    """Install the process-wide log format; a no-op when handlers already exist."""
    logging.basicConfig(level=logging.DEBUG if debug else logging.INFO, format=LOG_FORMAT)


def create_app() -> Flask:
    load_dotenv(override=False)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    debug = bool(getattr(settings, "DEBUG", False))
    configure_logging(debug)

    tenant_id = getattr(settings, "TENANT_ID", None)
    if not tenant_id:
        raise ConfigurationError("TENANT_ID must be set")
    snapshot_path = getattr(settings, "POLICY_SNAPSHOT_PATH", None)
    if not snapshot_path:
        raise ConfigurationError("POLICY_SNAPSHOT_PATH must be set")

    app = Flask(__name__)
    app.config["DEBUG"] = debug
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["TENANT_ID"] = tenant_id
    app.json.sort_keys = bool(getattr(settings, "JSON_SORT_KEYS", False))

    logger.info("settings=%s tenant=%s snapshot=%s", settings_module, tenant_id, snapshot_path)

    repository = load_snapshot(snapshot_path, tenant_id)
    container = build_container(repository=repository)
    register_api(app, container)

    return app
