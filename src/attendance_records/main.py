from __future__ import annotations

import logging
from zoneinfo import ZoneInfo

from dotenv import load_dotenv
from flask import Flask

from .config import get_settings_module, load_settings
from .container import build_container
from .database.bootstrap import ensure_indexes, list_collections, ping
from .attendance.controller import register as register_attendance

logger = logging.getLogger(__name__)


def create_app() -> Flask:
    load_dotenv(override=False)
    settings = load_settings()

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = Flask(__name__)
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["HTTP_PORT"] = int(getattr(settings, "HTTP_PORT", 8080))

    # Missing tz data is a startup failure, not a per-request one.
    display_tz = ZoneInfo(getattr(settings, "DISPLAY_TIMEZONE", "Asia/Kolkata"))

    mongo_config = {
        "uri": settings.MONGO_URI,
        "database": settings.MONGO_DB_NAME,
        "collection": settings.MONGO_COLLECTION,
        "connect_timeout_ms": getattr(settings, "MONGO_CONNECT_TIMEOUT_MS", 10000),
        "operation_timeout": getattr(settings, "MONGO_OPERATION_TIMEOUT", 10),
    }
    logger.info(
        "settings=%s db=%s/%s.%s",
        get_settings_module(), settings.MONGO_URI, settings.MONGO_DB_NAME, settings.MONGO_COLLECTION,
    )

    container = build_container(
        mongo_config=mongo_config,
        display_tz=display_tz,
        display_label=getattr(settings, "DISPLAY_TIMEZONE_LABEL", "IST"),
    )

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        ping(container.conn)
        ensure_indexes(container.conn)
        if app.config["DEBUG"]:
            logger.debug("collections=%s", list_collections(container.conn))

    register_attendance(app, container)

    return app


def run() -> None:
    app = create_app()
    port = app.config["HTTP_PORT"]
    logger.info("HTTP gateway is listening on port %d", port)
    app.run(host="0.0.0.0", port=port, debug=app.config["DEBUG"])
