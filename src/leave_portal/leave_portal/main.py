from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import build_container
from .database.bootstrap import apply_schema, ensure_default_users, list_tables
from .clock.controller import register as register_clock
from .holidays.controller import register as register_holidays
from .requests.controller import register as register_requests
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=level.upper(),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    _configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["BUSINESS_TIMEZONE"] = getattr(settings, "BUSINESS_TIMEZONE", "Asia/Taipei")

    logger.info(
        "settings=%s db=%s@%s:%s/%s tz=%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
        app.config["BUSINESS_TIMEZONE"],
    )

    container = build_container(
        db_config=db_config,
        timezone_name=app.config["BUSINESS_TIMEZONE"],
        recalculate_approved=bool(getattr(settings, "RECALCULATE_APPROVED", True)),
        clock_offset_seconds=getattr(settings, "CLOCK_OFFSET_SECONDS", None),
    )

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(container.conn, db_config["database"])
        ensure_default_users(container.conn)
        logger.info("Schema ready (tables=%d)", len(list_tables(container.conn)))

    register_requests(app, container)
    register_holidays(app, container)
    register_clock(app, container)
    register_users(app, container)

    return app
