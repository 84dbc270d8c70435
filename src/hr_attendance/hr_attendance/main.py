from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .core.constants import DEFAULT_READ_RETRY_ATTEMPTS, DEFAULT_TIMEZONE
from .database.bootstrap import apply_schema, list_tables
from .leave.controller import register as register_leave
from .reports.controller import register as register_reports

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(*, settings_module: Optional[str] = None, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["TIMEZONE"] = getattr(settings, "TIMEZONE", DEFAULT_TIMEZONE)

    logger.info(
        "settings=%s db=%s@%s:%s/%s tz=%s",
        settings_module,
        db_config.get("user"), db_config.get("host"), db_config.get("port", 3306), db_config.get("database"),
        app.config["TIMEZONE"],
    )

    if container is None:
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config)
            logger.info("schema ready (tables=%s)", len(list_tables(db_config)))
        container = build_container(
            db_config=db_config,
            read_retry_attempts=int(getattr(settings, "READ_RETRY_ATTEMPTS", DEFAULT_READ_RETRY_ATTEMPTS)),
        )

    register_attendance(app, container)
    register_reports(app, container)
    register_leave(app, container)

    return app
