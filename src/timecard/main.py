from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .attendance.controller import register as register_attendance
from .break_policy.controller import register as register_break_policy
from .common.logging_setup import configure_logging
from .common.web import ok
from .container import Container, build_container
from .daily_reports.controller import register as register_daily_reports
from .database.bootstrap import apply_schema
from .locations.controller import register as register_locations
from .punches.controller import register as register_punches
from .reports.controller import register as register_reports
from .settings import get_settings_module
from .shift_templates.controller import register as register_shift_templates
from .shifts.controller import register as register_shifts
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def create_app(*, settings_module: Optional[str] = None, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    db_config = getattr(settings, "DB_CONFIG")

    if container is None:
        container = build_container(
            db_config=db_config,
            grace_minutes=int(getattr(settings, "LATE_GRACE_MINUTES", 0)),
            status_labels=getattr(settings, "STATUS_LABELS", None),
        )
        if getattr(settings, "AUTO_INIT_DB", False) and container.conn is not None:
            apply_schema(container.conn)

    logger.info(
        "timecard starting settings=%s db=%s@%s:%s/%s",
        settings_module, db_config.get("user"), db_config.get("host"), db_config.get("port", 3306), db_config.get("database"),
    )

    register_users(app, container)
    register_punches(app, container)
    register_shifts(app, container)
    register_attendance(app, container)
    register_break_policy(app, container)
    register_daily_reports(app, container)
    register_locations(app, container)
    register_shift_templates(app, container)
    register_reports(app, container)

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return ok(status="ok")

    return app
