from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.datetime_utils import parse_wall_clock
from .container import Container, build_container
from .corrections.controller import register as register_corrections
from .core.constants import DEFAULT_LATE_THRESHOLD
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .database.connection import DBConfig
from .leaves.controller import register as register_leaves
from .shifts.controller import register as register_shifts

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    threshold_s = getattr(settings, "LATE_THRESHOLD", None)
    late_threshold = parse_wall_clock(threshold_s) if threshold_s else DEFAULT_LATE_THRESHOLD

    if container is None:
        logger.info("settings=%s db=%s", settings_module, DBConfig.from_dict(db_config).describe())

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config)
            logger.info("demo seed ready")

        container = build_container(db_config=db_config, late_threshold=late_threshold)

    # report the threshold the classifier actually uses
    app.config["LATE_THRESHOLD"] = container.attendance_service.late_threshold.strftime("%H:%M")

    @app.route("/health", endpoint="health")
    def health():
        return jsonify({"status": "ok", "lateThreshold": app.config["LATE_THRESHOLD"]})

    register_shifts(app, container)
    register_attendance(app, container)
    register_leaves(app, container)
    register_corrections(app, container)

    return app
