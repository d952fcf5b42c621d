from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .database.bootstrap import apply_schema, apply_seed_sql, ensure_admin_user, ensure_demo_users, list_tables

from .container import Container, build_container
from .approvals.controller import register as register_approvals
from .attendance.controller import register as register_attendance
from .employees.controller import register as register_employees
from .leaves.controller import register as register_leaves
from .users.controller import register as register_users

logger = logging.getLogger("staff_portal")

CORS_ALLOW_HEADERS = "authorization, x-client-info, apikey, content-type"


def _configure_logging(level_name: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level_name).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(container: Optional[Container] = None, *, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["CORS_ALLOW_ORIGIN"] = getattr(settings, "CORS_ALLOW_ORIGIN", "*")

    _configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        database_dir = Path(__file__).resolve().parents[3] / "database"
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=database_dir / "schema.sql")
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=database_dir / "seed.sql")
            ensure_demo_users(db_config)
            logger.info("demo seed ready")

        admin_email = getattr(settings, "ADMIN_EMAIL", None)
        admin_password = getattr(settings, "ADMIN_PASSWORD", None)
        if admin_email and admin_password:
            ensure_admin_user(db_config, email=admin_email, password=admin_password)

        container = build_container(db_config=db_config, settings=settings)

    app.extensions["staff_portal"] = container

    @app.after_request
    def add_cors_headers(response):
        response.headers["Access-Control-Allow-Origin"] = app.config["CORS_ALLOW_ORIGIN"]
        response.headers["Access-Control-Allow-Headers"] = CORS_ALLOW_HEADERS
        response.headers["Access-Control-Allow-Methods"] = "GET, POST, PATCH, OPTIONS"
        return response

    register_users(app, container)
    register_employees(app, container)
    register_attendance(app, container)
    register_leaves(app, container)
    register_approvals(app, container)

    return app
