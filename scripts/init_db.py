from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for p in (REPO_ROOT, REPO_ROOT / "src" / "staff_portal"):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from config import get_settings_module

from staff_portal.database.bootstrap import apply_schema, ensure_admin_user, list_tables

logger = logging.getLogger("staff_portal.scripts.init_db")


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")

    admin_email = getattr(settings, "ADMIN_EMAIL", "")
    admin_password = getattr(settings, "ADMIN_PASSWORD", "")
    if admin_email and admin_password:
        ensure_admin_user(db_config, email=admin_email, password=admin_password)

    tables = list_tables(db_config)
    logger.info(
        "applied schema.sql -> %s@%s:%s/%s (tables=%d)",
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
        len(tables),
    )


if __name__ == "__main__":
    main()
