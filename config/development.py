import os

from .config import Config

SECRET_KEY = Config.SECRET_KEY
DB_CONFIG = Config.db_config()

JWT_ALGORITHM = Config.JWT_ALGORITHM
TOKEN_TTL_MINUTES = Config.TOKEN_TTL_MINUTES

ADVANCE_NOTICE_DAYS = Config.ADVANCE_NOTICE_DAYS
MONTHLY_PAID_LEAVE_QUOTA = Config.MONTHLY_PAID_LEAVE_QUOTA
WEEK_START = Config.WEEK_START

CORS_ALLOW_ORIGIN = Config.CORS_ALLOW_ORIGIN
LOG_LEVEL = "DEBUG"

ADMIN_EMAIL = Config.ADMIN_EMAIL or "admin@example.com"
ADMIN_PASSWORD = Config.ADMIN_PASSWORD or "admin123"

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo data on startup
AUTO_SEED_DB = Config.AUTO_SEED_DB
