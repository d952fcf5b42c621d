import os

from .config import Config

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")
DB_CONFIG = Config.db_config()

JWT_ALGORITHM = Config.JWT_ALGORITHM
TOKEN_TTL_MINUTES = Config.TOKEN_TTL_MINUTES

ADVANCE_NOTICE_DAYS = Config.ADVANCE_NOTICE_DAYS
MONTHLY_PAID_LEAVE_QUOTA = Config.MONTHLY_PAID_LEAVE_QUOTA
WEEK_START = Config.WEEK_START

CORS_ALLOW_ORIGIN = Config.CORS_ALLOW_ORIGIN
LOG_LEVEL = Config.LOG_LEVEL

ADMIN_EMAIL = Config.ADMIN_EMAIL
ADMIN_PASSWORD = Config.ADMIN_PASSWORD

DEBUG = False

AUTO_INIT_DB = Config.AUTO_INIT_DB
AUTO_SEED_DB = Config.AUTO_SEED_DB
