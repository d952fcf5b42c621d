import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "staff_portal_test"),
}

JWT_ALGORITHM = "HS256"
TOKEN_TTL_MINUTES = 30

ADVANCE_NOTICE_DAYS = 3
MONTHLY_PAID_LEAVE_QUOTA = 2
WEEK_START = 0

CORS_ALLOW_ORIGIN = "*"
LOG_LEVEL = "WARNING"

ADMIN_EMAIL = ""
ADMIN_PASSWORD = ""

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
AUTO_SEED_DB = False
