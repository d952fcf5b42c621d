import os


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "dev-secret-key"

    # Database
    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "staff_portal")

    # Bearer tokens
    JWT_ALGORITHM = os.environ.get("JWT_ALGORITHM", "HS256")
    TOKEN_TTL_MINUTES = int(os.environ.get("TOKEN_TTL_MINUTES", str(60 * 12)))

    # Leave rules
    ADVANCE_NOTICE_DAYS = int(os.environ.get("ADVANCE_NOTICE_DAYS", "3"))
    MONTHLY_PAID_LEAVE_QUOTA = int(os.environ.get("MONTHLY_PAID_LEAVE_QUOTA", "2"))
    # 0 = Monday ... 6 = Sunday
    WEEK_START = int(os.environ.get("WEEK_START", "0"))

    CORS_ALLOW_ORIGIN = os.environ.get("CORS_ALLOW_ORIGIN", "*")
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Bootstrap admin account (skipped when either is empty)
    ADMIN_EMAIL = os.environ.get("ADMIN_EMAIL", "")
    ADMIN_PASSWORD = os.environ.get("ADMIN_PASSWORD", "")

    # Dev helpers
    AUTO_INIT_DB = bool(int(os.environ.get("AUTO_INIT_DB", "0")))
    AUTO_SEED_DB = bool(int(os.environ.get("AUTO_SEED_DB", "0")))

    @classmethod
    def db_config(cls) -> dict:
        return {
            "host": cls.DB_HOST,
            "port": cls.DB_PORT,
            "user": cls.DB_USER,
            "password": cls.DB_PASSWORD,
            "database": cls.DB_NAME,
        }
