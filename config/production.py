import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_attendance"),
}

TIMEZONE = os.getenv("TIMEZONE", "UTC")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
READ_RETRY_ATTEMPTS = int(os.getenv("READ_RETRY_ATTEMPTS", "3"))

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
