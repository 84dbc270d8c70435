import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_attendance"),
}

# Reference time zone for work days when the session carries none.
TIMEZONE = os.getenv("TIMEZONE", "UTC")

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
READ_RETRY_ATTEMPTS = int(os.getenv("READ_RETRY_ATTEMPTS", "3"))

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
