import os

from .config import BUSINESS_TIMEZONE, db_config, env_flag, env_offset

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = db_config(password_default="123456")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "1")

# Approved requests follow holiday edits too; set to 0 to freeze them at approval.
RECALCULATE_APPROVED = env_flag("RECALCULATE_APPROVED", "1")

CLOCK_OFFSET_SECONDS = env_offset("CLOCK_OFFSET_SECONDS")
