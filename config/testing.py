import os

from .config import BUSINESS_TIMEZONE, db_config, env_flag

SECRET_KEY = "test-secret"

DB_CONFIG = db_config(password_default="12345")

DEBUG = False
TESTING = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "0")
RECALCULATE_APPROVED = True
CLOCK_OFFSET_SECONDS = 0.0
