import os

from .config import BUSINESS_TIMEZONE, db_config, env_flag, env_offset

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = db_config()

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "0")
RECALCULATE_APPROVED = env_flag("RECALCULATE_APPROVED", "1")

# Production starts unsynced unless an offset is given; POST /admin/clock/sync to sync.
CLOCK_OFFSET_SECONDS = env_offset("CLOCK_OFFSET_SECONDS", "")
