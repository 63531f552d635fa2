import os


def env_flag(name: str, default: str = "0") -> bool:
    return bool(int(os.getenv(name, default)))


def env_offset(name: str, default: str = "0"):
    """Clock offset in seconds; an empty value leaves the clock unsynced."""
    value = os.getenv(name, default).strip()
    return float(value) if value else None


def db_config(*, password_default: str = "") -> dict:
    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", password_default),
        "database": os.getenv("DB_NAME", "leave_portal"),
    }


BUSINESS_TIMEZONE = os.getenv("BUSINESS_TIMEZONE", "Asia/Taipei")
