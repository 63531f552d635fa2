from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime, tzinfo
from typing import Any, Dict, List, Optional

from ..common.datetime_utils import to_business_time
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def to_db_datetime(value: Optional[datetime], tz: tzinfo) -> Optional[datetime]:
    """DATETIME columns hold naive business-local wall-clock time."""
    if value is None:
        return None
    return to_business_time(value, tz).replace(tzinfo=None)


def from_db_datetime(value: Optional[datetime], tz: tzinfo) -> Optional[datetime]:
    if value is None:
        return None
    return to_business_time(value, tz)
