from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import UserRepository

_COLUMNS = "user_id, name, role, dept, quota_annual, quota_birthday, quota_comp"


def _row_to_employee(row: dict) -> Employee:
    return Employee(
        user_id=int(row["user_id"]),
        name=row["name"],
        role=Role(row["role"]),
        dept=row.get("dept") or "",
        quota_annual=float(row.get("quota_annual") or 0),
        quota_birthday=float(row.get("quota_birthday") or 0),
        quota_comp=float(row.get("quota_comp") or 0),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM users
                WHERE user_id=%s AND deleted=0
                """,
                (int(user_id),),
            )
            row = fetchone(cur)
            return _row_to_employee(row) if row else None

    def list_active(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM users
                WHERE deleted=0
                ORDER BY dept, name, user_id
                """
            )
            return [_row_to_employee(r) for r in fetchall(cur)]

    def update_quotas(self, *, user_id: int, quota_annual: float, quota_birthday: float, quota_comp: float) -> bool:
        # FOUND_ROWS client flag: rowcount counts matched rows even when values are unchanged.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE users
                SET quota_annual=%s, quota_birthday=%s, quota_comp=%s
                WHERE user_id=%s AND deleted=0
                """,
                (quota_annual, quota_birthday, quota_comp, int(user_id)),
            )
            return cur.rowcount > 0
