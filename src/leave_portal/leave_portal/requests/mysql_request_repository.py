from __future__ import annotations

from datetime import datetime, tzinfo
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import business_tz
from ..core.enums import RequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_datetime, to_db_datetime
from .model import LeaveRequest, OvertimeRequest
from .repository import RequestRepository

_LEAVE_COLUMNS = """
    request_id, user_id, leave_type, start_at, end_at, hours, reason,
    status, reject_reason, created_at
"""

_OVERTIME_COLUMNS = """
    request_id, user_id, start_at, end_at, hours, reason,
    status, reject_reason, admin_note, created_at
"""


def _where(statuses: Optional[Iterable[RequestStatus]], user_id: Optional[int]) -> tuple[str, list[object]]:
    clauses = ["1=1"]
    params: list[object] = []

    if statuses is not None:
        values = [s.value for s in statuses]
        if not values:
            clauses.append("1=0")
        else:
            clauses.append("status IN (" + ",".join(["%s"] * len(values)) + ")")
            params.extend(values)
    if user_id is not None:
        clauses.append("user_id=%s")
        params.append(int(user_id))

    return " AND ".join(clauses), params


class MySQLRequestRepository(RequestRepository):
    def __init__(self, conn_factory: DatabaseConnection, *, tz: Optional[tzinfo] = None):
        self._conn_factory = conn_factory
        self._tz = tz or business_tz()

    def _leave(self, r: dict) -> LeaveRequest:
        return LeaveRequest(
            request_id=int(r["request_id"]),
            user_id=int(r["user_id"]),
            leave_type=r["leave_type"],
            start=from_db_datetime(r["start_at"], self._tz),
            end=from_db_datetime(r["end_at"], self._tz),
            hours=float(r["hours"]),
            reason=r["reason"],
            status=RequestStatus(r["status"]),
            created_at=from_db_datetime(r["created_at"], self._tz),
            reject_reason=r.get("reject_reason"),
        )

    def _overtime(self, r: dict) -> OvertimeRequest:
        return OvertimeRequest(
            request_id=int(r["request_id"]),
            user_id=int(r["user_id"]),
            start=from_db_datetime(r["start_at"], self._tz),
            end=from_db_datetime(r["end_at"], self._tz),
            hours=float(r["hours"]),
            reason=r["reason"],
            status=RequestStatus(r["status"]),
            created_at=from_db_datetime(r["created_at"], self._tz),
            reject_reason=r.get("reject_reason"),
            admin_note=r.get("admin_note"),
        )

    def _list(self, table: str, columns: str, statuses, user_id, limit) -> list[dict]:
        where, params = _where(statuses, user_id)
        sql = f"SELECT {columns} FROM {table} WHERE {where} ORDER BY created_at DESC, request_id DESC"
        if limit is not None:
            sql += " LIMIT %s"
            params.append(int(limit))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return fetchall(cur)

    def _update_status(self, table: str, *, request_id, status, expected, reject_reason) -> bool:
        expected_values = [s.value for s in expected]
        if not expected_values:
            return False
        placeholders = ",".join(["%s"] * len(expected_values))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                UPDATE {table}
                SET status=%s, reject_reason=COALESCE(%s, reject_reason)
                WHERE request_id=%s AND status IN ({placeholders})
                """,
                tuple([status.value, reject_reason, int(request_id)] + expected_values),
            )
            return cur.rowcount > 0

    def _update_hours(self, table: str, *, request_id: int, hours: float) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE {table} SET hours=%s WHERE request_id=%s",
                (float(hours), int(request_id)),
            )
            return cur.rowcount > 0

    def _delete(self, table: str, *, request_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"DELETE FROM {table} WHERE request_id=%s", (int(request_id),))
            return cur.rowcount > 0

    # -------- Leave requests --------
    def create_leave(
        self,
        *,
        user_id: int,
        leave_type: str,
        start: datetime,
        end: datetime,
        hours: float,
        reason: str,
        created_at: datetime,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(
                    user_id, leave_type, start_at, end_at, hours, reason, status, created_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(user_id),
                    leave_type,
                    to_db_datetime(start, self._tz),
                    to_db_datetime(end, self._tz),
                    float(hours),
                    reason,
                    RequestStatus.PENDING.value,
                    to_db_datetime(created_at, self._tz),
                ),
            )
            return int(cur.lastrowid)

    def get_leave(self, *, request_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_LEAVE_COLUMNS} FROM leave_requests WHERE request_id=%s",
                (int(request_id),),
            )
            r = fetchone(cur)
            return self._leave(r) if r else None

    def list_leaves(
        self,
        *,
        statuses: Optional[Iterable[RequestStatus]] = None,
        user_id: Optional[int] = None,
        limit: Optional[int] = 200,
    ) -> Sequence[LeaveRequest]:
        rows = self._list("leave_requests", _LEAVE_COLUMNS, statuses, user_id, limit)
        return [self._leave(r) for r in rows]

    def update_leave_status(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        expected: Iterable[RequestStatus],
        reject_reason: Optional[str] = None,
    ) -> bool:
        return self._update_status(
            "leave_requests",
            request_id=request_id,
            status=status,
            expected=expected,
            reject_reason=reject_reason,
        )

    def update_leave_hours(self, *, request_id: int, hours: float) -> bool:
        return self._update_hours("leave_requests", request_id=request_id, hours=hours)

    def delete_leave(self, *, request_id: int) -> bool:
        return self._delete("leave_requests", request_id=request_id)

    # -------- Overtime requests --------
    def create_overtime(
        self,
        *,
        user_id: int,
        start: datetime,
        end: datetime,
        hours: float,
        reason: str,
        created_at: datetime,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO overtime_requests(
                    user_id, start_at, end_at, hours, reason, status, created_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(user_id),
                    to_db_datetime(start, self._tz),
                    to_db_datetime(end, self._tz),
                    float(hours),
                    reason,
                    RequestStatus.PENDING.value,
                    to_db_datetime(created_at, self._tz),
                ),
            )
            return int(cur.lastrowid)

    def get_overtime(self, *, request_id: int) -> Optional[OvertimeRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_OVERTIME_COLUMNS} FROM overtime_requests WHERE request_id=%s",
                (int(request_id),),
            )
            r = fetchone(cur)
            return self._overtime(r) if r else None

    def list_overtimes(
        self,
        *,
        statuses: Optional[Iterable[RequestStatus]] = None,
        user_id: Optional[int] = None,
        limit: Optional[int] = 200,
    ) -> Sequence[OvertimeRequest]:
        rows = self._list("overtime_requests", _OVERTIME_COLUMNS, statuses, user_id, limit)
        return [self._overtime(r) for r in rows]

    def update_overtime_status(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        expected: Iterable[RequestStatus],
        reject_reason: Optional[str] = None,
    ) -> bool:
        return self._update_status(
            "overtime_requests",
            request_id=request_id,
            status=status,
            expected=expected,
            reject_reason=reject_reason,
        )

    def update_overtime_hours(self, *, request_id: int, hours: float) -> bool:
        return self._update_hours("overtime_requests", request_id=request_id, hours=hours)

    def correct_overtime(
        self,
        *,
        request_id: int,
        start: datetime,
        end: datetime,
        hours: float,
        admin_note: str,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE overtime_requests
                SET start_at=%s, end_at=%s, hours=%s, admin_note=%s
                WHERE request_id=%s
                """,
                (
                    to_db_datetime(start, self._tz),
                    to_db_datetime(end, self._tz),
                    float(hours),
                    admin_note,
                    int(request_id),
                ),
            )
            return cur.rowcount > 0

    def delete_overtime(self, *, request_id: int) -> bool:
        return self._delete("overtime_requests", request_id=request_id)
