from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from .clock.service import CorrectedClock
from .common.datetime_utils import business_tz
from .database.connection import DBConfig, DatabaseConnection
from .holidays.mysql_holiday_repository import MySQLHolidayRepository
from .holidays.service import HolidayService
from .hours.calculator.leave_calculator import LeaveHoursCalculator
from .hours.calculator.overtime_calculator import OvertimeHoursCalculator
from .requests.mysql_request_repository import MySQLRequestRepository
from .requests.recalculation import HoursRecalculationService
from .requests.service import RequestService
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import UserService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection
    clock: CorrectedClock

    users_repo: MySQLUserRepository
    holidays_repo: MySQLHolidayRepository
    requests_repo: MySQLRequestRepository

    recalculation_service: HoursRecalculationService
    holiday_service: HolidayService
    request_service: RequestService
    user_service: UserService


def build_container(
    *,
    db_config: dict,
    timezone_name: Optional[str] = None,
    recalculate_approved: bool = True,
    clock_offset_seconds: Optional[float] = None,
) -> Container:
    tz = business_tz(timezone_name)
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    offset = timedelta(seconds=clock_offset_seconds) if clock_offset_seconds is not None else None
    clock = CorrectedClock(offset=offset, tz=tz)

    users_repo = MySQLUserRepository(conn)
    holidays_repo = MySQLHolidayRepository(conn)
    requests_repo = MySQLRequestRepository(conn, tz=tz)

    leave_calculator = LeaveHoursCalculator(tz=tz)
    overtime_calculator = OvertimeHoursCalculator()

    recalculation_service = HoursRecalculationService(
        requests_repo,
        leave_calculator=leave_calculator,
        overtime_calculator=overtime_calculator,
        include_approved=recalculate_approved,
    )
    holiday_service = HolidayService(holidays_repo, recalculation_service, tz=tz)
    request_service = RequestService(
        requests_repo,
        users_repo,
        holidays_repo,
        clock=clock,
        leave_calculator=leave_calculator,
        overtime_calculator=overtime_calculator,
        tz=tz,
    )
    user_service = UserService(users_repo)

    return Container(
        conn=conn,
        clock=clock,
        users_repo=users_repo,
        holidays_repo=holidays_repo,
        requests_repo=requests_repo,
        recalculation_service=recalculation_service,
        holiday_service=holiday_service,
        request_service=request_service,
        user_service=user_service,
    )
