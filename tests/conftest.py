from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, timedelta, timezone
from typing import Optional

import pytest

from src.leave_portal.leave_portal.clock.service import CorrectedClock
from src.leave_portal.leave_portal.core.enums import RequestStatus, Role
from src.leave_portal.leave_portal.holidays.model import Holiday
from src.leave_portal.leave_portal.holidays.service import HolidayService
from src.leave_portal.leave_portal.hours.calculator.leave_calculator import LeaveHoursCalculator
from src.leave_portal.leave_portal.hours.calculator.overtime_calculator import OvertimeHoursCalculator
from src.leave_portal.leave_portal.hours.model import TimeSpan
from src.leave_portal.leave_portal.requests.model import LeaveRequest, OvertimeRequest
from src.leave_portal.leave_portal.requests.recalculation import HoursRecalculationService
from src.leave_portal.leave_portal.requests.service import RequestService
from src.leave_portal.leave_portal.users.model import Employee
from src.leave_portal.leave_portal.users.service import UserService

# 2024-02-29 10:00 Taipei
FIXED_UTC_NOW = datetime(2024, 2, 29, 2, 0, tzinfo=timezone.utc)


class InMemoryRequests:
    def __init__(self):
        self._next_id = 1
        self.leaves: dict[int, LeaveRequest] = {}
        self.overtimes: dict[int, OvertimeRequest] = {}

    def _take_id(self) -> int:
        rid = self._next_id
        self._next_id += 1
        return rid

    @staticmethod
    def _select(items, statuses, user_id, limit):
        wanted = set(statuses) if statuses is not None else None
        out = [
            r
            for r in items
            if (wanted is None or r.status in wanted) and (user_id is None or r.user_id == int(user_id))
        ]
        out.sort(key=lambda r: r.request_id, reverse=True)
        return out if limit is None else out[:limit]

    # seeding helpers
    def add_leave(self, start, end, *, hours=0.0, status=RequestStatus.PENDING, user_id=2, leave_type="事假") -> LeaveRequest:
        span = TimeSpan.parse(start, end)
        rid = self._take_id()
        self.leaves[rid] = LeaveRequest(
            request_id=rid,
            user_id=user_id,
            leave_type=leave_type,
            start=span.start,
            end=span.end,
            hours=hours,
            reason="seed",
            status=status,
            created_at=FIXED_UTC_NOW,
        )
        return self.leaves[rid]

    def add_overtime(self, start, end, *, hours=0.0, status=RequestStatus.PENDING, user_id=2) -> OvertimeRequest:
        span = TimeSpan.parse(start, end)
        rid = self._take_id()
        self.overtimes[rid] = OvertimeRequest(
            request_id=rid,
            user_id=user_id,
            start=span.start,
            end=span.end,
            hours=hours,
            reason="seed",
            status=status,
            created_at=FIXED_UTC_NOW,
        )
        return self.overtimes[rid]

    # leave requests
    def create_leave(self, *, user_id, leave_type, start, end, hours, reason, created_at):
        rid = self._take_id()
        self.leaves[rid] = LeaveRequest(
            request_id=rid,
            user_id=int(user_id),
            leave_type=leave_type,
            start=start,
            end=end,
            hours=hours,
            reason=reason,
            status=RequestStatus.PENDING,
            created_at=created_at,
        )
        return rid

    def get_leave(self, *, request_id):
        return self.leaves.get(int(request_id))

    def list_leaves(self, *, statuses=None, user_id=None, limit=200):
        return self._select(self.leaves.values(), statuses, user_id, limit)

    def update_leave_status(self, *, request_id, status, expected, reject_reason=None):
        req = self.leaves.get(int(request_id))
        if not req or req.status not in set(expected):
            return False
        self.leaves[req.request_id] = replace(req, status=status, reject_reason=reject_reason or req.reject_reason)
        return True

    def update_leave_hours(self, *, request_id, hours):
        req = self.leaves.get(int(request_id))
        if not req:
            return False
        self.leaves[req.request_id] = replace(req, hours=hours)
        return True

    def delete_leave(self, *, request_id):
        return self.leaves.pop(int(request_id), None) is not None

    # overtime requests
    def create_overtime(self, *, user_id, start, end, hours, reason, created_at):
        rid = self._take_id()
        self.overtimes[rid] = OvertimeRequest(
            request_id=rid,
            user_id=int(user_id),
            start=start,
            end=end,
            hours=hours,
            reason=reason,
            status=RequestStatus.PENDING,
            created_at=created_at,
        )
        return rid

    def get_overtime(self, *, request_id):
        return self.overtimes.get(int(request_id))

    def list_overtimes(self, *, statuses=None, user_id=None, limit=200):
        return self._select(self.overtimes.values(), statuses, user_id, limit)

    def update_overtime_status(self, *, request_id, status, expected, reject_reason=None):
        req = self.overtimes.get(int(request_id))
        if not req or req.status not in set(expected):
            return False
        self.overtimes[req.request_id] = replace(req, status=status, reject_reason=reject_reason or req.reject_reason)
        return True

    def update_overtime_hours(self, *, request_id, hours):
        req = self.overtimes.get(int(request_id))
        if not req:
            return False
        self.overtimes[req.request_id] = replace(req, hours=hours)
        return True

    def correct_overtime(self, *, request_id, start, end, hours, admin_note):
        req = self.overtimes.get(int(request_id))
        if not req:
            return False
        self.overtimes[req.request_id] = replace(req, start=start, end=end, hours=hours, admin_note=admin_note)
        return True

    def delete_overtime(self, *, request_id):
        return self.overtimes.pop(int(request_id), None) is not None


class InMemoryHolidays:
    def __init__(self, *days: date):
        self._next_id = 1
        self.items: dict[int, Holiday] = {}
        for d in days:
            self.create(holiday_date=d, note="seed")

    def list_all(self):
        return sorted(self.items.values(), key=lambda h: (h.holiday_date, h.holiday_id))

    def get(self, *, holiday_id):
        return self.items.get(int(holiday_id))

    def create(self, *, holiday_date, note):
        hid = self._next_id
        self._next_id += 1
        self.items[hid] = Holiday(holiday_id=hid, holiday_date=holiday_date, note=note)
        return hid

    def delete(self, *, holiday_id):
        return self.items.pop(int(holiday_id), None) is not None


class InMemoryUsers:
    def __init__(self, *employees: Employee):
        self._by_id = {e.user_id: e for e in employees}

    def get_by_id(self, user_id: int) -> Optional[Employee]:
        return self._by_id.get(int(user_id))

    def list_active(self):
        return sorted(self._by_id.values(), key=lambda e: (e.dept, e.name, e.user_id))

    def update_quotas(self, *, user_id, quota_annual, quota_birthday, quota_comp):
        employee = self._by_id.get(int(user_id))
        if not employee:
            return False
        self._by_id[employee.user_id] = replace(
            employee,
            quota_annual=quota_annual,
            quota_birthday=quota_birthday,
            quota_comp=quota_comp,
        )
        return True


@pytest.fixture
def requests_repo():
    return InMemoryRequests()


@pytest.fixture
def holidays_repo():
    return InMemoryHolidays()


@pytest.fixture
def users_repo():
    return InMemoryUsers(
        Employee(user_id=1, name="System Admin", role=Role.ADMIN),
        Employee(user_id=2, name="Test Employee", role=Role.EMPLOYEE, quota_annual=16, quota_birthday=8),
        Employee(user_id=3, name="Other Employee", role=Role.EMPLOYEE),
    )


@pytest.fixture
def clock():
    return CorrectedClock(offset=timedelta(0), local_now=lambda: FIXED_UTC_NOW)


@pytest.fixture
def recalculation(requests_repo):
    return HoursRecalculationService(
        requests_repo,
        leave_calculator=LeaveHoursCalculator(),
        overtime_calculator=OvertimeHoursCalculator(),
    )


@pytest.fixture
def holiday_service(holidays_repo, recalculation):
    return HolidayService(holidays_repo, recalculation)


@pytest.fixture
def request_service(requests_repo, users_repo, holidays_repo, clock):
    return RequestService(requests_repo, users_repo, holidays_repo, clock=clock)


@pytest.fixture
def user_service(users_repo):
    return UserService(users_repo)
