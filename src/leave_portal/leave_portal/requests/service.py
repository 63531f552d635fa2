from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Optional

from ..clock.service import CorrectedClock
from ..common.datetime_utils import business_tz
from ..common.validators import require_choice, require_non_empty
from ..core.constants import DEFAULT_LIST_LIMIT, LEAVE_TYPES, QUOTA_LEAVE_TYPES
from ..core.enums import RequestStatus, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..holidays.model import HolidayCalendar
from ..holidays.repository import HolidayRepository
from ..hours.calculator.base import HoursCalculator
from ..hours.calculator.leave_calculator import LeaveHoursCalculator
from ..hours.calculator.overtime_calculator import OvertimeHoursCalculator
from ..hours.model import TimeSpan
from ..users.repository import UserRepository
from .repository import RequestRepository

logger = logging.getLogger(__name__)

# Requests that still draw on an employee's quota.
_QUOTA_STATUSES = (RequestStatus.PENDING, RequestStatus.APPROVED)
_CANCELLABLE = (RequestStatus.PENDING, RequestStatus.APPROVED)
_DECIDABLE = (RequestStatus.PENDING,)


@dataclass(frozen=True)
class QuotaBalance:
    leave_type: str
    total: float
    used: float

    @property
    def remaining(self) -> float:
        return self.total - self.used


class RequestService:
    def __init__(
        self,
        requests: RequestRepository,
        users: UserRepository,
        holidays: HolidayRepository,
        *,
        clock: CorrectedClock,
        leave_calculator: Optional[HoursCalculator] = None,
        overtime_calculator: Optional[HoursCalculator] = None,
        tz: Optional[tzinfo] = None,
    ):
        self._requests = requests
        self._users = users
        self._holidays = holidays
        self._clock = clock
        self._tz = tz or business_tz()
        self._leave_calculator = leave_calculator or LeaveHoursCalculator(tz=self._tz)
        self._overtime_calculator = overtime_calculator or OvertimeHoursCalculator()

    def _calendar(self) -> HolidayCalendar:
        return HolidayCalendar.from_holidays(self._holidays.list_all(), tz=self._tz)

    def _span(self, start: str, end: str) -> TimeSpan:
        span = TimeSpan.parse(start, end, tz=self._tz)
        if span.end < span.start:
            raise ValidationError("End time must not be before start time")
        return span

    def _now(self) -> datetime:
        return self._clock.now()

    # -------- Hours --------
    def preview_leave_hours(self, *, start: str, end: str) -> float:
        """Hours a leave over this span would bill, without saving anything."""
        return self._leave_calculator.hours(self._span(start, end), self._calendar())

    def preview_overtime_hours(self, *, start: str, end: str) -> float:
        return self._overtime_calculator.hours(self._span(start, end), self._calendar())

    def quota_balance(self, *, user_id: int, leave_type: str) -> Optional[QuotaBalance]:
        """Quota of a quota-bearing leave type; ``None`` for unlimited types."""
        field_name = QUOTA_LEAVE_TYPES.get(leave_type)
        if field_name is None:
            return None

        employee = self._users.get_by_id(int(user_id))
        if not employee:
            raise NotFoundError("Employee not found")

        used = sum(
            r.hours
            for r in self._requests.list_leaves(statuses=_QUOTA_STATUSES, user_id=int(user_id), limit=None)
            if r.leave_type == leave_type
        )
        return QuotaBalance(leave_type=leave_type, total=float(getattr(employee, field_name) or 0), used=used)

    # -------- Leave requests --------
    def create_leave(
        self,
        *,
        current_role: Role,
        user_id: int,
        leave_type: str,
        start: str,
        end: str,
        reason: str,
    ) -> int:
        if current_role != Role.EMPLOYEE:
            raise AuthorizationError("Only employees can request leave")

        leave_type = require_choice(leave_type, "Leave type", LEAVE_TYPES)
        span = self._span(start, end)
        reason = require_non_empty(reason, "Reason")

        hours = self._leave_calculator.hours(span, self._calendar())
        if hours <= 0:
            raise ValidationError("The selected period contains no working hours")

        balance = self.quota_balance(user_id=user_id, leave_type=leave_type)
        if balance is not None and hours > balance.remaining:
            raise ValidationError(f"{leave_type} quota exceeded (remaining: {balance.remaining:g}hr, requested: {hours:g}hr)")

        request_id = self._requests.create_leave(
            user_id=int(user_id),
            leave_type=leave_type,
            start=span.start,
            end=span.end,
            hours=hours,
            reason=reason,
            created_at=self._now(),
        )
        logger.info("Leave #%d created for user %d: %s %.1fh", request_id, int(user_id), leave_type, hours)
        return request_id

    def approve_leave(self, *, current_role: Role, request_id: int) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Permission denied")

        ok = self._requests.update_leave_status(
            request_id=int(request_id),
            status=RequestStatus.APPROVED,
            expected=_DECIDABLE,
        )
        if not ok:
            raise ValidationError("Request not found or already processed")

    def reject_leave(self, *, current_role: Role, request_id: int, reject_reason: str = "") -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Permission denied")

        ok = self._requests.update_leave_status(
            request_id=int(request_id),
            status=RequestStatus.REJECTED,
            expected=_DECIDABLE,
            reject_reason=(reject_reason or "").strip() or None,
        )
        if not ok:
            raise ValidationError("Request not found or already processed")

    def cancel_leave(self, *, user_id: int, request_id: int) -> None:
        req = self._requests.get_leave(request_id=int(request_id))
        if not req:
            raise NotFoundError("Request not found")
        if req.user_id != int(user_id):
            raise AuthorizationError("You can only cancel your own requests")

        ok = self._requests.update_leave_status(
            request_id=req.request_id,
            status=RequestStatus.CANCELLED,
            expected=_CANCELLABLE,
        )
        if not ok:
            raise ValidationError("Request can no longer be cancelled")

    def delete_leave(self, *, current_role: Role, request_id: int) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Permission denied")
        if not self._requests.delete_leave(request_id=int(request_id)):
            raise NotFoundError("Request not found")

    # -------- Overtime requests --------
    def create_overtime(
        self,
        *,
        current_role: Role,
        user_id: int,
        start: str,
        end: str,
        reason: str,
    ) -> int:
        if current_role != Role.EMPLOYEE:
            raise AuthorizationError("Only employees can request overtime")

        span = self._span(start, end)
        reason = require_non_empty(reason, "Reason")
        hours = self._overtime_calculator.hours(span, self._calendar())
        if hours <= 0:
            raise ValidationError("Overtime must be longer than zero")

        request_id = self._requests.create_overtime(
            user_id=int(user_id),
            start=span.start,
            end=span.end,
            hours=hours,
            reason=reason,
            created_at=self._now(),
        )
        logger.info("Overtime #%d created for user %d: %.1fh", request_id, int(user_id), hours)
        return request_id

    def approve_overtime(self, *, current_role: Role, request_id: int) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Permission denied")

        ok = self._requests.update_overtime_status(
            request_id=int(request_id),
            status=RequestStatus.APPROVED,
            expected=_DECIDABLE,
        )
        if not ok:
            raise ValidationError("Request not found or already processed")

    def reject_overtime(self, *, current_role: Role, request_id: int, reject_reason: str = "") -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Permission denied")

        ok = self._requests.update_overtime_status(
            request_id=int(request_id),
            status=RequestStatus.REJECTED,
            expected=_DECIDABLE,
            reject_reason=(reject_reason or "").strip() or None,
        )
        if not ok:
            raise ValidationError("Request not found or already processed")

    def cancel_overtime(self, *, user_id: int, request_id: int) -> None:
        req = self._requests.get_overtime(request_id=int(request_id))
        if not req:
            raise NotFoundError("Request not found")
        if req.user_id != int(user_id):
            raise AuthorizationError("You can only cancel your own requests")

        ok = self._requests.update_overtime_status(
            request_id=req.request_id,
            status=RequestStatus.CANCELLED,
            expected=_CANCELLABLE,
        )
        if not ok:
            raise ValidationError("Request can no longer be cancelled")

    def correct_overtime(
        self,
        *,
        current_role: Role,
        request_id: int,
        start: str,
        end: str,
        admin_note: str,
    ) -> float:
        """Admin correction of an overtime span; the note is shown to the employee."""
        if current_role != Role.ADMIN:
            raise AuthorizationError("Permission denied")

        admin_note = require_non_empty(admin_note, "Correction note")
        req = self._requests.get_overtime(request_id=int(request_id))
        if not req:
            raise NotFoundError("Request not found")

        span = self._span(start, end)
        hours = self._overtime_calculator.hours(span, self._calendar())
        if hours <= 0:
            raise ValidationError("Overtime must be longer than zero")

        ok = self._requests.correct_overtime(
            request_id=req.request_id,
            start=span.start,
            end=span.end,
            hours=hours,
            admin_note=admin_note,
        )
        if not ok:
            raise ValidationError("Overtime correction failed")
        logger.info("Overtime #%d corrected: %.1fh -> %.1fh", req.request_id, req.hours, hours)
        return hours

    def delete_overtime(self, *, current_role: Role, request_id: int) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Permission denied")
        if not self._requests.delete_overtime(request_id=int(request_id)):
            raise NotFoundError("Request not found")

    # -------- Listing --------
    def list_my_requests(self, *, user_id: int) -> dict:
        return {
            "leaves": self._requests.list_leaves(user_id=int(user_id), limit=DEFAULT_LIST_LIMIT),
            "overtimes": self._requests.list_overtimes(user_id=int(user_id), limit=DEFAULT_LIST_LIMIT),
        }

    def list_admin_pending(self) -> dict:
        return {
            "leaves": self._requests.list_leaves(statuses=_DECIDABLE, limit=500),
            "overtimes": self._requests.list_overtimes(statuses=_DECIDABLE, limit=500),
        }
