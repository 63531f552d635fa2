from __future__ import annotations

from datetime import date

import pytest

from src.leave_portal.leave_portal.clock.service import CorrectedClock
from src.leave_portal.leave_portal.core.enums import RequestStatus, Role
from src.leave_portal.leave_portal.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.leave_portal.leave_portal.requests.service import RequestService


class SpyCalculator:
    def __init__(self):
        self.calls = 0

    def hours(self, span, calendar):
        self.calls += 1
        return 8.0


def new_leave(svc, **overrides):
    data = dict(
        current_role=Role.EMPLOYEE,
        user_id=2,
        leave_type="事假",
        start="2024-03-01 08:30",
        end="2024-03-01 17:30",
        reason="Family matters",
    )
    data.update(overrides)
    return svc.create_leave(**data)


def test_employee_leave_stores_billable_hours(request_service, requests_repo):
    rid = new_leave(request_service)

    req = requests_repo.get_leave(request_id=rid)
    assert req.hours == 8.0
    assert req.status == RequestStatus.PENDING
    assert req.created_at.strftime("%Y-%m-%d %H:%M") == "2024-02-29 10:00"


def test_leave_hours_honor_holidays(request_service, requests_repo, holidays_repo):
    holidays_repo.create(holiday_date=date(2024, 3, 4), note="Make-up day off")
    rid = new_leave(request_service, end="2024-03-05 17:30")
    assert requests_repo.get_leave(request_id=rid).hours == 16.0


def test_unparseable_time_is_rejected_before_calculation(requests_repo, users_repo, holidays_repo, clock):
    spy = SpyCalculator()
    svc = RequestService(requests_repo, users_repo, holidays_repo, clock=clock, leave_calculator=spy)

    with pytest.raises(ValidationError):
        new_leave(svc, start="2024-03-01 8h30")
    assert spy.calls == 0


def test_end_before_start_is_rejected(request_service):
    with pytest.raises(ValidationError):
        new_leave(request_service, start="2024-03-01 17:30", end="2024-03-01 08:30")


def test_leave_without_working_hours_is_rejected(request_service):
    with pytest.raises(ValidationError):
        new_leave(request_service, start="2024-03-02 08:30", end="2024-03-03 17:30")


def test_unknown_leave_type_and_missing_reason(request_service):
    with pytest.raises(ValidationError):
        new_leave(request_service, leave_type="Sabbatical")
    with pytest.raises(ValidationError):
        new_leave(request_service, reason="   ")


def test_admin_cannot_request_leave(request_service):
    with pytest.raises(AuthorizationError):
        new_leave(request_service, current_role=Role.ADMIN, user_id=1)


def test_annual_leave_quota_is_enforced(request_service, requests_repo):
    requests_repo.add_leave(
        "2024-02-26 08:30", "2024-02-26 17:30", hours=8.0, status=RequestStatus.APPROVED, leave_type="特休"
    )
    requests_repo.add_leave(
        "2024-02-27 08:30", "2024-02-27 12:00", hours=3.5, status=RequestStatus.CANCELLED, leave_type="特休"
    )

    balance = request_service.quota_balance(user_id=2, leave_type="特休")
    assert balance.remaining == 8.0

    new_leave(request_service, leave_type="特休")
    with pytest.raises(ValidationError):
        new_leave(request_service, leave_type="特休", start="2024-03-04 08:30", end="2024-03-04 10:30")

    # Unlimited types never hit a quota.
    assert request_service.quota_balance(user_id=2, leave_type="病假") is None
    new_leave(request_service, leave_type="病假", start="2024-03-04 08:30", end="2024-03-04 17:30")


def test_preview_does_not_persist(request_service, requests_repo):
    assert request_service.preview_leave_hours(start="2024-03-01 08:00", end="2024-03-01 18:00") == 8.0
    assert requests_repo.leaves == {}


def test_unsynced_clock_blocks_new_requests(requests_repo, users_repo, holidays_repo):
    svc = RequestService(requests_repo, users_repo, holidays_repo, clock=CorrectedClock())
    with pytest.raises(ValidationError):
        new_leave(svc)


def test_admin_decides_only_pending_requests(request_service):
    rid = new_leave(request_service)

    with pytest.raises(AuthorizationError):
        request_service.approve_leave(current_role=Role.EMPLOYEE, request_id=rid)

    request_service.approve_leave(current_role=Role.ADMIN, request_id=rid)
    with pytest.raises(ValidationError):
        request_service.reject_leave(current_role=Role.ADMIN, request_id=rid, reject_reason="late")


def test_reject_keeps_reason(request_service, requests_repo):
    rid = new_leave(request_service)
    request_service.reject_leave(current_role=Role.ADMIN, request_id=rid, reject_reason="Busy season")
    req = requests_repo.get_leave(request_id=rid)
    assert req.status == RequestStatus.REJECTED
    assert req.reject_reason == "Busy season"


def test_employee_cancels_own_requests_only(request_service, requests_repo):
    rid = new_leave(request_service)

    with pytest.raises(AuthorizationError):
        request_service.cancel_leave(user_id=3, request_id=rid)

    request_service.approve_leave(current_role=Role.ADMIN, request_id=rid)
    request_service.cancel_leave(user_id=2, request_id=rid)
    assert requests_repo.get_leave(request_id=rid).status == RequestStatus.CANCELLED

    with pytest.raises(ValidationError):
        request_service.cancel_leave(user_id=2, request_id=rid)
    with pytest.raises(NotFoundError):
        request_service.cancel_leave(user_id=2, request_id=999)


def test_overtime_uses_elapsed_hours(request_service, requests_repo):
    rid = request_service.create_overtime(
        current_role=Role.EMPLOYEE,
        user_id=2,
        start="2024-03-01 18:00",
        end="2024-03-01 20:30",
        reason="Release night",
    )
    assert requests_repo.get_overtime(request_id=rid).hours == 2.5


def test_admin_corrects_overtime_with_note(request_service, requests_repo):
    rid = request_service.create_overtime(
        current_role=Role.EMPLOYEE,
        user_id=2,
        start="2024-03-01 18:00",
        end="2024-03-01 22:00",
        reason="Release night",
    )

    with pytest.raises(ValidationError):
        request_service.correct_overtime(
            current_role=Role.ADMIN, request_id=rid, start="2024-03-01 18:00", end="2024-03-01 20:00", admin_note=""
        )

    hours = request_service.correct_overtime(
        current_role=Role.ADMIN,
        request_id=rid,
        start="2024-03-01T18:00",
        end="2024-03-01T20:00",
        admin_note="Gate log shows 20:00",
    )
    req = requests_repo.get_overtime(request_id=rid)
    assert hours == req.hours == 2.0
    assert req.admin_note == "Gate log shows 20:00"


def test_overtime_correction_to_empty_span_is_rejected(request_service, requests_repo):
    rid = request_service.create_overtime(
        current_role=Role.EMPLOYEE,
        user_id=2,
        start="2024-03-01 18:00",
        end="2024-03-01 19:15",
        reason="Hotfix",
    )
    assert requests_repo.get_overtime(request_id=rid).hours == 1.3

    with pytest.raises(ValidationError):
        request_service.correct_overtime(
            current_role=Role.ADMIN,
            request_id=rid,
            start="2024-03-01 18:00",
            end="2024-03-01 18:00",
            admin_note="No overtime logged",
        )
    req = requests_repo.get_overtime(request_id=rid)
    assert req.hours == 1.3
    assert req.admin_note is None


def test_admin_pending_lists(request_service):
    new_leave(request_service)
    approved = new_leave(request_service, start="2024-03-04 08:30", end="2024-03-04 12:00")
    request_service.approve_leave(current_role=Role.ADMIN, request_id=approved)

    pending = request_service.list_admin_pending()
    assert len(pending["leaves"]) == 1
    assert pending["overtimes"] == []
    assert len(request_service.list_my_requests(user_id=2)["leaves"]) == 2
