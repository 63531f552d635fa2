from __future__ import annotations

import logging
from datetime import date

from src.leave_portal.leave_portal.core.enums import RequestKind, RequestStatus
from src.leave_portal.leave_portal.holidays.model import HolidayCalendar
from src.leave_portal.leave_portal.requests.recalculation import HoursRecalculationService

MONDAY_OFF = HolidayCalendar.of(date(2024, 3, 4))


def seed(repo):
    return {
        "pending": repo.add_leave("2024-03-01 08:30", "2024-03-04 17:30", hours=16.0),
        "approved": repo.add_leave("2024-03-04 08:30", "2024-03-04 17:30", hours=8.0, status=RequestStatus.APPROVED),
        "cancelled": repo.add_leave("2024-03-04 08:30", "2024-03-04 17:30", hours=8.0, status=RequestStatus.CANCELLED),
        "rejected": repo.add_leave("2024-03-04 08:30", "2024-03-04 17:30", hours=8.0, status=RequestStatus.REJECTED),
    }


def test_sweep_skips_cancelled_and_rejected(recalculation, requests_repo):
    seeded = seed(requests_repo)

    report = recalculation.recalculate_all(MONDAY_OFF)

    def hours(name):
        return requests_repo.get_leave(request_id=seeded[name].request_id).hours

    assert hours("pending") == 8.0
    assert hours("approved") == 0.0
    assert hours("cancelled") == 8.0
    assert hours("rejected") == 8.0
    assert report.examined == 2
    assert len(report.updated) == 2


def test_sweep_can_leave_approved_requests_alone(requests_repo):
    seeded = seed(requests_repo)
    service = HoursRecalculationService(requests_repo, include_approved=False)

    service.recalculate_all(MONDAY_OFF)

    assert requests_repo.get_leave(request_id=seeded["pending"].request_id).hours == 8.0
    assert requests_repo.get_leave(request_id=seeded["approved"].request_id).hours == 8.0


def test_sweep_is_idempotent(recalculation, requests_repo):
    seed(requests_repo)
    recalculation.recalculate_all(MONDAY_OFF)
    second = recalculation.recalculate_all(MONDAY_OFF)
    assert second.updated == []
    assert second.ok


def test_sweep_continues_after_a_failed_update(recalculation, requests_repo, caplog):
    first = requests_repo.add_leave("2024-03-04 08:30", "2024-03-04 17:30", hours=8.0)
    second = requests_repo.add_leave("2024-03-04 08:30", "2024-03-04 12:00", hours=3.5)

    original = requests_repo.update_leave_hours

    def flaky(*, request_id, hours):
        if request_id == second.request_id:
            raise ConnectionError("db went away")
        return original(request_id=request_id, hours=hours)

    requests_repo.update_leave_hours = flaky

    with caplog.at_level(logging.ERROR):
        report = recalculation.recalculate_all(MONDAY_OFF)

    assert requests_repo.get_leave(request_id=first.request_id).hours == 0.0
    assert report.failed == [(RequestKind.LEAVE, second.request_id)]
    assert "Failed to recalculate" in caplog.text


def test_overtime_hours_are_rederived_from_span(recalculation, requests_repo):
    ot = requests_repo.add_overtime("2024-03-04 18:00", "2024-03-04 20:30", hours=0.0)

    report = recalculation.recalculate_all(MONDAY_OFF)

    assert requests_repo.get_overtime(request_id=ot.request_id).hours == 2.5
    assert (RequestKind.OVERTIME, ot.request_id) in report.updated


def test_sweep_fixes_quarter_hour_overtime_rounded_down(recalculation, requests_repo):
    ot = requests_repo.add_overtime("2024-03-05 18:00", "2024-03-05 19:15", hours=1.2)

    report = recalculation.recalculate_all(HolidayCalendar())

    assert requests_repo.get_overtime(request_id=ot.request_id).hours == 1.3
    assert report.updated == [(RequestKind.OVERTIME, ot.request_id)]
