"""Re-derive stored request hours after the holiday calendar changes.

Hours on a request are derived from its span and the calendar at the time of
computation, so every calendar edit is followed by a sweep over the requests
that are still open. The sweep is idempotent and not atomic: each request is
updated on its own, and one failing update does not stop the rest.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional, Union

from ..core.enums import RequestKind, RequestStatus
from ..holidays.model import HolidayCalendar
from ..hours.calculator.base import HoursCalculator
from ..hours.calculator.leave_calculator import LeaveHoursCalculator
from ..hours.calculator.overtime_calculator import OvertimeHoursCalculator
from .model import LeaveRequest, OvertimeRequest
from .repository import RequestRepository

logger = logging.getLogger(__name__)


@dataclass
class RecalculationReport:
    examined: int = 0
    updated: list[tuple[RequestKind, int]] = field(default_factory=list)
    failed: list[tuple[RequestKind, int]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


class HoursRecalculationService:
    def __init__(
        self,
        requests: RequestRepository,
        *,
        leave_calculator: Optional[HoursCalculator] = None,
        overtime_calculator: Optional[HoursCalculator] = None,
        include_approved: bool = True,
    ):
        self._requests = requests
        self._leave_calculator = leave_calculator or LeaveHoursCalculator()
        self._overtime_calculator = overtime_calculator or OvertimeHoursCalculator()
        self._include_approved = include_approved

    @property
    def statuses(self) -> tuple[RequestStatus, ...]:
        """Statuses whose hours follow the calendar.

        Approved requests are included by default, so an approved leave's
        hours change if a holiday inside it is added or removed later.
        """
        if self._include_approved:
            return tuple(s for s in RequestStatus if not s.is_closed)
        return (RequestStatus.PENDING,)

    def recalculate_all(self, calendar: HolidayCalendar) -> RecalculationReport:
        report = RecalculationReport()

        leaves = self._requests.list_leaves(statuses=self.statuses, limit=None)
        self._sweep(report, leaves, calendar, self._leave_calculator, self._requests.update_leave_hours)

        overtimes = self._requests.list_overtimes(statuses=self.statuses, limit=None)
        self._sweep(report, overtimes, calendar, self._overtime_calculator, self._requests.update_overtime_hours)

        logger.info(
            "Hours recalculated: examined=%d updated=%d failed=%d",
            report.examined,
            len(report.updated),
            len(report.failed),
        )
        return report

    def _sweep(
        self,
        report: RecalculationReport,
        items: Iterable[Union[LeaveRequest, OvertimeRequest]],
        calendar: HolidayCalendar,
        calculator: HoursCalculator,
        save: Callable[..., bool],
    ) -> None:
        for req in items:
            report.examined += 1
            try:
                hours = calculator.hours(req.span, calendar)
                if hours == req.hours:
                    continue
                if not save(request_id=req.request_id, hours=hours):
                    raise RuntimeError("request disappeared during recalculation")
                report.updated.append((req.kind, req.request_id))
                logger.debug("%s #%d hours %.1f -> %.1f", req.kind.value, req.request_id, req.hours, hours)
            except Exception:
                logger.exception("Failed to recalculate hours for %s #%d", req.kind.value, req.request_id)
                report.failed.append((req.kind, req.request_id))
