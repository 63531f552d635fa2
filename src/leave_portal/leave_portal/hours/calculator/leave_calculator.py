from __future__ import annotations

import math
from datetime import date, timedelta, tzinfo
from typing import Iterable, Iterator, Optional, Union

from ...common.datetime_utils import business_tz
from ...core.constants import LEAVE_HOURS_STEP
from ...holidays.model import Holiday, HolidayCalendar
from ..model import STANDARD_POLICY, TimeSpan, WorkCalendarPolicy
from .base import HoursCalculator


def _iter_days(first: date, last: date) -> Iterator[date]:
    day = first
    while day <= last:
        yield day
        day += timedelta(days=1)


def round_to_step(hours: float, step: float = LEAVE_HOURS_STEP) -> float:
    """Nearest multiple of ``step``, halves rounded up."""
    return round(math.floor(hours / step + 0.5) * step, 1)


def compute_billable_hours(
    span: TimeSpan,
    holidays: Union[HolidayCalendar, Iterable[Holiday]],
    *,
    tz: Optional[tzinfo] = None,
    policy: WorkCalendarPolicy = STANDARD_POLICY,
) -> float:
    """Billable leave hours for ``span``.

    Each business-zone day from the day of ``start`` to the day of ``end`` is
    clamped to the work window, minus whatever part of it falls inside lunch.
    Weekends and holidays contribute nothing. The total is rounded to the
    nearest half hour.
    """
    tz = tz or business_tz()
    span = span.in_zone(tz)
    if span.is_empty:
        return 0.0

    if isinstance(holidays, HolidayCalendar):
        calendar = holidays
    else:
        calendar = HolidayCalendar.from_holidays(holidays, tz=tz)

    total_seconds = 0.0
    for day in _iter_days(span.start.date(), span.end.date()):
        if not policy.is_working_day(day, calendar):
            continue

        work_start, work_end = policy.work_window(day, tz)
        seg_start = max(span.start, work_start)
        seg_end = min(span.end, work_end)
        if seg_end <= seg_start:
            continue

        duration = (seg_end - seg_start).total_seconds()

        lunch_start, lunch_end = policy.lunch_window(day, tz)
        overlap = (min(seg_end, lunch_end) - max(seg_start, lunch_start)).total_seconds()
        if overlap > 0:
            duration -= overlap

        total_seconds += duration

    return round_to_step(total_seconds / 3600)


class LeaveHoursCalculator(HoursCalculator):
    """Work-window rule: 08:30-17:30 on working days, lunch excluded."""

    def __init__(self, *, tz: Optional[tzinfo] = None, policy: WorkCalendarPolicy = STANDARD_POLICY):
        self._tz = tz or business_tz()
        self._policy = policy

    def hours(self, span: TimeSpan, calendar: HolidayCalendar) -> float:
        return compute_billable_hours(span, calendar, tz=self._tz, policy=self._policy)
