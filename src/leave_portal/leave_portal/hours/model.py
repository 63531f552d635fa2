from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, tzinfo
from typing import Optional

from ..common.datetime_utils import at_business_time, parse_span_datetime, to_business_time
from ..core.constants import LUNCH_END, LUNCH_START, WORK_END, WORK_START
from ..holidays.model import HolidayCalendar


@dataclass(frozen=True)
class TimeSpan:
    """Requested interval; ``end <= start`` is allowed and bills nothing."""

    start: datetime
    end: datetime

    @classmethod
    def parse(cls, start: str, end: str, *, tz: Optional[tzinfo] = None) -> "TimeSpan":
        """Build a span from user-entered values; raises ValidationError on bad input."""
        return cls(parse_span_datetime(start, tz), parse_span_datetime(end, tz))

    def in_zone(self, tz: tzinfo) -> "TimeSpan":
        return TimeSpan(to_business_time(self.start, tz), to_business_time(self.end, tz))

    @property
    def is_empty(self) -> bool:
        return self.end <= self.start


@dataclass(frozen=True)
class WorkCalendarPolicy:
    work_start: time = WORK_START
    work_end: time = WORK_END
    lunch_start: time = LUNCH_START
    lunch_end: time = LUNCH_END
    weekend: frozenset[int] = frozenset({5, 6})

    def is_working_day(self, day: date, calendar: HolidayCalendar) -> bool:
        return day.weekday() not in self.weekend and day not in calendar

    def work_window(self, day: date, tz: tzinfo) -> tuple[datetime, datetime]:
        return at_business_time(day, self.work_start, tz), at_business_time(day, self.work_end, tz)

    def lunch_window(self, day: date, tz: tzinfo) -> tuple[datetime, datetime]:
        return at_business_time(day, self.lunch_start, tz), at_business_time(day, self.lunch_end, tz)


STANDARD_POLICY = WorkCalendarPolicy()
