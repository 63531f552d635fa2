from __future__ import annotations

from dataclasses import dataclass
from datetime import date, tzinfo
from typing import Iterable, Optional

from ..common.datetime_utils import DateLike, to_business_date


@dataclass(frozen=True)
class Holiday:
    holiday_id: int
    holiday_date: date
    note: str = ""


@dataclass(frozen=True)
class HolidayCalendar:
    """Set of non-working calendar days in the business time zone.

    Labels are not kept: only the day matters for hour calculation.
    """

    dates: frozenset[date] = frozenset()

    @classmethod
    def from_holidays(cls, holidays: Iterable[Holiday], *, tz: Optional[tzinfo] = None) -> "HolidayCalendar":
        return cls.of(*(h.holiday_date for h in holidays), tz=tz)

    @classmethod
    def of(cls, *values: DateLike, tz: Optional[tzinfo] = None) -> "HolidayCalendar":
        return cls(frozenset(to_business_date(v, tz) for v in values))

    def __contains__(self, day: object) -> bool:
        return day in self.dates

    def __len__(self) -> int:
        return len(self.dates)

    def with_date(self, day: date) -> "HolidayCalendar":
        return HolidayCalendar(self.dates | {day})

