from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import tzinfo
from typing import Optional, Sequence

from ..common.datetime_utils import DateLike, business_tz, to_business_date
from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..requests.recalculation import HoursRecalculationService, RecalculationReport
from .model import Holiday, HolidayCalendar
from .repository import HolidayRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HolidayChange:
    holiday_id: int
    report: RecalculationReport


class HolidayService:
    def __init__(
        self,
        holidays: HolidayRepository,
        recalculation: HoursRecalculationService,
        *,
        tz: Optional[tzinfo] = None,
    ):
        self._holidays = holidays
        self._recalculation = recalculation
        self._tz = tz or business_tz()

    def calendar(self) -> HolidayCalendar:
        return HolidayCalendar.from_holidays(self._holidays.list_all(), tz=self._tz)

    def list_holidays(self, *, month: str = "") -> Sequence[Holiday]:
        """All holidays, or only those in ``month`` (``YYYY-MM``)."""
        items = self._holidays.list_all()
        month = (month or "").strip()
        if not month:
            return list(items)
        return [h for h in items if h.holiday_date.strftime("%Y-%m") == month]

    def add_holiday(self, *, current_role: Role, holiday_date: DateLike, note: str) -> HolidayChange:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can edit holidays")

        try:
            day = to_business_date(holiday_date, self._tz)
        except (TypeError, ValueError):
            raise ValidationError(f"Invalid holiday date: {holiday_date!r}")
        note = require_non_empty(note, "Holiday note")

        holiday_id = self._holidays.create(holiday_date=day, note=note)
        logger.info("Holiday #%d added on %s (%s)", holiday_id, day.isoformat(), note)
        return HolidayChange(holiday_id=holiday_id, report=self.recalculate())

    def remove_holiday(self, *, current_role: Role, holiday_id: int) -> HolidayChange:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can edit holidays")

        if not self._holidays.delete(holiday_id=int(holiday_id)):
            raise NotFoundError("Holiday not found")
        logger.info("Holiday #%d removed", int(holiday_id))
        return HolidayChange(holiday_id=int(holiday_id), report=self.recalculate())

    def recalculate(self) -> RecalculationReport:
        return self._recalculation.recalculate_all(self.calendar())
