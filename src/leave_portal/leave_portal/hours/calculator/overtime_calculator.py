from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from ...core.constants import OVERTIME_HOURS_DECIMALS
from ...holidays.model import HolidayCalendar
from ..model import TimeSpan
from .base import HoursCalculator


def round_half_up(value: float, decimals: int = OVERTIME_HOURS_DECIMALS) -> float:
    """Round the exact value of ``value`` to ``decimals`` places, ties away from zero.

    ``round()`` sends ties to the even digit, so 1.25h would become 1.2.
    """
    quantum = Decimal(1).scaleb(-decimals)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


class OvertimeHoursCalculator(HoursCalculator):
    """Overtime rule: plain elapsed time, not below 0. Holidays do not matter."""

    def hours(self, span: TimeSpan, calendar: HolidayCalendar) -> float:
        if span.is_empty:
            return 0.0
        elapsed = (span.end - span.start).total_seconds() / 3600
        return round_half_up(elapsed)
