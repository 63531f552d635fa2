from __future__ import annotations

from abc import ABC, abstractmethod

from ...holidays.model import HolidayCalendar
from ..model import TimeSpan


class HoursCalculator(ABC):
    """Calculator interface (Strategy Pattern for request hours)."""

    @abstractmethod
    def hours(self, span: TimeSpan, calendar: HolidayCalendar) -> float:
        raise NotImplementedError
