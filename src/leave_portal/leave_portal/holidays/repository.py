from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import Holiday


class HolidayRepository(Protocol):
    def list_all(self) -> Sequence[Holiday]:
        """Return holidays ordered by date."""

        raise NotImplementedError

    def get(self, *, holiday_id: int) -> Optional[Holiday]:
        raise NotImplementedError

    def create(self, *, holiday_date: date, note: str) -> int:
        raise NotImplementedError

    def delete(self, *, holiday_id: int) -> bool:
        raise NotImplementedError
