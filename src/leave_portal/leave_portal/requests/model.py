from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import RequestKind, RequestStatus
from ..hours.model import TimeSpan


@dataclass(frozen=True)
class LeaveRequest:
    request_id: int
    user_id: int
    leave_type: str
    start: datetime
    end: datetime
    hours: float
    reason: str
    status: RequestStatus
    created_at: datetime
    reject_reason: Optional[str] = None

    kind = RequestKind.LEAVE

    @property
    def span(self) -> TimeSpan:
        return TimeSpan(self.start, self.end)


@dataclass(frozen=True)
class OvertimeRequest:
    request_id: int
    user_id: int
    start: datetime
    end: datetime
    hours: float
    reason: str
    status: RequestStatus
    created_at: datetime
    reject_reason: Optional[str] = None
    # Set when an admin corrected the span; shown to the employee.
    admin_note: Optional[str] = None

    kind = RequestKind.OVERTIME

    @property
    def span(self) -> TimeSpan:
        return TimeSpan(self.start, self.end)
