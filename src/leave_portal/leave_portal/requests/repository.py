from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional, Protocol, Sequence

from ..core.enums import RequestStatus
from .model import LeaveRequest, OvertimeRequest


class RequestRepository(Protocol):
    # Leave requests
    def create_leave(
        self,
        *,
        user_id: int,
        leave_type: str,
        start: datetime,
        end: datetime,
        hours: float,
        reason: str,
        created_at: datetime,
    ) -> int:
        raise NotImplementedError

    def get_leave(self, *, request_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_leaves(
        self,
        *,
        statuses: Optional[Iterable[RequestStatus]] = None,
        user_id: Optional[int] = None,
        limit: Optional[int] = 200,
    ) -> Sequence[LeaveRequest]:
        """Newest first; ``limit=None`` returns every match."""

        raise NotImplementedError

    def update_leave_status(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        expected: Iterable[RequestStatus],
        reject_reason: Optional[str] = None,
    ) -> bool:
        """Move to ``status`` only if the current status is one of ``expected``."""

        raise NotImplementedError

    def update_leave_hours(self, *, request_id: int, hours: float) -> bool:
        raise NotImplementedError

    def delete_leave(self, *, request_id: int) -> bool:
        raise NotImplementedError

    # Overtime requests
    def create_overtime(
        self,
        *,
        user_id: int,
        start: datetime,
        end: datetime,
        hours: float,
        reason: str,
        created_at: datetime,
    ) -> int:
        raise NotImplementedError

    def get_overtime(self, *, request_id: int) -> Optional[OvertimeRequest]:
        raise NotImplementedError

    def list_overtimes(
        self,
        *,
        statuses: Optional[Iterable[RequestStatus]] = None,
        user_id: Optional[int] = None,
        limit: Optional[int] = 200,
    ) -> Sequence[OvertimeRequest]:
        raise NotImplementedError

    def update_overtime_status(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        expected: Iterable[RequestStatus],
        reject_reason: Optional[str] = None,
    ) -> bool:
        raise NotImplementedError

    def update_overtime_hours(self, *, request_id: int, hours: float) -> bool:
        raise NotImplementedError

    def correct_overtime(
        self,
        *,
        request_id: int,
        start: datetime,
        end: datetime,
        hours: float,
        admin_note: str,
    ) -> bool:
        raise NotImplementedError

    def delete_overtime(self, *, request_id: int) -> bool:
        raise NotImplementedError
