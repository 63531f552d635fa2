from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization checks."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class RequestStatus(str, Enum):
    """Approval-flow status of leave and overtime requests."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    CANCELLED = "cancelled"

    @property
    def is_closed(self) -> bool:
        """Closed requests keep whatever hours they had and are never recalculated."""
        return self in {RequestStatus.REJECTED, RequestStatus.CANCELLED}


class RequestKind(str, Enum):
    LEAVE = "leave"
    OVERTIME = "overtime"
