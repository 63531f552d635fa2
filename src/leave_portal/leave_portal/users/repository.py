from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class UserRepository(Protocol):
    """Repository interface for employees.

    Note (DIP): services depend on this interface, not on a concrete DB.
    """

    def get_by_id(self, user_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def list_active(self) -> Sequence[Employee]:
        raise NotImplementedError

    def update_quotas(self, *, user_id: int, quota_annual: float, quota_birthday: float, quota_comp: float) -> bool:
        raise NotImplementedError
