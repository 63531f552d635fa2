from __future__ import annotations

import logging
from typing import Sequence

from ..common.validators import require_non_negative
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError
from .model import Employee
from .repository import UserRepository

logger = logging.getLogger(__name__)


class UserService:
    """Use case: admin view and quota maintenance of employees."""

    def __init__(self, users: UserRepository):
        self._users = users

    def list_employees(self, *, current_role: Role) -> Sequence[Employee]:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Permission denied")
        return self._users.list_active()

    def update_quotas(
        self,
        *,
        current_role: Role,
        user_id: int,
        quota_annual,
        quota_birthday,
        quota_comp,
    ) -> Employee:
        """Set the leave quotas (hours) of one employee."""
        if current_role != Role.ADMIN:
            raise AuthorizationError("Permission denied")

        annual = require_non_negative(quota_annual, "Annual leave quota")
        birthday = require_non_negative(quota_birthday, "Birthday leave quota")
        comp = require_non_negative(quota_comp, "Comp leave quota")

        ok = self._users.update_quotas(
            user_id=int(user_id),
            quota_annual=annual,
            quota_birthday=birthday,
            quota_comp=comp,
        )
        if not ok:
            raise NotFoundError("Employee not found")

        logger.info("Quotas of user %d set to annual=%g birthday=%g comp=%g", int(user_id), annual, birthday, comp)
        return self._users.get_by_id(int(user_id))
