from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee with leave quotas (in hours).

    Note: Plain data object (no DB access code).
    """

    user_id: int
    name: str
    role: Role
    dept: str = ""
    quota_annual: float = 0
    quota_birthday: float = 0
    quota_comp: float = 0
