from __future__ import annotations

import math
from typing import Iterable

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_choice(value: str, field_name: str, choices: Iterable[str]) -> str:
    v = (value or "").strip()
    if v not in set(choices):
        raise ValidationError(f"{field_name} is not valid: {v or '-'}")
    return v


def require_non_negative(value, field_name: str) -> float:
    try:
        v = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if not math.isfinite(v) or v < 0:
        raise ValidationError(f"{field_name} must be a non-negative number")
    return v
