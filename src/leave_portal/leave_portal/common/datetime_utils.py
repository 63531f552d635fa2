"""Date/time helpers pinned to the business time zone.

Every calendar-day decision in the package (work windows, holidays, weekday
checks) goes through these helpers so that no comparison ever depends on the
interpreter's default zone.
"""
from __future__ import annotations

from datetime import date, datetime, time, tzinfo
from typing import Optional, Union

import pytz

from ..core.constants import BUSINESS_TIMEZONE, SPAN_FORMATS
from ..core.exceptions import ValidationError

DateLike = Union[date, datetime, str]


def business_tz(name: Optional[str] = None) -> tzinfo:
    return pytz.timezone(name or BUSINESS_TIMEZONE)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 timestamp, accepting a trailing ``Z`` for UTC."""
    v = value.strip()
    if v.endswith("Z"):
        v = v[:-1] + "+00:00"
    return datetime.fromisoformat(v)


def to_business_time(value: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """Express ``value`` in the business zone; naive values are taken as business-local."""
    tz = tz or business_tz()
    if value.tzinfo is None:
        return tz.localize(value)
    return value.astimezone(tz)


def to_business_date(value: DateLike, tz: Optional[tzinfo] = None) -> date:
    """Normalize a date, timestamp or string to its business-zone calendar day.

    A holiday stored as ``2023-12-31T16:00:00Z`` is January 1st in Taipei; an
    instant-based comparison would put it on the wrong day.
    """
    if isinstance(value, datetime):
        return to_business_time(value, tz).date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        v = value.strip()
        if len(v) == 10:
            return parse_iso_date(v)
        return to_business_time(parse_iso_datetime(v), tz).date()
    raise TypeError(f"Unsupported date value: {value!r}")


def at_business_time(day: date, at: time, tz: Optional[tzinfo] = None) -> datetime:
    """Aware datetime for wall-clock ``at`` on ``day`` in the business zone."""
    tz = tz or business_tz()
    return tz.localize(datetime.combine(day, at))


def parse_span_datetime(value: str, tz: Optional[tzinfo] = None) -> datetime:
    """Parse a user-entered ``YYYY-MM-DD HH:MM`` value as business-local time."""
    v = (value or "").strip()
    if not v:
        raise ValidationError("Start and end time are required")
    for fmt in SPAN_FORMATS:
        try:
            return to_business_time(datetime.strptime(v, fmt), tz)
        except ValueError:
            continue
    raise ValidationError(f"Invalid date/time (YYYY-MM-DD HH:MM): {v}")

