"""Corrected clock: local time shifted by the offset to a network time source.

Request spans are resolved by callers against this clock; the hours
calculators never read the wall clock themselves.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Callable, Optional, Union

from ..common.datetime_utils import business_tz, parse_iso_datetime
from ..core.exceptions import ValidationError

logger = logging.getLogger(__name__)

# Keys used by the time APIs the portal has been pointed at.
SERVER_TIME_KEYS = ("dateTime", "datetime", "utc_datetime", "iso")


def _aware_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_server_time(payload: Union[str, bytes, dict], *, tz: Optional[tzinfo] = None) -> datetime:
    """Extract the timestamp from a time-API response body.

    JSON bodies carry it under one of ``SERVER_TIME_KEYS``; some sources return
    a bare (possibly quoted) ISO string instead. Timestamps without an offset
    are read as business-local time.
    """
    if isinstance(payload, bytes):
        payload = payload.decode("utf-8")

    data = payload
    if isinstance(payload, str):
        try:
            data = json.loads(payload)
        except ValueError:
            data = payload

    raw: Optional[str] = None
    if isinstance(data, dict):
        for key in SERVER_TIME_KEYS:
            if data.get(key):
                raw = str(data[key])
                break
    elif isinstance(data, str):
        raw = data.strip().strip('"')

    if not raw:
        raise ValidationError("Time source returned no timestamp")

    try:
        value = parse_iso_datetime(raw)
    except ValueError:
        raise ValidationError(f"Time source returned an invalid timestamp: {raw!r}")

    if value.tzinfo is None:
        value = (tz or business_tz()).localize(value)
    return value


def offset_from(server_time: datetime, local_time: datetime) -> timedelta:
    """Offset to add to local time to get server time."""
    return _aware_utc(server_time) - _aware_utc(local_time)


class CorrectedClock:
    """Time-source for request validation.

    ``offset`` stays ``None`` until a successful sync; ``now()`` refuses to
    answer in that state rather than fall back to unsynchronized local time.
    """

    def __init__(
        self,
        *,
        offset: Optional[timedelta] = None,
        tz: Optional[tzinfo] = None,
        local_now: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self._offset = offset
        self._tz = tz or business_tz()
        self._local_now = local_now

    @property
    def is_synced(self) -> bool:
        return self._offset is not None

    @property
    def offset(self) -> Optional[timedelta]:
        return self._offset

    def sync(self, payload: Union[str, bytes, dict]) -> timedelta:
        server_time = parse_server_time(payload, tz=self._tz)
        self._offset = offset_from(server_time, self._local_now())
        logger.info("Clock synced; offset=%.3fs", self._offset.total_seconds())
        return self._offset

    def now(self) -> datetime:
        if self._offset is None:
            raise ValidationError("Network time is not synchronized")
        return (_aware_utc(self._local_now()) + self._offset).astimezone(self._tz)
