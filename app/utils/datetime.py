"""Timezone helpers for template timestamps."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone, tzinfo
from functools import lru_cache

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from app.config import get_settings

_UTC_OFFSET = re.compile(
    r"^UTC\s*(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?$",
    re.IGNORECASE,
)


def _parse_utc_offset(name: str) -> tzinfo | None:
    match = _UTC_OFFSET.match(name)
    if match is None:
        return None
    delta = timedelta(
        hours=int(match.group("hours")), minutes=int(match.group("minutes") or 0)
    )
    return timezone(-delta if match.group("sign") == "-" else delta)


def _resolve_timezone(name: str) -> tzinfo:
    """Turn an IANA name or a ``UTC+HH:MM`` offset into a ``tzinfo``.

    Unknown names resolve to UTC.
    """

    if not name or name.upper() == "UTC":
        return timezone.utc
    offset = _parse_utc_offset(name)
    if offset is not None:
        return offset
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return timezone.utc


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    """Return the timezone configured through ``APP_TIMEZONE``."""

    return _resolve_timezone(get_settings().app_timezone.strip())


def now_in_app_timezone() -> datetime:
    return datetime.now(tz=get_app_timezone())


def ensure_app_timezone(value: datetime | None) -> datetime | None:
    """Express ``value`` in the application timezone.

    SQLite returns naive values for ``DateTime(timezone=True)`` columns; those
    are read as already being in the application timezone.
    """

    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=get_app_timezone())
    return value.astimezone(get_app_timezone())
