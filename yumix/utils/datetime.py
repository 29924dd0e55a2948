"""Application timezone handling.

Columns hold naive datetimes expressed in the application timezone; the
domain layer works with aware values. ``APP_TIMEZONE`` accepts an IANA name
or a fixed offset such as ``UTC+05:30``; anything else means UTC.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone, tzinfo
from functools import lru_cache

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from yumix.config import get_settings

_FIXED_OFFSET = re.compile(
    r"^(?:UTC|GMT)(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?$",
    re.IGNORECASE,
)


def parse_timezone(name: str) -> tzinfo:
    """Return the zone called ``name``, a fixed offset, or UTC when unknown."""

    name = name.strip()
    if not name:
        return timezone.utc
    match = _FIXED_OFFSET.match(name)
    if match:
        offset = timedelta(
            hours=int(match["hours"]), minutes=int(match["minutes"] or 0)
        )
        return timezone(-offset if match["sign"] == "-" else offset)
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return timezone.utc


@lru_cache(maxsize=1)
def _app_timezone() -> tzinfo:
    return parse_timezone(get_settings().app_timezone or "")


def now_in_app_timezone() -> datetime:
    return datetime.now(tz=_app_timezone())


def now_in_app_naive_datetime() -> datetime:
    """Current wall-clock time in the app timezone, as stored in the database."""

    return now_in_app_timezone().replace(tzinfo=None)


def ensure_app_timezone(value: datetime | None) -> datetime | None:
    """Attach the app timezone to a stored naive value, or convert an aware one."""

    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=_app_timezone())
    return value.astimezone(_app_timezone())


def ensure_app_naive_datetime(value: datetime | None) -> datetime | None:
    """Convert ``value`` to the naive app-timezone form used by the columns."""

    localized = ensure_app_timezone(value)
    return localized.replace(tzinfo=None) if localized is not None else None
