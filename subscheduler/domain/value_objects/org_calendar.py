"""
Calendar-day helpers in the organisational time zone.

Scheduling decisions ("is this job on the selected day") are made on the
calendar of the organisation's fixed zone, never the viewer's.
"""

import re
from datetime import date, datetime, time, timedelta, timezone
from typing import Tuple, Union
from zoneinfo import ZoneInfo

ORG_TIMEZONE = "America/New_York"

DayLike = Union[str, date, datetime]

_DATE_ONLY = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _zone(tz_name: str) -> ZoneInfo:
    return ZoneInfo(tz_name)


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes, convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_org_date(value: DayLike, tz_name: str = ORG_TIMEZONE) -> date:
    """Resolve a timestamp or calendar date to a calendar date in ``tz_name``.

    Plain dates and ``YYYY-MM-DD`` strings are already calendar days and are
    taken as-is. Naive datetimes are treated as UTC.
    """
    if isinstance(value, str):
        if _DATE_ONLY.match(value):
            return date.fromisoformat(value)
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))

    if isinstance(value, datetime):
        return ensure_utc(value).astimezone(_zone(tz_name)).date()

    return value


def day_equals(a: DayLike, b: DayLike, tz_name: str = ORG_TIMEZONE) -> bool:
    """True when both values fall on the same calendar day in ``tz_name``."""
    return to_org_date(a, tz_name) == to_org_date(b, tz_name)


def org_today(tz_name: str = ORG_TIMEZONE) -> date:
    return datetime.now(_zone(tz_name)).date()


def org_day_bounds(day: date, tz_name: str = ORG_TIMEZONE) -> Tuple[datetime, datetime]:
    """UTC instants for the start (inclusive) and end (exclusive) of ``day``."""
    zone = _zone(tz_name)
    start = datetime.combine(day, time.min, tzinfo=zone)
    end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=zone)
    return start.astimezone(timezone.utc), end.astimezone(timezone.utc)


def format_org_date(value: DayLike, tz_name: str = ORG_TIMEZONE) -> str:
    """Readable date such as ``Jun 15, 2024``."""
    return to_org_date(value, tz_name).strftime("%b %d, %Y")
