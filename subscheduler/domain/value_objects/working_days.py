"""
Working days value object and availability helpers.

A subcontractor's weekly schedule is seven booleans, Sunday through Saturday.
Availability on a calendar day is a pure lookup of that day's weekday; there
are no holiday or one-off overrides.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, Iterable, List, Mapping, Optional

# Sunday-first, matching how the schedule is stored and displayed
WEEKDAY_NAMES = (
    "sunday",
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
)

# date.weekday() is Monday=0
_PY_WEEKDAY_TO_NAME = {
    0: "monday",
    1: "tuesday",
    2: "wednesday",
    3: "thursday",
    4: "friday",
    5: "saturday",
    6: "sunday",
}


@dataclass(frozen=True)
class WorkingDays:
    """Weekly working-days configuration."""

    sunday: bool = False
    monday: bool = False
    tuesday: bool = False
    wednesday: bool = False
    thursday: bool = False
    friday: bool = False
    saturday: bool = False

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "WorkingDays":
        """Build from a ``{"monday": true, ...}`` mapping; missing days are off."""
        return cls(**{name: bool(data.get(name, False)) for name in WEEKDAY_NAMES})

    @classmethod
    def from_day_names(cls, names: Iterable[str]) -> "WorkingDays":
        """Build from a list of day names such as ``["Monday", "tue"]``."""
        selected = set()
        for raw in names:
            key = (raw or "").strip().lower()
            if len(key) < 3:
                continue
            for name in WEEKDAY_NAMES:
                if name.startswith(key[:3]):
                    selected.add(name)
        return cls(**{name: name in selected for name in WEEKDAY_NAMES})

    @classmethod
    def weekdays(cls) -> "WorkingDays":
        """Monday to Friday."""
        return cls(
            monday=True, tuesday=True, wednesday=True, thursday=True, friday=True
        )

    def is_working(self, day_name: str) -> bool:
        return getattr(self, day_name)

    def to_dict(self) -> dict:
        return {name: getattr(self, name) for name in WEEKDAY_NAMES}


def parse_working_days(raw: Any) -> Optional[WorkingDays]:
    """Coerce a stored schedule (mapping or day-name list) into WorkingDays."""
    if raw is None:
        return None
    if isinstance(raw, WorkingDays):
        return raw
    if isinstance(raw, Mapping):
        return WorkingDays.from_mapping(raw)
    if isinstance(raw, (list, tuple, set)):
        return WorkingDays.from_day_names(raw)
    return None


def day_name(day: date) -> str:
    """Lowercase weekday name for a calendar date."""
    return _PY_WEEKDAY_TO_NAME[day.weekday()]


def is_available_on_date(working_days: Optional[WorkingDays], day: date) -> bool:
    """Check whether a subcontractor works on ``day``.

    A missing configuration means the subcontractor is treated as available
    every day.
    """
    if working_days is None:
        return True
    return working_days.is_working(day_name(day))


def available_weekday_names(working_days: Optional[WorkingDays]) -> List[str]:
    if working_days is None:
        return []
    return [name for name in WEEKDAY_NAMES if working_days.is_working(name)]


def working_days_count(working_days: Optional[WorkingDays]) -> int:
    return len(available_weekday_names(working_days))


def next_available_date(
    working_days: Optional[WorkingDays], start: date
) -> Optional[date]:
    """Find the first date on or after ``start`` the subcontractor works.

    Returns None when no configuration exists or no weekday is marked.
    """
    if working_days is None or working_days_count(working_days) == 0:
        return None

    current = start
    for _ in range(7):
        if is_available_on_date(working_days, current):
            return current
        current += timedelta(days=1)

    return None


def works_on_weekends(working_days: Optional[WorkingDays]) -> bool:
    if working_days is None:
        return False
    return working_days.saturday or working_days.sunday


def works_on_weekdays_only(working_days: Optional[WorkingDays]) -> bool:
    if working_days is None:
        return False
    return (
        working_days.monday
        and working_days.tuesday
        and working_days.wednesday
        and working_days.thursday
        and working_days.friday
        and not working_days.saturday
        and not working_days.sunday
    )


def availability_summary(working_days: Optional[WorkingDays]) -> str:
    """Human-readable availability line for admin views."""
    if working_days is None:
        return "No availability set"

    names = available_weekday_names(working_days)
    if len(names) == 7:
        return "Available every day"
    if not names:
        return "Not available any day"
    if works_on_weekdays_only(working_days):
        return "Weekdays only (Mon-Fri)"
    return "Available: " + ", ".join(name.capitalize() for name in names)
