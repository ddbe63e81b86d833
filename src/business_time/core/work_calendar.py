"""
Work calendar predicates.

Classifies civil-time instants as working days, weekends or holidays
and locates the intra-day work window they fall in. All rules are
defined in a single fixed civil timezone.
Pure business logic with no external dependencies.
"""

from datetime import datetime, time, timedelta
from enum import Enum
from typing import AbstractSet, FrozenSet
from zoneinfo import ZoneInfo


HolidaySet = FrozenSet[str]

CIVIL_TIMEZONE = ZoneInfo("America/Bogota")

# Fixed daily schedule (civil time)
MORNING_START = time(8, 0)
MORNING_END = time(12, 0)
AFTERNOON_START = time(13, 0)
AFTERNOON_END = time(17, 0)

ONE_DAY = timedelta(days=1)


class WorkWindow(str, Enum):
    """Intra-day windows of the work schedule."""
    MORNING = "morning"      # [08:00, 12:00)
    LUNCH = "lunch"          # [12:00, 13:00)
    AFTERNOON = "afternoon"  # [13:00, 17:00]
    OFF_HOURS = "off_hours"  # before 08:00 or after 17:00


def to_civil(instant: datetime) -> datetime:
    """Project an aware datetime into the civil timezone."""
    return instant.astimezone(CIVIL_TIMEZONE)


def at(instant: datetime, boundary: time) -> datetime:
    """Return the same calendar day at the given boundary."""
    return instant.replace(
        hour=boundary.hour,
        minute=boundary.minute,
        second=0,
        microsecond=0,
    )


def date_key(instant: datetime) -> str:
    """Date-only key used for holiday lookups (YYYY-MM-DD)."""
    return instant.date().isoformat()


def is_weekend(instant: datetime) -> bool:
    # isoweekday: Saturday=6, Sunday=7
    return instant.isoweekday() >= 6


def is_holiday(instant: datetime, holidays: AbstractSet[str]) -> bool:
    return date_key(instant) in holidays


def is_working_day(instant: datetime, holidays: AbstractSet[str]) -> bool:
    """True if the instant's day is neither a weekend day nor a holiday."""
    return not is_weekend(instant) and not is_holiday(instant, holidays)


def in_morning(instant: datetime) -> bool:
    return at(instant, MORNING_START) <= instant < at(instant, MORNING_END)


def in_lunch(instant: datetime) -> bool:
    return at(instant, MORNING_END) <= instant < at(instant, AFTERNOON_START)


def in_afternoon(instant: datetime) -> bool:
    # 17:00 itself still belongs to the afternoon window
    return at(instant, AFTERNOON_START) <= instant <= at(instant, AFTERNOON_END)


def is_before_opening(instant: datetime) -> bool:
    return instant < at(instant, MORNING_START)


def is_after_closing(instant: datetime) -> bool:
    return instant > at(instant, AFTERNOON_END)


def window_of(instant: datetime) -> WorkWindow:
    """Locate the work window an instant falls in, ignoring the day type."""
    if in_morning(instant):
        return WorkWindow.MORNING
    if in_lunch(instant):
        return WorkWindow.LUNCH
    if in_afternoon(instant):
        return WorkWindow.AFTERNOON
    return WorkWindow.OFF_HOURS
