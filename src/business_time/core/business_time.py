"""
Business time arithmetic.

Anchors an arbitrary start instant to the nearest previous working
time, then advances it by whole business days and business hours.
Instants are expected to be aware datetimes in the civil timezone.
Pure business logic with no external dependencies.
"""

from datetime import datetime, timedelta
from typing import AbstractSet, Callable, Dict, Tuple

from business_time.core.work_calendar import (
    AFTERNOON_END,
    AFTERNOON_START,
    MORNING_END,
    MORNING_START,
    ONE_DAY,
    WorkWindow,
    at,
    in_lunch,
    is_after_closing,
    is_before_opening,
    is_working_day,
    window_of,
)


ZERO = timedelta(0)


def _previous_working_day_end(instant: datetime, holidays: AbstractSet[str]) -> datetime:
    """Step back day by day (pinned to 17:00) until a working day is found."""
    cursor = at(instant - ONE_DAY, AFTERNOON_END)
    while not is_working_day(cursor, holidays):
        cursor = at(cursor - ONE_DAY, AFTERNOON_END)
    return cursor


def _next_working_day_start(instant: datetime, holidays: AbstractSet[str]) -> datetime:
    """Step forward day by day (pinned to 08:00) until a working day is found."""
    cursor = at(instant + ONE_DAY, MORNING_START)
    while not is_working_day(cursor, holidays):
        cursor = at(cursor + ONE_DAY, MORNING_START)
    return cursor


def adjust_to_previous_working_time(
    start: datetime,
    holidays: AbstractSet[str],
) -> datetime:
    """
    Normalize a start instant backward to the nearest working time.

    Rules, first match wins:
    - Non-working day: previous working day at 17:00.
    - After 17:00: same day at 17:00.
    - During lunch: same day at 12:00.
    - Before 08:00: previous working day at 17:00.
    - Otherwise the instant is already inside a work window.

    Args:
        start: Start instant in the civil timezone.
        holidays: Holiday date keys.

    Returns:
        The anchored instant.
    """
    if not is_working_day(start, holidays):
        return _previous_working_day_end(start, holidays)

    if is_after_closing(start):
        return at(start, AFTERNOON_END)

    if in_lunch(start):
        return at(start, MORNING_END)

    if is_before_opening(start):
        return _previous_working_day_end(start, holidays)

    return start


def add_business_days(
    anchor: datetime,
    days: int,
    holidays: AbstractSet[str],
) -> datetime:
    """
    Add whole business days, preserving the time of day.

    The anchor's own day is never counted. A result that lands in the
    lunch break is moved back to 12:00.

    Args:
        anchor: Anchored start instant.
        days: Number of business days to add.
        holidays: Holiday date keys.

    Returns:
        The resulting instant.
    """
    cursor = anchor

    for _ in range(days):
        cursor = cursor + ONE_DAY
        while not is_working_day(cursor, holidays):
            cursor = cursor + ONE_DAY

    if in_lunch(cursor):
        cursor = at(cursor, MORNING_END)

    return cursor


def advance_to_window_start(instant: datetime, holidays: AbstractSet[str]) -> datetime:
    """
    Move an instant forward to the start of the next work window.

    Lunch goes to 13:00, after closing goes to 08:00 the next day and
    before opening goes to 08:00 the same day. Any landing on a
    non-working day rolls forward to the next working day at 08:00.
    Instants already inside a window only get the working-day check.
    """
    cursor = instant

    if in_lunch(cursor):
        cursor = at(cursor, AFTERNOON_START)
    elif is_after_closing(cursor):
        cursor = at(cursor + ONE_DAY, MORNING_START)
    elif is_before_opening(cursor):
        cursor = at(cursor, MORNING_START)

    if not is_working_day(cursor, holidays):
        cursor = _next_working_day_start(cursor, holidays)

    return cursor


def _consume(
    cursor: datetime,
    window_end: datetime,
    remaining: timedelta,
) -> Tuple[datetime, timedelta]:
    """Spend as much of `remaining` as fits before `window_end`."""
    taken = min(window_end - cursor, remaining)
    return cursor + taken, remaining - taken


Step = Callable[[datetime, timedelta, AbstractSet[str]], Tuple[datetime, timedelta]]


def _morning_step(
    cursor: datetime,
    remaining: timedelta,
    holidays: AbstractSet[str],
) -> Tuple[datetime, timedelta]:
    cursor, remaining = _consume(cursor, at(cursor, MORNING_END), remaining)
    if remaining > ZERO:
        cursor = at(cursor, AFTERNOON_START)
    return cursor, remaining


def _afternoon_step(
    cursor: datetime,
    remaining: timedelta,
    holidays: AbstractSet[str],
) -> Tuple[datetime, timedelta]:
    cursor, remaining = _consume(cursor, at(cursor, AFTERNOON_END), remaining)
    if remaining > ZERO:
        cursor = _next_working_day_start(cursor, holidays)
    return cursor, remaining


def _idle_step(
    cursor: datetime,
    remaining: timedelta,
    holidays: AbstractSet[str],
) -> Tuple[datetime, timedelta]:
    return advance_to_window_start(cursor, holidays), remaining


_STEPS: Dict[WorkWindow, Step] = {
    WorkWindow.MORNING: _morning_step,
    WorkWindow.LUNCH: _idle_step,
    WorkWindow.AFTERNOON: _afternoon_step,
    WorkWindow.OFF_HOURS: _idle_step,
}


def add_business_hours(
    start: datetime,
    hours: int,
    holidays: AbstractSet[str],
) -> datetime:
    """
    Add business hours, consuming only morning and afternoon time.

    Lunch, off hours, weekends and holidays contribute nothing.
    Arithmetic is done with timedelta so partial windows land on the
    exact fractional-hour instant.

    Args:
        start: Start instant in the civil timezone.
        hours: Number of business hours to add.
        holidays: Holiday date keys.

    Returns:
        The resulting instant.
    """
    remaining = timedelta(hours=hours)
    cursor = start

    if window_of(cursor) not in (WorkWindow.MORNING, WorkWindow.AFTERNOON):
        cursor = advance_to_window_start(cursor, holidays)

    while remaining > ZERO:
        if not is_working_day(cursor, holidays):
            cursor = _next_working_day_start(cursor, holidays)
            continue

        step = _STEPS[window_of(cursor)]
        cursor, remaining = step(cursor, remaining, holidays)

    return cursor
