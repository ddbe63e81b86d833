"""
Business days counting module.

Counts Monday-Friday dates between two calendar dates.
Holidays are not taken into account.
"""

import re
from datetime import date, datetime, timedelta
from typing import Union

from business_time.core.exceptions import ValidationError


DateLike = Union[date, datetime, str]

_YMD_PATTERN = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")


def _to_date(value: DateLike, field: str) -> date:
    """Coerce a date, datetime or string into a calendar date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = value.strip()
    try:
        match = _YMD_PATTERN.match(text)
        if match:
            year, month, day = (int(part) for part in match.groups())
            return date(year, month, day)
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError as e:
        raise ValidationError(field, f"Invalid date: {value!r}") from e


def count_business_days(start: DateLike, end: DateLike) -> int:
    """
    Count weekdays strictly after `start` up to and including `end`.

    Args:
        start: First date (excluded from the count).
        end: Last date (included in the count).

    Returns:
        Number of weekdays in the interval, 0 if `end` is not after `start`.

    Raises:
        ValidationError: If a string value cannot be parsed as a date.
    """
    start_date = _to_date(start, "start")
    end_date = _to_date(end, "end")

    if end_date <= start_date:
        return 0

    count = 0
    current = start_date + timedelta(days=1)

    while current <= end_date:
        # Weekend check (Saturday=5, Sunday=6)
        if current.weekday() < 5:
            count += 1
        current += timedelta(days=1)

    return count
