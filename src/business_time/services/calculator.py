"""
Business Date Calculator Service.

Orchestrates the business-time computation: holiday lookup, backward
anchoring, business day addition, then business hour addition.
"""

from datetime import datetime
from typing import Optional

from business_time.core.business_time import (
    add_business_days,
    add_business_hours,
    adjust_to_previous_working_time,
)
from business_time.core.work_calendar import CIVIL_TIMEZONE, to_civil
from business_time.infrastructure.holidays import HolidaySource, get_holiday_source
from business_time.infrastructure.logging import get_logger, log_duration


logger = get_logger(__name__)


class BusinessDateCalculator:
    """
    Service computing business dates.

    Responsible for:
    - Obtaining the holiday set
    - Projecting the start instant into civil time
    - Applying anchoring, day and hour accumulation in that order
    """

    def __init__(self, holiday_source: Optional[HolidaySource] = None) -> None:
        self._holidays = holiday_source or get_holiday_source()

    @log_duration("calculate_business_date")
    def calculate(
        self,
        start: Optional[datetime] = None,
        days: int = 0,
        hours: int = 0,
    ) -> datetime:
        """
        Add business days then business hours to a start instant.

        Args:
            start: Aware start instant in any timezone. Defaults to now.
            days: Business days to add (>= 0).
            hours: Business hours to add (>= 0).

        Returns:
            The resulting instant in the civil timezone.

        Raises:
            ValueError: If days or hours is negative.
        """
        if days < 0 or hours < 0:
            raise ValueError("days and hours must be non-negative")

        holidays = self._holidays.get_holidays()

        origin = to_civil(start) if start is not None else datetime.now(CIVIL_TIMEZONE)
        anchor = adjust_to_previous_working_time(origin, holidays)
        cursor = anchor

        if days > 0:
            cursor = add_business_days(cursor, days, holidays)

        if hours > 0:
            cursor = add_business_hours(cursor, hours, holidays)

        logger.info(
            "Business date calculated",
            extra={"extra_fields": {
                "start": origin,
                "anchor": anchor,
                "days": days,
                "hours": hours,
                "result": cursor,
                "holiday_count": len(holidays),
            }}
        )

        return to_civil(cursor)


def calculate_business_date(
    start: Optional[datetime] = None,
    days: int = 0,
    hours: int = 0,
) -> datetime:
    """Compute a business date using the process-wide holiday source."""
    return BusinessDateCalculator().calculate(start, days, hours)
