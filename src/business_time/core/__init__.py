"""Core package - Pure business logic with no external dependencies."""

from business_time.core.business_days import count_business_days
from business_time.core.business_time import (
    add_business_days,
    add_business_hours,
    adjust_to_previous_working_time,
    advance_to_window_start,
)
from business_time.core.exceptions import (
    BusinessError,
    BusinessTimeError,
    ConfigurationError,
    ExternalServiceError,
    HolidayServiceError,
    InfrastructureError,
    ValidationError,
)
from business_time.core.work_calendar import (
    CIVIL_TIMEZONE,
    HolidaySet,
    WorkWindow,
    is_holiday,
    is_weekend,
    is_working_day,
    to_civil,
    window_of,
)

__all__ = [
    # Business time
    "add_business_days",
    "add_business_hours",
    "adjust_to_previous_working_time",
    "advance_to_window_start",
    "count_business_days",
    # Work calendar
    "CIVIL_TIMEZONE",
    "HolidaySet",
    "WorkWindow",
    "is_holiday",
    "is_weekend",
    "is_working_day",
    "to_civil",
    "window_of",
    # Exceptions
    "BusinessError",
    "BusinessTimeError",
    "ConfigurationError",
    "ExternalServiceError",
    "HolidayServiceError",
    "InfrastructureError",
    "ValidationError",
]
