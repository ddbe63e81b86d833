"""
Infrastructure Layer.

This layer contains all external dependencies and adapters:
- Logging configuration
- Metrics
- Holiday list provider and cache
"""

from business_time.infrastructure.holidays import (
    get_holiday_source,
    HolidayCache,
    HolidaySource,
)
from business_time.infrastructure.logging import (
    get_logger,
    log_duration,
    log_request_context,
    logger,
    StructuredLogger,
)


__all__ = [
    "get_holiday_source",
    "HolidayCache",
    "HolidaySource",
    "get_logger",
    "log_duration",
    "log_request_context",
    "logger",
    "StructuredLogger",
]
