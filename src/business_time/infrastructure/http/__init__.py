"""
HTTP Client Package.

External service clients:
- Holiday list provider
"""

from business_time.infrastructure.http.holidays_client import (
    HolidaysClient,
    parse_holidays,
)


__all__ = [
    "HolidaysClient",
    "parse_holidays",
]
