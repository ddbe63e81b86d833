"""Configuration package."""

from business_time.config.settings import (
    HolidaySettings,
    RateLimitSettings,
    Settings,
    settings,
)

__all__ = [
    "HolidaySettings",
    "RateLimitSettings",
    "Settings",
    "settings",
]
