"""
Application configuration.

Centralizes environment variables, constants, and settings
using dataclasses for type safety and immutability.
"""

import os
from dataclasses import dataclass, field


@dataclass(frozen=True)
class HolidaySettings:
    """Holiday list provider settings."""

    url: str = field(
        default_factory=lambda: os.environ.get(
            "HOLIDAYS_URL",
            "https://content.capta.co/Recruitment/WorkingDays.json",
        )
    )
    timeout_seconds: float = field(
        default_factory=lambda: float(os.environ.get("HOLIDAYS_TIMEOUT_SECONDS", 2.0))
    )


@dataclass(frozen=True)
class RateLimitSettings:
    """Per-client request rate limits."""

    requests_per_minute: int = field(
        default_factory=lambda: int(os.environ.get("RATE_LIMIT_PER_MINUTE", 60))
    )
    burst_size: int = field(
        default_factory=lambda: int(os.environ.get("RATE_LIMIT_BURST", 10))
    )
    bucket_max_age_seconds: int = field(
        default_factory=lambda: int(os.environ.get("RATE_LIMIT_BUCKET_MAX_AGE", 3600))
    )
    max_buckets: int = field(
        default_factory=lambda: int(os.environ.get("RATE_LIMIT_MAX_BUCKETS", 10000))
    )


@dataclass(frozen=True)
class Settings:
    """Main application settings."""

    holidays: HolidaySettings = field(default_factory=HolidaySettings)
    rate_limit: RateLimitSettings = field(default_factory=RateLimitSettings)
    port: int = field(default_factory=lambda: int(os.environ.get("PORT", 8080)))
    debug: bool = field(default_factory=lambda: os.environ.get("DEBUG", "false").lower() == "true")
    environment: str = field(
        default_factory=lambda: os.environ.get("ENVIRONMENT", "development")
    )
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO").upper()
    )


# Singleton settings instance
settings = Settings()
