"""
Test Configuration and Fixtures.

Provides shared fixtures for all tests.
"""

from typing import Generator

import pytest
from flask import Flask
from flask.testing import FlaskClient

from business_time.api.rate_limiting import reset_rate_limiter
from business_time.app import create_app
from business_time.infrastructure.holidays import HolidaySource, get_holiday_source


EASTER_2025_HOLIDAYS = frozenset({
    "2025-04-17",  # Jueves Santo
    "2025-04-18",  # Viernes Santo
})


@pytest.fixture
def app() -> Flask:
    """Create test Flask application."""
    test_config = {
        "TESTING": True,
        "RATE_LIMIT_ENABLED": False,
    }
    return create_app(test_config)


@pytest.fixture
def client(app: Flask) -> FlaskClient:
    """Create test client."""
    return app.test_client()


@pytest.fixture(autouse=True)
def seeded_holidays() -> Generator[HolidaySource, None, None]:
    """Seed the process-wide holiday cache so no test hits the network."""
    source = get_holiday_source()
    source.set_cache(EASTER_2025_HOLIDAYS)
    yield source
    source.clear_cache()


@pytest.fixture(autouse=True)
def fresh_rate_limiter() -> Generator[None, None, None]:
    """Start every test with empty rate limit buckets."""
    reset_rate_limiter()
    yield
    reset_rate_limiter()
