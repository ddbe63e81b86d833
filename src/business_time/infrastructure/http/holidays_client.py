"""
Holiday List API Client.

Retrieves the list of non-working holidays from the remote JSON document.
"""

import time
from typing import Any, FrozenSet, Optional

import requests

from business_time.config import settings
from business_time.core.exceptions import ConfigurationError, HolidayServiceError
from business_time.infrastructure.logging import get_logger, log_duration


logger = get_logger(__name__)


def parse_holidays(payload: Any) -> FrozenSet[str]:
    """
    Extract date keys from a holiday payload.

    The payload is a JSON array whose items are either date strings
    or objects carrying a ``date`` field. Anything else yields no dates.

    Args:
        payload: Decoded JSON document.

    Returns:
        Frozenset of date keys.
    """
    if not isinstance(payload, list):
        return frozenset()

    dates = set()
    for item in payload:
        value = item if isinstance(item, str) else (
            item.get("date") if isinstance(item, dict) else None
        )
        if value:
            dates.add(str(value).strip())

    return frozenset(dates)


class HolidaysClient:
    """
    Client for the holiday list provider.

    A single GET with a bounded timeout, no retries: the caller
    falls back to an empty holiday set on any failure.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> None:
        """
        Initialize holidays client.

        Args:
            url: Holiday document URL.
            timeout: Request timeout in seconds.
        """
        self._url = url or settings.holidays.url
        self._timeout = timeout or settings.holidays.timeout_seconds
        self._session: Optional[requests.Session] = None

    @property
    def session(self) -> requests.Session:
        """Get or create HTTP session."""
        if self._session is None:
            self._session = requests.Session()
            self._session.headers.update({"Accept": "application/json"})
        return self._session

    @log_duration("holidays_fetch")
    def fetch_holidays(self) -> FrozenSet[str]:
        """
        Fetch the holiday set.

        Returns:
            Frozenset of holiday date keys.

        Raises:
            ConfigurationError: If no URL is configured.
            HolidayServiceError: On timeout, connection error,
                error status or unparsable payload.
        """
        if not self._url:
            raise ConfigurationError("HOLIDAYS_URL")

        start = time.time()

        try:
            response = self.session.get(self._url, timeout=self._timeout)
            response.raise_for_status()
            payload = response.json()

        except requests.exceptions.Timeout as e:
            raise HolidayServiceError(
                f"timeout after {self._timeout}s",
                duration_ms=int((time.time() - start) * 1000),
            ) from e

        except requests.exceptions.HTTPError as e:
            raise HolidayServiceError(
                f"HTTP {e.response.status_code}",
                status_code=e.response.status_code,
                duration_ms=int((time.time() - start) * 1000),
            ) from e

        except requests.exceptions.JSONDecodeError as e:
            raise HolidayServiceError(
                f"invalid JSON payload: {e}",
                status_code=response.status_code,
                duration_ms=int((time.time() - start) * 1000),
            ) from e

        except requests.exceptions.RequestException as e:
            raise HolidayServiceError(
                f"request failed: {e}",
                duration_ms=int((time.time() - start) * 1000),
            ) from e

        holidays = parse_holidays(payload)

        logger.info(
            f"Fetched {len(holidays)} holidays",
            extra={"extra_fields": {
                "url": self._url,
                "holiday_count": len(holidays),
                "duration_ms": int((time.time() - start) * 1000),
            }}
        )

        return holidays

    def close(self) -> None:
        """Close the HTTP session."""
        if self._session:
            self._session.close()
            self._session = None

    def __enter__(self) -> "HolidaysClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
