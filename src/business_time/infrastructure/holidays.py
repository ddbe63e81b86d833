"""
Holiday Source.

Process-wide, memoized access to the holiday set. The first caller
performs the fetch; concurrent callers wait for it and share the
result. Any failure degrades to an empty holiday set.
"""

from threading import Lock
from typing import Iterable, Optional

from business_time.core.exceptions import InfrastructureError
from business_time.core.work_calendar import HolidaySet
from business_time.infrastructure.http import HolidaysClient
from business_time.infrastructure.logging import get_logger
from business_time.infrastructure.metrics import get_metrics


logger = get_logger(__name__)


class HolidayCache:
    """Thread-safe holder for a single holiday set."""

    def __init__(self) -> None:
        self._value: Optional[HolidaySet] = None
        self._lock = Lock()

    def get(self) -> Optional[HolidaySet]:
        """Return the cached set, or None when nothing is cached."""
        with self._lock:
            return self._value

    def set(self, holidays: Iterable[str]) -> None:
        with self._lock:
            self._value = frozenset(holidays)

    def clear(self) -> None:
        with self._lock:
            self._value = None


class HolidaySource:
    """
    Memoized holiday provider.

    Responsible for:
    - Fetching the holiday list once per process
    - Sharing a single in-flight fetch between concurrent callers
    - Falling back to an empty set when the provider fails
    """

    def __init__(
        self,
        client: Optional[HolidaysClient] = None,
        cache: Optional[HolidayCache] = None,
    ) -> None:
        self._client = client or HolidaysClient()
        self._cache = cache or HolidayCache()
        self._fetch_lock = Lock()

    def get_holidays(self) -> HolidaySet:
        """
        Get the holiday set, fetching it on first use.

        Never raises: provider failures are cached as an empty set.

        Returns:
            Frozenset of holiday date keys.
        """
        cached = self._cache.get()
        if cached is not None:
            return cached

        with self._fetch_lock:
            # Another caller may have completed the fetch while we waited
            cached = self._cache.get()
            if cached is not None:
                return cached

            holidays = self._fetch()
            self._cache.set(holidays)
            get_metrics().holidays_loaded.set(len(holidays))
            return holidays

    def _fetch(self) -> HolidaySet:
        try:
            holidays = self._client.fetch_holidays()
        except InfrastructureError as e:
            get_metrics().holiday_fetches_total.inc(status="error")
            logger.warning(
                f"Holiday fetch failed, continuing without holidays: {e}",
                extra={"extra_fields": {
                    "error_type": type(e).__name__,
                    **e.details,
                }}
            )
            return frozenset()

        get_metrics().holiday_fetches_total.inc(status="success")
        return holidays

    def set_cache(self, holidays: Iterable[str]) -> None:
        """Seed the cache directly, bypassing the provider."""
        self._cache.set(holidays)

    def clear_cache(self) -> None:
        """Drop the cached set so the next call fetches again."""
        self._cache.clear()


# Global holiday source instance
_holiday_source: Optional[HolidaySource] = None


def get_holiday_source() -> HolidaySource:
    """Get global holiday source instance."""
    global _holiday_source
    if _holiday_source is None:
        _holiday_source = HolidaySource()
    return _holiday_source
