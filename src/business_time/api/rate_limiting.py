"""
Rate Limiting.

Provides per-client request rate limiting for API endpoints.
"""

import time
from dataclasses import dataclass
from functools import wraps
from threading import Lock
from typing import Any, Callable, Dict, Optional, Tuple

from flask import current_app, jsonify, request

from business_time.config import settings
from business_time.infrastructure.logging import get_logger


logger = get_logger(__name__)


@dataclass
class TokenBucket:
    """Token bucket for rate limiting."""
    capacity: float
    tokens: float
    last_update: float
    refill_rate: float  # tokens per second

    def consume(self, tokens: int = 1) -> bool:
        """Try to consume tokens. Returns True if successful."""
        now = time.time()
        self.tokens = min(self.capacity, self.tokens + (now - self.last_update) * self.refill_rate)
        self.last_update = now

        if self.tokens >= tokens:
            self.tokens -= tokens
            return True
        return False

    @property
    def retry_after(self) -> int:
        """Seconds until a token is available."""
        if self.tokens >= 1:
            return 0
        return int((1 - self.tokens) / self.refill_rate) + 1


class RateLimiter:
    """
    Rate limiter using token bucket algorithm.

    Thread-safe implementation for Flask applications. Buckets idle for
    longer than the max age are dropped once the map reaches its size
    limit, and the least recently used ones go next if that is not enough.
    """

    def __init__(
        self,
        requests_per_minute: Optional[int] = None,
        burst_size: Optional[int] = None,
        bucket_max_age_seconds: Optional[int] = None,
        max_buckets: Optional[int] = None,
    ) -> None:
        self._requests_per_minute = requests_per_minute or settings.rate_limit.requests_per_minute
        self._burst_size = burst_size or settings.rate_limit.burst_size
        self._bucket_max_age = bucket_max_age_seconds or settings.rate_limit.bucket_max_age_seconds
        self._max_buckets = max_buckets or settings.rate_limit.max_buckets
        self._buckets: Dict[str, TokenBucket] = {}
        self._lock = Lock()

    @property
    def bucket_count(self) -> int:
        return len(self._buckets)

    def _get_client_id(self) -> str:
        """Get unique client identifier."""
        # First hop of X-Forwarded-For when behind a load balancer
        forwarded = request.headers.get("X-Forwarded-For", "")
        if forwarded:
            return forwarded.split(",")[0].strip()
        return request.remote_addr or "unknown"

    def _prune(self, now: float) -> int:
        """Drop stale buckets, then the oldest ones if still at capacity. Caller holds the lock."""
        expired = [
            client_id
            for client_id, bucket in self._buckets.items()
            if now - bucket.last_update > self._bucket_max_age
        ]
        for client_id in expired:
            del self._buckets[client_id]

        overflow = len(self._buckets) - self._max_buckets + 1
        if overflow > 0:
            oldest = sorted(self._buckets, key=lambda cid: self._buckets[cid].last_update)
            for client_id in oldest[:overflow]:
                del self._buckets[client_id]
            expired.extend(oldest[:overflow])

        if expired:
            logger.debug(
                "Pruned rate limit buckets",
                extra={"extra_fields": {
                    "removed": len(expired),
                    "remaining": len(self._buckets),
                }}
            )
        return len(expired)

    def is_allowed(self) -> Tuple[bool, int]:
        """
        Check if the current request is allowed.

        Returns:
            Tuple of (is_allowed, retry_after_seconds)
        """
        client_id = self._get_client_id()

        with self._lock:
            bucket = self._buckets.get(client_id)
            if bucket is None:
                now = time.time()
                if len(self._buckets) >= self._max_buckets:
                    self._prune(now)
                bucket = TokenBucket(
                    capacity=float(self._burst_size),
                    tokens=float(self._burst_size),
                    last_update=now,
                    refill_rate=self._requests_per_minute / 60.0,
                )
                self._buckets[client_id] = bucket

            if bucket.consume():
                return True, 0
            return False, bucket.retry_after


# Global rate limiter instance
_rate_limiter: Optional[RateLimiter] = None


def get_rate_limiter() -> RateLimiter:
    """Get global rate limiter instance."""
    global _rate_limiter
    if _rate_limiter is None:
        _rate_limiter = RateLimiter()
    return _rate_limiter


def reset_rate_limiter() -> None:
    """Drop all client buckets."""
    global _rate_limiter
    _rate_limiter = None


def rate_limit(func: Callable) -> Callable:
    """
    Decorator to apply rate limiting to an endpoint.

    Skipped when the app config sets RATE_LIMIT_ENABLED to False.

    Usage:
        @api_bp.route("/my-endpoint", methods=["GET"])
        @rate_limit
        def my_endpoint():
            ...
    """
    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        if not current_app.config.get("RATE_LIMIT_ENABLED", True):
            return func(*args, **kwargs)

        allowed, retry_after = get_rate_limiter().is_allowed()

        if not allowed:
            logger.warning(
                "Rate limit exceeded",
                extra={"extra_fields": {"retry_after": retry_after}}
            )
            response = jsonify({
                "error": "rate_limit_exceeded",
                "message": "Rate limit exceeded",
                "retry_after": retry_after,
            })
            response.status_code = 429
            response.headers["Retry-After"] = str(retry_after)
            return response

        return func(*args, **kwargs)

    return wrapper
