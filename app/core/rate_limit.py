"""
Fixed-window rate limiter.

Counters live in process memory, so limits are per worker process. A
multi-process deployment needs the counters in a shared store with atomic
increment-and-expire.
"""
import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

logger = logging.getLogger(__name__)


@dataclass
class RateLimitResult:
    """Outcome of a single rate limit check."""

    allowed: bool
    remaining: int
    retry_after: Optional[float] = None  # seconds until the window resets


@dataclass
class _Window:
    count: int
    expires: float


class FixedWindowRateLimiter:
    """
    Counts hits per key inside a fixed window that opens on the first hit.

    Features:
    - Arbitrary keys (e.g. "scripts:<user_id>")
    - Per-call limit and window size
    - Injectable clock for testing
    - Expired windows are swept every `purge_every` checks
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        purge_every: int = 1000,
    ):
        self._clock = clock
        self._purge_every = max(1, purge_every)
        self._checks = 0
        self._windows: Dict[str, _Window] = {}

    def check(self, key: str, limit: int, window_seconds: float) -> RateLimitResult:
        """
        Register a hit for key and report whether it is allowed.

        Rejected hits are not counted.
        """
        self._checks += 1
        if self._checks % self._purge_every == 0:
            self.purge_expired()

        now = self._clock()
        window = self._windows.get(key)

        if window is None or window.expires < now:
            self._windows[key] = _Window(count=1, expires=now + window_seconds)
            return RateLimitResult(allowed=True, remaining=limit - 1)

        if window.count >= limit:
            retry_after = window.expires - now
            logger.info(f"Rate limit hit for {key}, retry in {retry_after:.1f}s")
            return RateLimitResult(allowed=False, remaining=0, retry_after=retry_after)

        window.count += 1
        return RateLimitResult(allowed=True, remaining=limit - window.count)

    def reset(self, key: str) -> None:
        """Forget the window for key."""
        self._windows.pop(key, None)

    def purge_expired(self) -> int:
        """Drop expired windows, returning how many were removed."""
        now = self._clock()
        expired = [k for k, w in self._windows.items() if w.expires < now]
        for key in expired:
            del self._windows[key]
        return len(expired)


# Global instance
_rate_limiter: Optional[FixedWindowRateLimiter] = None


def get_rate_limiter() -> FixedWindowRateLimiter:
    """Get the process-wide rate limiter."""
    global _rate_limiter
    if _rate_limiter is None:
        _rate_limiter = FixedWindowRateLimiter()
    return _rate_limiter
