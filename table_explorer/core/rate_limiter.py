"""
Minimum-interval rate limiter for outbound LLM calls.

Keeps a single "last dispatch" timestamp. ``acquire()`` blocks the calling
thread until the configured interval has elapsed since the previous dispatch,
then stamps the new dispatch time. The lock is held across check, sleep and
stamp, so concurrent callers are spaced one interval apart in arrival order.
"""

import logging
import threading
import time
from typing import Callable, Optional

logger = logging.getLogger("table_explorer")


class MinIntervalRateLimiter:
    """Enforces a minimum spacing between consecutive dispatches."""

    def __init__(
        self,
        min_interval_seconds: float = 1.0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if min_interval_seconds < 0:
            raise ValueError("min_interval_seconds must be >= 0")
        self.min_interval_seconds = min_interval_seconds
        self._clock = clock
        self._sleep = sleep
        self._lock = threading.Lock()
        self._last_dispatch: Optional[float] = None

    @property
    def last_dispatch(self) -> Optional[float]:
        return self._last_dispatch

    def acquire(self) -> float:
        """
        Block until the caller may dispatch.

        Returns:
            Seconds the caller waited (0.0 when no wait was needed)
        """
        with self._lock:
            waited = 0.0
            now = self._clock()
            if self._last_dispatch is not None:
                elapsed = now - self._last_dispatch
                if elapsed < self.min_interval_seconds:
                    waited = self.min_interval_seconds - elapsed
                    logger.debug(f"Rate limiter: waiting {waited * 1000:.0f}ms before dispatch")
                    self._sleep(waited)
                    now = self._clock()
            self._last_dispatch = now
            return waited

    def reset(self) -> None:
        with self._lock:
            self._last_dispatch = None
