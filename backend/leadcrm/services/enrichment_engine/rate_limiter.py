# backend/leadcrm/services/enrichment_engine/rate_limiter.py
"""
Quota Rate Limiter for the search API

Counts outbound search calls against a fixed quota per window. Once the
quota is exceeded the caller sleeps out the rest of the window and the
counter starts over. Calls are delayed, never refused.
"""

import asyncio
import time
from typing import Awaitable, Callable, Dict, Optional
import logging

logger = logging.getLogger(__name__)


class RateLimiter:
    """
    Blocking quota limiter (default: 90 calls / 60 seconds)
    """

    def __init__(
        self,
        max_calls: int = 90,
        window_seconds: float = 60.0,
        clock: Optional[Callable[[], float]] = None,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None
    ):
        """
        Args:
            max_calls: Calls allowed per window
            window_seconds: Window length in seconds
            clock: Monotonic clock (injectable for tests)
            sleep: Async sleep (injectable for tests)
        """
        self.max_calls = max_calls
        self.window_seconds = window_seconds
        self._clock = clock or time.monotonic
        self._sleep = sleep or asyncio.sleep

        self.call_count = 0
        self.window_started_at = self._clock()
        self.total_waits = 0
        self._lock = asyncio.Lock()

    async def acquire(self):
        """Count one call; sleep out the window first if the quota is used up."""
        async with self._lock:
            now = self._clock()
            elapsed = now - self.window_started_at

            # Quiet window: start a fresh one
            if elapsed >= self.window_seconds:
                self.call_count = 0
                self.window_started_at = now
                elapsed = 0.0

            self.call_count += 1
            if self.call_count <= self.max_calls:
                return

            wait_time = max(0.0, self.window_seconds - elapsed)
            logger.warning(
                f"⏸️ Search quota reached ({self.max_calls}/{self.window_seconds:.0f}s), "
                f"waiting {wait_time:.1f}s"
            )
            self.total_waits += 1
            if wait_time > 0:
                await self._sleep(wait_time)

            self.call_count = 0
            self.window_started_at = self._clock()

    def get_stats(self) -> Dict:
        """Get current rate limiter stats"""
        return {
            "calls_in_window": self.call_count,
            "max_calls": self.max_calls,
            "window_seconds": self.window_seconds,
            "total_waits": self.total_waits,
        }
