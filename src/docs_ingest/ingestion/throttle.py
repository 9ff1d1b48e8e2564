"""Throttling policies for embedding-service requests.

The embedding provider caps how many requests may be issued per unit of
time.  :class:`~docs_ingest.ingestion.indexer.IndexBuilder` calls
:meth:`ThrottlePolicy.before_request` right before each embedding request
and :meth:`ThrottlePolicy.after_request` right after the resulting
insertion; a policy decides where (and whether) to wait.
"""

from __future__ import annotations

import logging
import math
import time
from collections import deque
from collections.abc import Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from docs_ingest.config import Settings

__all__ = [
    "FixedDelayThrottle",
    "NoThrottle",
    "RateLimitThrottle",
    "ThrottlePolicy",
    "build_throttle",
]

logger = logging.getLogger(__name__)


class ThrottlePolicy:
    """Base policy — never waits."""

    def before_request(self) -> None:
        """Block until another request may be issued."""

    def after_request(self) -> None:
        """Called once the request's result has been inserted."""

    def estimate(self, requests: int) -> float:
        """Return the minimum number of seconds *requests* calls will take."""
        return 0.0


class NoThrottle(ThrottlePolicy):
    """Issue requests back to back."""


class FixedDelayThrottle(ThrottlePolicy):
    """Sleep a constant *delay_seconds* after every request, the last one included."""

    def __init__(
        self,
        delay_seconds: float,
        *,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if delay_seconds < 0:
            raise ValueError(f"delay_seconds must be >= 0, got {delay_seconds}")
        self.delay_seconds = delay_seconds
        self._sleep = sleep

    def after_request(self) -> None:
        if self.delay_seconds:
            self._sleep(self.delay_seconds)

    def estimate(self, requests: int) -> float:
        return requests * self.delay_seconds


class RateLimitThrottle(ThrottlePolicy):
    """Allow at most *max_requests* request starts within any *period_seconds* window.

    Uses a sliding window of start timestamps: when the window is full the
    caller sleeps until the oldest start falls out of it.
    """

    def __init__(
        self,
        max_requests: int,
        period_seconds: float,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if max_requests <= 0:
            raise ValueError(f"max_requests must be positive, got {max_requests}")
        if period_seconds <= 0:
            raise ValueError(f"period_seconds must be positive, got {period_seconds}")
        self.max_requests = max_requests
        self.period_seconds = period_seconds
        self._clock = clock
        self._sleep = sleep
        self._starts: deque[float] = deque()

    def before_request(self) -> None:
        now = self._clock()
        self._evict(now)
        # Sleep may return early; keep waiting until the oldest start expires.
        while len(self._starts) >= self.max_requests:
            wait = self._starts[0] + self.period_seconds - now
            logger.debug("Rate limit reached, sleeping %.1fs", wait)
            self._sleep(wait)
            now = self._clock()
            self._evict(now)
        self._starts.append(now)

    def _evict(self, now: float) -> None:
        while self._starts and self._starts[0] + self.period_seconds <= now:
            self._starts.popleft()

    def estimate(self, requests: int) -> float:
        if requests <= self.max_requests:
            return 0.0
        return (math.ceil(requests / self.max_requests) - 1) * self.period_seconds


def build_throttle(settings: Settings) -> ThrottlePolicy:
    """Return the throttle policy selected by ``settings.throttle``."""
    if settings.throttle == "fixed":
        return FixedDelayThrottle(settings.throttle_delay_seconds)
    if settings.throttle == "rate":
        return RateLimitThrottle(
            settings.rate_limit_requests,
            settings.rate_limit_period_seconds,
        )
    if settings.throttle == "none":
        return NoThrottle()
    raise ValueError(f"Unsupported throttle={settings.throttle!r}. Choose from: fixed, rate, none.")
