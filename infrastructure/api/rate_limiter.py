"""Proactive rate limiter matching Riot API's documented windows."""
from __future__ import annotations

import asyncio
import time
from collections import deque
from typing import Callable, Deque, Dict, Optional, Tuple
import logging

logger = logging.getLogger(__name__)


class RateLimiter:
    """
    Sliding-window rate limiter with two windows:
      - Short : N requests per 1 second
      - Long  : N requests per 120 seconds (Riot's 2-min application window)

    This only spaces requests out; 429 handling lives in the client.
    """

    SHORT_WINDOW_S = 1.0
    LONG_WINDOW_S = 120.0

    def __init__(
        self,
        requests_per_1_sec: int = 18,
        requests_per_2_min: int = 90,
        *,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.requests_per_1_sec = requests_per_1_sec
        self.requests_per_2_min = requests_per_2_min
        self._clock = clock

        self._times_short: Deque[float] = deque()
        self._times_long: Deque[float] = deque()
        self._lock = asyncio.Lock()

    def _prune(self, now: float) -> None:
        while self._times_short and now - self._times_short[0] > self.SHORT_WINDOW_S:
            self._times_short.popleft()
        while self._times_long and now - self._times_long[0] > self.LONG_WINDOW_S:
            self._times_long.popleft()

    def _wait_time(self, now: float) -> float:
        wait = 0.0
        if len(self._times_short) >= self.requests_per_1_sec:
            wait = max(wait, self.SHORT_WINDOW_S - (now - self._times_short[0]) + 0.01)
        if len(self._times_long) >= self.requests_per_2_min:
            wait = max(wait, self.LONG_WINDOW_S - (now - self._times_long[0]) + 0.01)
        return wait

    async def acquire(self) -> None:
        async with self._lock:
            while True:
                now = self._clock()
                self._prune(now)
                wait = self._wait_time(now)
                if wait <= 0:
                    self._times_short.append(now)
                    self._times_long.append(now)
                    return
                logger.debug(f"Rate limit — waiting {wait:.2f}s")
                await asyncio.sleep(max(wait, 0.05))

    def get_status(self) -> Tuple[int, int, int, int]:
        self._prune(self._clock())
        return (
            len(self._times_short), self.requests_per_1_sec,
            len(self._times_long), self.requests_per_2_min,
        )

    async def reset(self) -> None:
        async with self._lock:
            self._times_short.clear()
            self._times_long.clear()


class EndpointRateLimiter:
    """Per-endpoint rate limiters with a shared default."""

    def __init__(self) -> None:
        self.limiters: Dict[str, RateLimiter] = {}
        self._default: Optional[RateLimiter] = None

    def set_default_limiter(self, requests_per_1_sec: int = 18, requests_per_2_min: int = 90) -> None:
        self._default = RateLimiter(requests_per_1_sec, requests_per_2_min)

    def add_endpoint_limiter(self, endpoint: str, requests_per_1_sec: int, requests_per_2_min: int) -> None:
        self.limiters[endpoint] = RateLimiter(requests_per_1_sec, requests_per_2_min)

    def _for(self, endpoint: str) -> Optional[RateLimiter]:
        return self.limiters.get(endpoint, self._default)

    async def acquire(self, endpoint: str = "default") -> None:
        limiter = self._for(endpoint)
        if limiter:
            await limiter.acquire()

    async def reset_endpoint(self, endpoint: str = "default") -> None:
        limiter = self._for(endpoint)
        if limiter:
            await limiter.reset()
