from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional

from config import settings


@dataclass(slots=True)
class RateLimitRetryPolicy:
    """How the client backs off on HTTP 429.

    ``max_retries`` bounds the number of retries after the first attempt;
    ``deadline_s`` bounds the wall-clock time of the whole call including
    every backoff sleep.
    """

    max_retries: int
    fallback_min_ms: int
    fallback_max_ms: int
    deadline_s: float

    @classmethod
    def from_settings(cls) -> "RateLimitRetryPolicy":
        return cls(
            max_retries=settings.MAX_RETRIES,
            fallback_min_ms=settings.RATE_LIMIT_FALLBACK_MIN_MS,
            fallback_max_ms=settings.RATE_LIMIT_FALLBACK_MAX_MS,
            deadline_s=settings.REQUEST_DEADLINE_S,
        )

    def backoff_seconds(self, retry_after: Optional[str], rng: random.Random) -> float:
        """Server-supplied ``Retry-After`` seconds, else a short random delay."""
        if retry_after:
            try:
                seconds = float(retry_after)
            except ValueError:
                seconds = 0.0
            if seconds > 0:
                return seconds
        return rng.uniform(self.fallback_min_ms, self.fallback_max_ms) / 1000.0
