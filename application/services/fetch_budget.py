"""Per-cycle allowance of uncached match detail fetches."""
from typing import Optional

from domain.errors import FetchBudgetExceeded


class FetchBudget:
    """Counts down uncached match detail fetches for one cycle.

    ``limit=None`` means unlimited. :meth:`consume` has no suspension point,
    so concurrent workers on one event loop can never overdraw it.
    """

    def __init__(self, limit: Optional[int]):
        self.limit = limit
        self.remaining = limit
        self.spent = 0

    def reset(self, limit: Optional[int] = None) -> None:
        if limit is not None:
            self.limit = limit
        self.remaining = self.limit
        self.spent = 0

    @property
    def exhausted(self) -> bool:
        return self.remaining is not None and self.remaining <= 0

    def consume(self) -> None:
        if self.remaining is not None:
            if self.remaining <= 0:
                raise FetchBudgetExceeded(self.limit)
            self.remaining -= 1
        self.spent += 1

    def __repr__(self) -> str:
        return f"FetchBudget(limit={self.limit}, remaining={self.remaining}, spent={self.spent})"
