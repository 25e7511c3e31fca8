"""Error taxonomy shared by every layer."""
from __future__ import annotations

from typing import Optional


class TrackerError(Exception):
    """Base class for all tracker errors."""


class RemoteError(TrackerError):
    """A call to the remote provider did not produce a usable response."""


class RateLimitExceeded(RemoteError):
    """429 responses persisted past the retry budget or the call deadline."""

    def __init__(self, url: str, attempts: int, reason: str = "retries exhausted") -> None:
        super().__init__(f"rate limit exceeded after {attempts} attempt(s) ({reason}): {url}")
        self.url = url
        self.attempts = attempts
        self.reason = reason


class RemoteRequestFailed(RemoteError):
    """Non-2xx, non-429 response, or a transport failure (``status`` is None)."""

    def __init__(self, status: Optional[int], body: str = "", url: str = "") -> None:
        label = status if status is not None else "network"
        super().__init__(f"remote request failed [{label}]: {body[:200]}")
        self.status = status
        self.body = body
        self.url = url


class FetchBudgetExceeded(TrackerError):
    """The per-cycle match-detail budget is spent; retry on a later pass."""

    def __init__(self, limit: Optional[int]) -> None:
        super().__init__(f"match detail budget exceeded (limit={limit})")
        self.limit = limit


class EntityNotFound(TrackerError):
    """Unknown player id (or other entity) on an action."""

    def __init__(self, kind: str, key: str) -> None:
        super().__init__(f"{kind} not found: {key}")
        self.kind = kind
        self.key = key


class InvariantViolation(TrackerError):
    """Rejected action; no state was mutated."""


class StateNotSaved(TrackerError):
    """Writing the state document failed; the stored copy is unchanged."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"state not saved: {reason}")
        self.reason = reason
