"""Small worker pool for match detail fetches."""
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence

from domain.errors import FetchBudgetExceeded, RemoteError

logger = logging.getLogger(__name__)


@dataclass
class PoolOutcome:
    """What a pool run got through before finishing or stopping."""

    processed: List[str] = field(default_factory=list)
    budget_exhausted: bool = False
    error: Optional[RemoteError] = None

    def remaining(self, ids: Sequence[str]) -> List[str]:
        done = set(self.processed)
        return [match_id for match_id in ids if match_id not in done]


async def fetch_details(
    ids: Sequence[str],
    fetch: Callable[[str], Awaitable[Dict[str, Any]]],
    on_detail: Callable[[str, Dict[str, Any]], None],
    workers: int = 3,
) -> PoolOutcome:
    """
    Fetch ``ids`` with at most ``workers`` requests in flight.

    ``on_detail`` runs synchronously for each record, so callers can mutate
    shared aggregates without further locking. The first budget cut-off or
    remote error stops every worker from taking new ids; records already
    in flight are still handled. Remote errors are returned, not raised.
    """
    queue: "asyncio.Queue[str]" = asyncio.Queue()
    for match_id in ids:
        queue.put_nowait(match_id)

    outcome = PoolOutcome()
    stopped = False

    async def worker() -> None:
        nonlocal stopped
        while not stopped:
            try:
                match_id = queue.get_nowait()
            except asyncio.QueueEmpty:
                return
            try:
                detail = await fetch(match_id)
            except FetchBudgetExceeded:
                outcome.budget_exhausted = True
                stopped = True
                return
            except RemoteError as exc:
                if outcome.error is None:
                    outcome.error = exc
                stopped = True
                return
            on_detail(match_id, detail)
            outcome.processed.append(match_id)

    width = min(max(workers, 1), len(ids))
    if width:
        await asyncio.gather(*(worker() for _ in range(width)))

    logger.debug(
        f"Detail pool: {len(outcome.processed)}/{len(ids)} processed, "
        f"budget_exhausted={outcome.budget_exhausted}, error={outcome.error!r}"
    )
    return outcome
