"""Process-wide memo of match detail records."""
import asyncio
import logging
from typing import Any, Dict, Optional, Tuple

from domain.enums import Region
from domain.interfaces import IPlayerDataSource
from .fetch_budget import FetchBudget

logger = logging.getLogger(__name__)

CacheKey = Tuple[str, str]


class MatchDetailCache:
    """
    Match records never change once a game is over, so entries are kept for
    the life of the process, keyed by (regional route, match id).

    Only a miss spends budget. Concurrent misses for the same key share one
    in-flight fetch and spend one unit between them.
    """

    def __init__(self, source: IPlayerDataSource, budget: FetchBudget):
        self.source = source
        self.budget = budget
        self._entries: Dict[CacheKey, Dict[str, Any]] = {}
        self._inflight: Dict[CacheKey, "asyncio.Task[Dict[str, Any]]"] = {}

    @staticmethod
    def key(region: Region, match_id: str) -> CacheKey:
        return region.regional_route, match_id

    def peek(self, region: Region, match_id: str) -> Optional[Dict[str, Any]]:
        return self._entries.get(self.key(region, match_id))

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: CacheKey) -> bool:
        return key in self._entries

    async def get(
        self, region: Region, match_id: str, budget: Optional[FetchBudget] = None
    ) -> Dict[str, Any]:
        """Return the detail record, fetching it on a miss.

        A miss is charged to ``budget`` when given, else to the cache's own.

        Raises:
            FetchBudgetExceeded: miss with no budget left (nothing is fetched)
            RemoteError: the fetch failed; the failure is not cached
        """
        key = self.key(region, match_id)
        cached = self._entries.get(key)
        if cached is not None:
            return cached

        task = self._inflight.get(key)
        if task is None:
            (budget if budget is not None else self.budget).consume()
            task = asyncio.ensure_future(self._fetch(region, match_id, key))
            self._inflight[key] = task
        return await asyncio.shield(task)

    async def _fetch(self, region: Region, match_id: str, key: CacheKey) -> Dict[str, Any]:
        try:
            detail = await self.source.get_match_detail(region, match_id)
            self._entries[key] = detail
            logger.debug(f"Match detail cached: {match_id}")
            return detail
        finally:
            self._inflight.pop(key, None)
