"""Match id listing over one calendar year."""
import logging
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from config import settings
from domain.enums import Region
from domain.interfaces import IPlayerDataSource

logger = logging.getLogger(__name__)


def year_window(year: int) -> Tuple[int, int]:
    """``[Jan 1 UTC of year, Jan 1 UTC of year+1)`` as epoch seconds."""
    start = int(datetime(year, 1, 1, tzinfo=timezone.utc).timestamp())
    end = int(datetime(year + 1, 1, 1, tzinfo=timezone.utc).timestamp())
    return start, end


class YearWindowMatchEnumerator:
    """Pages through a player's match ids for one year, newest first."""

    def __init__(self, source: IPlayerDataSource, page_size: Optional[int] = None):
        self.source = source
        self.page_size = page_size or settings.MATCH_PAGE_SIZE

    async def list_match_ids(
        self,
        puuid: str,
        region: Region,
        year: int,
        queue_id: Optional[int] = None,
        stop_at: Optional[str] = None,
    ) -> List[str]:
        """
        Collect match ids in the year window.

        Args:
            puuid: Player id
            region: Platform the player lives on
            year: Calendar year (UTC)
            queue_id: Optional queue filter
            stop_at: Stop paging after the page that contains this id

        Returns:
            Ids, newest first
        """
        start_time, end_time = year_window(year)
        ids: List[str] = []
        start = 0

        while True:
            page = await self.source.get_match_ids(
                puuid,
                region,
                start_time=start_time,
                end_time=end_time,
                start=start,
                count=self.page_size,
                queue_id=queue_id,
            )
            if not page:
                break
            ids.extend(page)
            if stop_at is not None and stop_at in page:
                break
            if len(page) < self.page_size:
                break
            start += len(page)

        logger.debug(f"Listed {len(ids)} match ids for {year} on {region.value}")
        return ids
