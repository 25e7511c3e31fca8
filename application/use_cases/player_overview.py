"""Read-side queries for the presentation layer."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from config import settings
from domain.entities import Catalog, YearAggregate
from domain.enums import QueueType, Region
from domain.interfaces import IPlayerDataSource, IStateRepository
from application.services import StaticCatalogCache, ensure_puuid, tracked_year


class PlayerOverviewQuery:
    """Player views served from the stored document; only mastery is live."""

    def __init__(
        self,
        repository: IStateRepository,
        source: Optional[IPlayerDataSource] = None,
        catalog_cache: Optional[StaticCatalogCache] = None,
        *,
        year: Optional[int] = None,
    ):
        self.repository = repository
        self.source = source
        self.catalog_cache = catalog_cache
        self._year = year

    @property
    def year(self) -> int:
        return tracked_year(self._year)

    async def overview(self, player_id: str, year: Optional[int] = None) -> Dict[str, Any]:
        """
        Bans, champion list, total games and last games of one player.

        Raises:
            EntityNotFound: unknown player id
        """
        year = year or self.year
        state = await self.repository.load()
        player = state.get_player(player_id)
        stats = player.year_stats(year)
        return {
            'player_id': player.id,
            'display_name': player.display_name,
            'riot_id': str(player.riot_id),
            'current_rank': player.current_rank.to_dict() if player.current_rank else None,
            'pending_ban': player.pending_ban.to_dict() if player.pending_ban else None,
            'bans': [b.to_dict() for b in player.bans],
            'year': year,
            'queue': self._queue_label(stats.queue_id if stats else settings.TRACKED_QUEUE_ID),
            'games': [row.to_dict() for row in stats.by_entity_list] if stats else [],
            'total_games': stats.total_games if stats else 0,
            'needs_catchup': player.needs_catchup,
            'last5': [g.to_dict() for g in player.last5.games] if player.last5 else [],
            'last_updated_at': player.last_updated_at,
            'last_error': player.last_error,
        }

    @staticmethod
    def _queue_label(queue_id: Optional[int]) -> str:
        queue = QueueType.from_queue_id(queue_id)
        if queue is not None:
            return queue.queue_name
        return "All queues" if queue_id is None else f"Queue {queue_id}"

    async def champion_games(self, player_id: str, year: Optional[int] = None) -> Dict[str, Any]:
        year = year or self.year
        state = await self.repository.load()
        player = state.get_player(player_id)
        stats = player.year_stats(year) or YearAggregate(year=year)
        return {
            'player_id': player.id,
            'display_name': player.display_name,
            **stats.to_dict(),
        }

    async def champions(self, locale: Optional[str] = None) -> Catalog:
        if self.catalog_cache is None:
            raise RuntimeError("champion catalog is not configured")
        return await self.catalog_cache.get_catalog(locale)

    async def top_mastery(self, player_id: str, count: int = 5) -> List[Dict[str, Any]]:
        """Live top champion masteries, with catalog names where known."""
        if self.source is None:
            raise RuntimeError("remote data source is not configured")
        state = await self.repository.load()
        player = state.get_player(player_id)
        region = Region.from_platform(player.platform)
        had_puuid = bool(player.puuid)
        await ensure_puuid(self.source, player)
        if not had_puuid:
            async with self.repository.lock():
                fresh = await self.repository.load()
                fresh.get_player(player_id).puuid = player.puuid
                await self.repository.save(fresh)

        entries = await self.source.get_top_mastery(player.puuid, region, count)
        catalog = await self.catalog_cache.get_catalog() if self.catalog_cache else None
        out: List[Dict[str, Any]] = []
        for entry in entries:
            champion_id = int(entry.get("championId") or 0)
            out.append({
                'champion_id': champion_id,
                'name': catalog.display_name(champion_id) if catalog else f"Champion {champion_id}",
                'icon': catalog.icon(champion_id) if catalog else None,
                'level': int(entry.get("championLevel") or 0),
                'points': int(entry.get("championPoints") or 0),
                'last_play_time': entry.get("lastPlayTime"),
            })
        return out
