"""Last-N games summary."""
import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from config import settings
from domain.entities import Catalog, Player, RecentGame, RecentGames
from domain.enums import Region
from domain.interfaces import IPlayerDataSource
from .catalog_cache import StaticCatalogCache
from .incremental_aggregator import find_participant, is_remake
from .match_detail_cache import MatchDetailCache
from .timeutil import epoch_ms_to_iso, utc_now_iso

logger = logging.getLogger(__name__)


def build_recent_game(
    match_id: str,
    detail: Dict[str, Any],
    puuid: str,
    catalog: Optional[Catalog],
    remake_max_duration_sec: Optional[int] = None,
) -> Optional[RecentGame]:
    """RecentGame for ``puuid`` in ``detail``; None for remakes or absent players."""
    if is_remake(detail, remake_max_duration_sec):
        return None
    me = find_participant(detail, puuid)
    if me is None:
        return None
    info = detail.get("info") or {}
    champion_id = int(me.get("championId") or 0)
    return RecentGame(
        match_id=match_id,
        time=epoch_ms_to_iso(info.get("gameEndTimestamp")),
        win=bool(me.get("win")),
        champion_id=champion_id,
        champion_name=catalog.display_name(champion_id) if catalog else f"Champion {champion_id}",
        champion_icon=catalog.icon(champion_id) if catalog else None,
        kills=int(me.get("kills") or 0),
        deaths=int(me.get("deaths") or 0),
        assists=int(me.get("assists") or 0),
        duration_sec=int(info.get("gameDuration") or 0),
        queue_id=int(info.get("queueId") or 0),
    )


def summarize_details(
    ordered: Iterable[Tuple[str, Dict[str, Any]]],
    puuid: str,
    catalog: Optional[Catalog],
    count: int,
    remake_max_duration_sec: Optional[int] = None,
) -> RecentGames:
    """First ``count`` countable games from newest-first (match id, detail) pairs."""
    games: List[RecentGame] = []
    for match_id, detail in ordered:
        if len(games) >= count:
            break
        game = build_recent_game(match_id, detail, puuid, catalog, remake_max_duration_sec)
        if game is not None:
            games.append(game)
    return RecentGames(computed_at=utc_now_iso(), games=games)


class RecentGamesService:
    """Builds a player's last-N summary, skipping remakes."""

    def __init__(
        self,
        source: IPlayerDataSource,
        detail_cache: MatchDetailCache,
        catalog_cache: StaticCatalogCache,
        *,
        count: Optional[int] = None,
        remake_max_duration_sec: Optional[int] = None,
    ):
        self.source = source
        self.detail_cache = detail_cache
        self.catalog_cache = catalog_cache
        self.count = count or settings.RECENT_GAMES_COUNT
        self.remake_max_duration_sec = remake_max_duration_sec

    async def summarize(self, player: Player, region: Region, queue_id: Optional[int]) -> RecentGames:
        # over-fetch so a couple of remakes do not shorten the list
        ids = await self.source.get_match_ids(
            player.puuid, region, start=0, count=min(self.count * 2, 20), queue_id=queue_id
        )
        if not ids:
            return RecentGames(computed_at=utc_now_iso(), games=[])

        catalog = await self.catalog_cache.get_catalog()
        games: List[RecentGame] = []
        for match_id in ids:
            if len(games) >= self.count:
                break
            detail = await self.detail_cache.get(region, match_id)
            game = build_recent_game(match_id, detail, player.puuid, catalog, self.remake_max_duration_sec)
            if game is None:
                logger.debug(f"Skipping {match_id} for {player.id} (remake or not a participant)")
                continue
            games.append(game)
        return RecentGames(computed_at=utc_now_iso(), games=games)
