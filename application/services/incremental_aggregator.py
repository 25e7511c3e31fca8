"""Incremental per-year champion play aggregation."""
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from config import settings
from domain.entities import Player, YearAggregate
from domain.enums import Region
from domain.errors import FetchBudgetExceeded, RemoteError
from .catalog_cache import StaticCatalogCache
from .detail_pool import fetch_details
from .match_detail_cache import MatchDetailCache
from .match_enumerator import YearWindowMatchEnumerator
from .timeutil import utc_now_iso

logger = logging.getLogger(__name__)


def is_remake(detail: Dict[str, Any], max_duration_sec: Optional[int] = None) -> bool:
    """A game that ended after more than 0 but less than ``max_duration_sec`` seconds."""
    limit = settings.REMAKE_MAX_DURATION_SEC if max_duration_sec is None else max_duration_sec
    duration = (detail.get("info") or {}).get("gameDuration")
    if not isinstance(duration, (int, float)) or isinstance(duration, bool):
        return False
    return 0 < duration < limit


def find_participant(detail: Dict[str, Any], puuid: str) -> Optional[Dict[str, Any]]:
    for participant in (detail.get("info") or {}).get("participants") or []:
        if participant.get("puuid") == puuid:
            return participant
    return None


def participant_champion(detail: Dict[str, Any], puuid: str) -> Optional[int]:
    """Champion key the player used, or None when the record does not count."""
    participant = find_participant(detail, puuid)
    if participant is None:
        return None
    champion_id = participant.get("championId")
    if not isinstance(champion_id, int) or isinstance(champion_id, bool):
        return None
    return champion_id


@dataclass
class AggregationResult:
    new_matches_seen: int = 0
    games_counted: int = 0
    budget_exhausted: bool = False
    pending: int = 0
    seeded: bool = False


class IncrementalAggregator:
    """
    Folds newly finished matches into a :class:`YearAggregate`.

    The aggregate's cursor is the newest match id already accounted for.
    Every id newer than the cursor is either counted or parked in
    ``pending_match_ids``; nothing is counted twice.
    """

    def __init__(
        self,
        enumerator: YearWindowMatchEnumerator,
        detail_cache: MatchDetailCache,
        catalog_cache: StaticCatalogCache,
        *,
        remake_max_duration_sec: Optional[int] = None,
        workers: Optional[int] = None,
    ):
        self.enumerator = enumerator
        self.detail_cache = detail_cache
        self.catalog_cache = catalog_cache
        self.remake_max_duration_sec = (
            settings.REMAKE_MAX_DURATION_SEC if remake_max_duration_sec is None else remake_max_duration_sec
        )
        self.workers = workers or settings.DETAIL_WORKERS

    def _count(self, stats: YearAggregate, detail: Dict[str, Any], puuid: str) -> bool:
        if is_remake(detail, self.remake_max_duration_sec):
            return False
        champion_id = participant_champion(detail, puuid)
        if champion_id is None:
            return False
        stats.add_game(champion_id)
        return True

    @staticmethod
    def _park(stats: YearAggregate, remainder: Sequence[str]) -> None:
        older = [m for m in stats.pending_match_ids if m not in remainder]
        stats.pending_match_ids = list(remainder) + older
        stats.needs_catchup = True

    async def advance(self, player: Player, stats: YearAggregate, region: Region) -> AggregationResult:
        """
        Count the matches finished since the cursor.

        Raises:
            RemoteError: listing, catalog or detail fetch failed. Matches
                counted before the failure stay counted and the rest are
                parked as pending.
        """
        result = AggregationResult()
        ids = await self.enumerator.list_match_ids(
            player.puuid, region, stats.year, stats.queue_id, stop_at=stats.cursor_match_id
        )

        if not ids:
            stats.computed_at = utc_now_iso()
            return result

        if stats.cursor_match_id is None and not stats.backlog_loaded:
            # first observation: older games belong to the bootstrap pass
            stats.cursor_match_id = ids[0]
            stats.backlog_loaded = False
            stats.needs_catchup = True
            stats.computed_at = utc_now_iso()
            result.seeded = True
            logger.info(f"Seeded cursor for {player.id}/{stats.year} at {ids[0]}")
            return result

        delta: List[str] = []
        for match_id in ids:
            if match_id == stats.cursor_match_id:
                break
            delta.append(match_id)

        if not delta:
            stats.computed_at = utc_now_iso()
            return result

        catalog = await self.catalog_cache.get_catalog()

        stats.cursor_match_id = ids[0]
        stats.match_count += len(delta)
        result.new_matches_seen = len(delta)

        position = 0
        try:
            for position, match_id in enumerate(delta):
                detail = await self.detail_cache.get(region, match_id)
                if self._count(stats, detail, player.puuid):
                    result.games_counted += 1
            position = len(delta)
        except FetchBudgetExceeded:
            self._park(stats, delta[position:])
            result.budget_exhausted = True
            logger.warning(
                f"Detail budget spent for {player.id}: {len(delta) - position} match(es) parked for catch-up"
            )
        except RemoteError:
            self._park(stats, delta[position:])
            raise
        finally:
            result.pending = len(stats.pending_match_ids)
            stats.rebuild_list(catalog)
            stats.computed_at = utc_now_iso()
            stats.last_increment = {
                'new_matches_seen': result.new_matches_seen,
                'games_counted': result.games_counted,
            }

        return result

    async def drain_pending(self, player: Player, stats: YearAggregate, region: Region) -> AggregationResult:
        """Process parked ids with a small worker pool under the current budget."""
        result = AggregationResult()
        pending = list(stats.pending_match_ids)
        if not pending:
            stats.needs_catchup = not stats.backlog_loaded
            return result

        catalog = await self.catalog_cache.get_catalog()

        def on_detail(_match_id: str, detail: Dict[str, Any]) -> None:
            if self._count(stats, detail, player.puuid):
                result.games_counted += 1

        outcome = await fetch_details(
            pending,
            lambda match_id: self.detail_cache.get(region, match_id),
            on_detail,
            workers=self.workers,
        )

        stats.pending_match_ids = outcome.remaining(pending)
        stats.needs_catchup = bool(stats.pending_match_ids) or not stats.backlog_loaded
        stats.rebuild_list(catalog)
        stats.computed_at = utc_now_iso()
        result.new_matches_seen = len(outcome.processed)
        result.budget_exhausted = outcome.budget_exhausted
        result.pending = len(stats.pending_match_ids)

        if outcome.error is not None:
            raise outcome.error
        return result
