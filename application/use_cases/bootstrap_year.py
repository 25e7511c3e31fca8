"""Full recount of a player's tracked year."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from config import settings
from core.logging import context as log_context, get_logger, traceable
from domain.entities import PendingPromotion, Player, YearAggregate
from domain.enums import Region
from domain.errors import TrackerError
from domain.interfaces import IPlayerDataSource, IStateRepository
from application.services import (
    FetchBudget,
    MatchDetailCache,
    PromotionDetector,
    StaticCatalogCache,
    YearWindowMatchEnumerator,
    ensure_puuid,
    fetch_details,
    is_remake,
    participant_champion,
    solo_queue_snapshot,
    summarize_details,
    tracked_year,
    utc_now_iso,
)


@dataclass
class BootstrapResult:
    player_id: str
    match_ids: int = 0
    games_counted: int = 0
    pending: int = 0
    budget_exhausted: bool = False
    error: Optional[str] = None
    promotion: Optional[PendingPromotion] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class BootstrapYearUseCase:
    """
    Rebuilds a year aggregate from the complete year listing.

    All details are fetched with a small worker pool, the champion counts
    and the last-N summary come out of the same pass, and the cursor ends
    at the newest listed match. When the budget runs out the ids not yet
    fetched are parked as pending for the catch-up pass.
    """

    def __init__(
        self,
        repository: IStateRepository,
        source: IPlayerDataSource,
        enumerator: YearWindowMatchEnumerator,
        detail_cache: MatchDetailCache,
        catalog_cache: StaticCatalogCache,
        detector: Optional[PromotionDetector] = None,
        *,
        year: Optional[int] = None,
        queue_id: Optional[int] = settings.TRACKED_QUEUE_ID,
        budget_limit: Optional[int] = None,
        workers: Optional[int] = None,
        recent_count: Optional[int] = None,
    ):
        self.repository = repository
        self.source = source
        self.enumerator = enumerator
        self.detail_cache = detail_cache
        self.catalog_cache = catalog_cache
        self.detector = detector or PromotionDetector()
        self._year = year
        self.queue_id = queue_id
        limit = settings.BOOTSTRAP_DETAIL_BUDGET if budget_limit is None else budget_limit
        self.budget_limit = limit or None  # 0 = unlimited
        self.workers = workers or settings.DETAIL_WORKERS
        self.recent_count = recent_count or settings.RECENT_GAMES_COUNT
        self._log = get_logger(__name__, service="bootstrap")

    @property
    def year(self) -> int:
        return tracked_year(self._year)

    @traceable
    async def execute(self, player_ids: Optional[Iterable[str]] = None) -> List[BootstrapResult]:
        wanted = set(player_ids) if player_ids else None
        results: List[BootstrapResult] = []
        async with self.repository.lock():
            state = await self.repository.load()
            budget = FetchBudget(self.budget_limit)
            players = [p for p in state.players if wanted is None or p.id in wanted]
            if wanted:
                missing = wanted - {p.id for p in players}
                for player_id in sorted(missing):
                    self._log.warning(f"Unknown player id skipped: {player_id}")

            for player in players:
                with log_context(player=player.id):
                    result = BootstrapResult(player_id=player.id)
                    try:
                        result = await self.bootstrap_player(player, budget, refresh_rank=True)
                    except (TrackerError, ValueError) as exc:
                        result.error = str(exc)
                        player.last_error = str(exc)
                        self._log.error(f"{player.id}: bootstrap failed: {exc}")
                    results.append(result)

            state.global_last_updated_at = utc_now_iso()
            await self.repository.save(state)
        return results

    async def bootstrap_player(
        self,
        player: Player,
        budget: FetchBudget,
        *,
        year: Optional[int] = None,
        refresh_rank: bool = False,
    ) -> BootstrapResult:
        """Recount one year of ``player`` in place (caller persists).

        ``year`` defaults to the tracked year. Other years keep the queue
        filter they were recorded with and leave the last-N summary alone.
        """
        current = self.year
        year = year or current
        tracked = year == current
        existing = player.year_stats(year)
        queue_id = self.queue_id if tracked or existing is None else existing.queue_id
        region = Region.from_platform(player.platform)
        await ensure_puuid(self.source, player)
        result = BootstrapResult(player_id=player.id)

        if refresh_rank:
            snapshot = solo_queue_snapshot(await self.source.get_rank_entries(player.puuid, region))
            result.promotion = self.detector.record_snapshot(player, snapshot, utc_now_iso())
            player.solo_wl = snapshot.win_loss

        ids = await self.enumerator.list_match_ids(player.puuid, region, year, queue_id)
        catalog = await self.catalog_cache.get_catalog()
        result.match_ids = len(ids)

        stats = player.ensure_year_stats(year, queue_id)
        stats.reset_counts()
        stats.pending_match_ids = []
        details: Dict[str, Dict[str, Any]] = {}

        def on_detail(match_id: str, detail: Dict[str, Any]) -> None:
            details[match_id] = detail
            if is_remake(detail):
                return
            champion_id = participant_champion(detail, player.puuid)
            if champion_id is not None:
                stats.add_game(champion_id)

        self._log.info(lambda: f"Bootstrapping {player.display_name}: {len(ids)} match id(s) in {year}")
        outcome = await fetch_details(
            ids,
            lambda match_id: self.detail_cache.get(region, match_id, budget),
            on_detail,
            workers=self.workers,
        )

        self._finish(stats, ids, outcome.remaining(ids), catalog)
        ordered = [(match_id, details[match_id]) for match_id in ids if match_id in details]
        if tracked:
            player.last5 = summarize_details(ordered, player.puuid, catalog, self.recent_count)

        result.games_counted = stats.total_games
        result.pending = len(stats.pending_match_ids)
        result.budget_exhausted = outcome.budget_exhausted
        if outcome.error is not None:
            player.last_error = str(outcome.error)
            raise outcome.error

        player.last_error = None
        player.last_updated_at = utc_now_iso()
        self._log.success(
            f"{player.display_name}: {result.games_counted} game(s) counted, {result.pending} pending"
        )
        return result

    @staticmethod
    def _finish(stats: YearAggregate, ids: List[str], remaining: List[str], catalog) -> None:
        stats.cursor_match_id = ids[0] if ids else stats.cursor_match_id
        stats.match_count = len(ids)
        stats.pending_match_ids = remaining
        stats.backlog_loaded = True
        stats.needs_catchup = bool(remaining)
        stats.rebuild_list(catalog)
        stats.computed_at = utc_now_iso()
        stats.last_increment = {
            'new_matches_seen': len(ids) - len(remaining),
            'games_counted': stats.total_games,
        }
