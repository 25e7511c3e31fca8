"""Periodic refresh of the whole roster."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from config import settings
from core.logging import context as log_context, get_logger, traceable
from domain.entities import PendingPromotion, Player
from domain.enums import Region
from domain.errors import FetchBudgetExceeded, TrackerError
from domain.interfaces import IPlayerDataSource, IStateRepository
from application.services import (
    FetchBudget,
    IncrementalAggregator,
    PromotionDetector,
    RecentGamesService,
    ensure_puuid,
    solo_queue_snapshot,
    tracked_year,
    utc_now_iso,
)


class RefreshStatus(str, Enum):
    UPDATED = "updated"        # rank checked, match-derived data refreshed
    UNCHANGED = "unchanged"    # rank checked, no new solo queue games
    PARTIAL = "partial"        # refreshed, but some matches wait for catch-up
    FAILED = "failed"


@dataclass
class PlayerRefreshResult:
    player_id: str
    status: RefreshStatus
    promotion: Optional[PendingPromotion] = None
    new_matches_seen: int = 0
    games_counted: int = 0
    pending: int = 0
    error: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            'player_id': self.player_id,
            'status': self.status.value,
            'promotion': self.promotion.to_dict() if self.promotion else None,
            'new_matches_seen': self.new_matches_seen,
            'games_counted': self.games_counted,
            'pending': self.pending,
            'error': self.error,
        }


@dataclass
class CycleReport:
    started_at: str
    finished_at: Optional[str] = None
    results: List[PlayerRefreshResult] = field(default_factory=list)
    budget_spent: int = 0
    persisted: bool = False
    save_error: Optional[str] = None

    def counts(self) -> Dict[str, int]:
        out = {status.value: 0 for status in RefreshStatus}
        for result in self.results:
            out[result.status.value] += 1
        return out

    @property
    def promotions(self) -> List[PlayerRefreshResult]:
        return [r for r in self.results if r.promotion is not None]

    def result_for(self, player_id: str) -> Optional[PlayerRefreshResult]:
        return next((r for r in self.results if r.player_id == player_id), None)

    def to_dict(self) -> dict:
        return {
            'started_at': self.started_at,
            'finished_at': self.finished_at,
            'results': [r.to_dict() for r in self.results],
            'budget_spent': self.budget_spent,
            'persisted': self.persisted,
            'save_error': self.save_error,
        }


class RefreshRosterUseCase:
    """
    One refresh cycle over the roster.

    Players are handled one after another; a failure is recorded on that
    player and the cycle moves on. The state document is written once at
    the end, while the repository lock is held for the whole cycle.

    Match-derived data (year aggregate, last-N games) is only rebuilt when
    the solo queue win/loss totals moved since the last successful sync.
    """

    def __init__(
        self,
        repository: IStateRepository,
        source: IPlayerDataSource,
        budget: FetchBudget,
        aggregator: IncrementalAggregator,
        recent_games: RecentGamesService,
        detector: Optional[PromotionDetector] = None,
        *,
        year: Optional[int] = None,
        queue_id: Optional[int] = settings.TRACKED_QUEUE_ID,
    ):
        self.repository = repository
        self.source = source
        self.budget = budget
        self.aggregator = aggregator
        self.recent_games = recent_games
        self.detector = detector or PromotionDetector()
        self._year = year
        self.queue_id = queue_id
        self._log = get_logger(__name__, service="refresh")

    @property
    def year(self) -> int:
        return tracked_year(self._year)

    @traceable
    async def execute(self) -> CycleReport:
        async with self.repository.lock():
            self.budget.reset()
            state = await self.repository.load()
            now = utc_now_iso()
            state.global_last_updated_at = now
            year = self.year
            report = CycleReport(started_at=now)

            with log_context(cycle=now):
                self._log.info(lambda: f"Refresh cycle started: {len(state.players)} player(s), year {year}")
                for player in state.players:
                    with log_context(player=player.id):
                        report.results.append(await self._refresh_player(player, now, year))

                report.budget_spent = self.budget.spent
                report.finished_at = utc_now_iso()
                try:
                    await self.repository.save(state)
                    report.persisted = True
                except (OSError, TypeError, ValueError) as exc:
                    report.save_error = str(exc)
                    self._log.error(f"Saving state failed: {exc}", exc_info=True)

                self._log.success(
                    lambda: f"Refresh cycle finished: {report.counts()} budget_spent={report.budget_spent}"
                )
            return report

    def _needs_sync(self, player: Player, year: int, wins: int, losses: int) -> bool:
        previous = player.solo_wl
        if previous is None or previous.wins != wins or previous.losses != losses:
            return True
        # a fresh year or a missing summary is synced even without new games
        return player.year_stats(year) is None or player.last5 is None

    async def _refresh_player(self, player: Player, now: str, year: int) -> PlayerRefreshResult:
        result = PlayerRefreshResult(player_id=player.id, status=RefreshStatus.UNCHANGED)
        try:
            region = Region.from_platform(player.platform)
            await ensure_puuid(self.source, player)

            snapshot = solo_queue_snapshot(await self.source.get_rank_entries(player.puuid, region))
            result.promotion = self.detector.record_snapshot(player, snapshot, now)
            wl = snapshot.win_loss

            if self._needs_sync(player, year, wl.wins, wl.losses):
                stats = player.ensure_year_stats(year, self.queue_id)
                aggregation = await self.aggregator.advance(player, stats, region)
                result.new_matches_seen = aggregation.new_matches_seen
                result.games_counted = aggregation.games_counted
                result.pending = aggregation.pending

                player.last5 = await self.recent_games.summarize(player, region, self.queue_id)
                # committed last so an interrupted sync is retried next cycle
                player.solo_wl = wl
                result.status = RefreshStatus.PARTIAL if aggregation.budget_exhausted else RefreshStatus.UPDATED

            player.last_updated_at = now
            player.last_error = None
        except FetchBudgetExceeded as exc:
            result.status = RefreshStatus.PARTIAL
            result.error = str(exc)
            player.last_updated_at = now
            self._log.warning(f"{player.id}: {exc}; retried next cycle")
        except (TrackerError, ValueError) as exc:
            result.status = RefreshStatus.FAILED
            result.error = str(exc)
            player.last_error = str(exc)
            self._log.error(f"{player.id}: refresh failed: {exc}")
        except Exception as exc:
            result.status = RefreshStatus.FAILED
            result.error = f"unexpected error: {exc}"
            player.last_error = result.error
            self._log.error(f"{player.id}: unexpected refresh error", exc_info=True)

        if result.promotion is not None:
            self._log.success(
                f"{player.display_name} promoted {result.promotion.from_rank.label()} -> "
                f"{result.promotion.to_rank.label()}; ban pending"
            )
        return result
