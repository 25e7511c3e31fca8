"""Drains match ids left behind by budget-limited refreshes."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from core.logging import context as log_context, get_logger, traceable
from domain.enums import Region
from domain.errors import TrackerError
from domain.interfaces import IStateRepository
from application.services import FetchBudget, IncrementalAggregator, utc_now_iso
from .bootstrap_year import BootstrapYearUseCase


@dataclass
class CatchUpResult:
    player_id: str
    year: int
    bootstrapped: bool = False
    processed: int = 0
    games_counted: int = 0
    pending: int = 0
    error: Optional[str] = None


@dataclass
class CatchUpReport:
    results: List[CatchUpResult] = field(default_factory=list)
    budget_spent: int = 0
    persisted: bool = False
    save_error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.persisted and not any(r.error for r in self.results)


class CatchUpUseCase:
    """
    Works off every aggregate flagged ``needs_catchup``.

    An aggregate whose year backlog was never loaded is recounted through
    the bootstrap pass; otherwise only its parked ids are fetched. Both
    spend the same per-cycle budget as a refresh, so a long backlog is
    worked off over several runs. A failed save is reported, not raised.
    """

    def __init__(
        self,
        repository: IStateRepository,
        aggregator: IncrementalAggregator,
        bootstrap: BootstrapYearUseCase,
        budget: FetchBudget,
    ):
        self.repository = repository
        self.aggregator = aggregator
        self.bootstrap = bootstrap
        self.budget = budget
        self._log = get_logger(__name__, service="catch-up")

    @traceable
    async def execute(self) -> CatchUpReport:
        report = CatchUpReport()
        async with self.repository.lock():
            self.budget.reset()
            state = await self.repository.load()

            for player in state.players:
                if not player.needs_catchup:
                    continue
                with log_context(player=player.id):
                    for stats in list(player.champ_games_by_year.values()):
                        if not stats.needs_catchup:
                            continue
                        result = CatchUpResult(player_id=player.id, year=stats.year)
                        try:
                            if not stats.backlog_loaded:
                                result.bootstrapped = True
                                outcome = await self.bootstrap.bootstrap_player(
                                    player, self.budget, year=stats.year
                                )
                                result.processed = outcome.match_ids - outcome.pending
                                result.games_counted = outcome.games_counted
                            else:
                                region = Region.from_platform(player.platform)
                                outcome = await self.aggregator.drain_pending(player, stats, region)
                                result.processed = outcome.new_matches_seen
                                result.games_counted = outcome.games_counted
                        except (TrackerError, ValueError) as exc:
                            result.error = str(exc)
                            player.last_error = str(exc)
                            self._log.error(f"{player.id}/{stats.year}: catch-up failed: {exc}")
                        result.pending = len(stats.pending_match_ids)
                        report.results.append(result)
                        self._log.info(
                            f"{player.id}/{stats.year}: {result.processed} processed, "
                            f"{result.games_counted} counted, {result.pending} pending"
                        )
                    if self.budget.exhausted:
                        self._log.warning("Detail budget spent; remaining backlog waits for the next run")
                        break

            report.budget_spent = self.budget.spent
            state.global_last_updated_at = utc_now_iso()
            try:
                await self.repository.save(state)
                report.persisted = True
            except (OSError, TypeError, ValueError) as exc:
                report.save_error = str(exc)
                self._log.error(f"Saving state after catch-up failed: {exc}", exc_info=True)
        return report
