"""Wires services and use cases around one data source and one repository."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from config import settings
from domain.interfaces import ICatalogSource, IPlayerDataSource, IStateRepository
from .services import (
    FetchBudget,
    IncrementalAggregator,
    MatchDetailCache,
    PromotionDetector,
    RecentGamesService,
    StaticCatalogCache,
    YearWindowMatchEnumerator,
)
from .use_cases import (
    BootstrapYearUseCase,
    CatchUpUseCase,
    PlayerOverviewQuery,
    RecordBanUseCase,
    RefreshRosterUseCase,
)


@dataclass
class TrackerRuntime:
    """Long-lived collaborators shared by every use case of one process.

    The detail cache and the catalog cache live as long as the runtime, so
    repeated cycles in one process reuse what earlier cycles fetched.
    """

    repository: IStateRepository
    budget: FetchBudget
    detail_cache: MatchDetailCache
    catalog_cache: StaticCatalogCache
    refresh: RefreshRosterUseCase
    bootstrap: BootstrapYearUseCase
    catch_up: CatchUpUseCase
    record_ban: RecordBanUseCase
    overview: PlayerOverviewQuery

    @classmethod
    def build(
        cls,
        source: IPlayerDataSource,
        catalog_source: ICatalogSource,
        repository: IStateRepository,
        *,
        year: Optional[int] = None,
        queue_id: Optional[int] = settings.TRACKED_QUEUE_ID,
        budget_limit: Optional[int] = None,
    ) -> "TrackerRuntime":
        budget = FetchBudget(settings.MATCH_DETAIL_BUDGET_PER_REFRESH if budget_limit is None else budget_limit)
        detail_cache = MatchDetailCache(source, budget)
        catalog_cache = StaticCatalogCache(catalog_source)
        enumerator = YearWindowMatchEnumerator(source)
        aggregator = IncrementalAggregator(enumerator, detail_cache, catalog_cache)
        recent_games = RecentGamesService(source, detail_cache, catalog_cache)
        detector = PromotionDetector()

        bootstrap = BootstrapYearUseCase(
            repository, source, enumerator, detail_cache, catalog_cache, detector,
            year=year, queue_id=queue_id,
        )
        return cls(
            repository=repository,
            budget=budget,
            detail_cache=detail_cache,
            catalog_cache=catalog_cache,
            refresh=RefreshRosterUseCase(
                repository, source, budget, aggregator, recent_games, detector,
                year=year, queue_id=queue_id,
            ),
            bootstrap=bootstrap,
            catch_up=CatchUpUseCase(repository, aggregator, bootstrap, budget),
            record_ban=RecordBanUseCase(repository),
            overview=PlayerOverviewQuery(repository, source, catalog_cache, year=year),
        )
