"""Application services root exports."""
from .fetch_budget import FetchBudget
from .match_detail_cache import MatchDetailCache
from .catalog_cache import StaticCatalogCache, collation_key
from .match_enumerator import YearWindowMatchEnumerator, year_window
from .detail_pool import PoolOutcome, fetch_details
from .incremental_aggregator import (
    AggregationResult,
    IncrementalAggregator,
    find_participant,
    is_remake,
    participant_champion,
)
from .recent_games import RecentGamesService, build_recent_game, summarize_details
from .promotion_detector import PromotionDetector, solo_queue_snapshot
from .timeutil import utc_now_iso, epoch_ms_to_iso, current_utc_year, tracked_year
from .identity import ensure_puuid

__all__ = [
    "FetchBudget",
    "MatchDetailCache",
    "StaticCatalogCache",
    "collation_key",
    "YearWindowMatchEnumerator",
    "year_window",
    "PoolOutcome",
    "fetch_details",
    "AggregationResult",
    "IncrementalAggregator",
    "find_participant",
    "is_remake",
    "participant_champion",
    "RecentGamesService",
    "build_recent_game",
    "summarize_details",
    "PromotionDetector",
    "solo_queue_snapshot",
    "utc_now_iso",
    "epoch_ms_to_iso",
    "current_utc_year",
    "tracked_year",
    "ensure_puuid",
]
