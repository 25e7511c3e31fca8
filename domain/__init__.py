"""Domain layer - Business entities, enums, errors and interfaces."""
from .entities import (
    RankSnapshot, WinLoss, PendingPromotion, is_promotion,
    ChampionInfo, Catalog, ChampionCount, YearAggregate,
    RecentGame, RecentGames, RiotId, BanRecord, HistoryEntry, Player,
    TrackerState,
)
from .enums import Region, QueueType, Tier, Division
from .errors import (
    TrackerError, RemoteError, RateLimitExceeded, RemoteRequestFailed,
    FetchBudgetExceeded, EntityNotFound, InvariantViolation, StateNotSaved,
)
from .interfaces import IStateRepository, IPlayerDataSource, ICatalogSource

__all__ = [
    # Entities
    'RankSnapshot',
    'WinLoss',
    'PendingPromotion',
    'is_promotion',
    'ChampionInfo',
    'Catalog',
    'ChampionCount',
    'YearAggregate',
    'RecentGame',
    'RecentGames',
    'RiotId',
    'BanRecord',
    'HistoryEntry',
    'Player',
    'TrackerState',
    # Enums
    'Region',
    'QueueType',
    'Tier',
    'Division',
    # Errors
    'TrackerError',
    'RemoteError',
    'RateLimitExceeded',
    'RemoteRequestFailed',
    'FetchBudgetExceeded',
    'EntityNotFound',
    'InvariantViolation',
    'StateNotSaved',
    # Interfaces
    'IStateRepository',
    'IPlayerDataSource',
    'ICatalogSource',
]
