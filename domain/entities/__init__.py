"""Domain entities."""
from .rank import RankSnapshot, WinLoss, PendingPromotion, is_promotion
from .catalog import ChampionInfo, Catalog
from .year_aggregate import ChampionCount, YearAggregate
from .recent_games import RecentGame, RecentGames
from .player import RiotId, BanRecord, HistoryEntry, Player, normalize_champion
from .state import TrackerState

__all__ = [
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
    'normalize_champion',
    'TrackerState',
]
