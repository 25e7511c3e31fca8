"""Application use cases."""
from .refresh_roster import RefreshRosterUseCase, RefreshStatus, PlayerRefreshResult, CycleReport
from .bootstrap_year import BootstrapYearUseCase, BootstrapResult
from .catch_up import CatchUpUseCase, CatchUpResult, CatchUpReport
from .record_ban import RecordBanUseCase, ActionResult
from .player_overview import PlayerOverviewQuery

__all__ = [
    'RefreshRosterUseCase',
    'RefreshStatus',
    'PlayerRefreshResult',
    'CycleReport',
    'BootstrapYearUseCase',
    'BootstrapResult',
    'CatchUpUseCase',
    'CatchUpResult',
    'CatchUpReport',
    'RecordBanUseCase',
    'ActionResult',
    'PlayerOverviewQuery',
]
