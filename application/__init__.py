"""Application layer - Services and use cases."""
from .runtime import TrackerRuntime
from .use_cases import (
    RefreshRosterUseCase,
    CatchUpUseCase,
    BootstrapYearUseCase,
    RecordBanUseCase,
    PlayerOverviewQuery,
)

__all__ = [
    'TrackerRuntime',
    'RefreshRosterUseCase',
    'CatchUpUseCase',
    'BootstrapYearUseCase',
    'RecordBanUseCase',
    'PlayerOverviewQuery',
]
