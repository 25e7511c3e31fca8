"""Presentation CLI exports."""
from .refresh_command import RefreshCommand
from .catch_up_command import CatchUpCommand
from .bootstrap_command import BootstrapCommand
from .ban_command import BanCommand
from .overview_command import OverviewCommand

__all__ = [
    "RefreshCommand",
    "CatchUpCommand",
    "BootstrapCommand",
    "BanCommand",
    "OverviewCommand",
]
