"""Presentation layer - User interfaces."""
from .cli import RefreshCommand, CatchUpCommand, BootstrapCommand, BanCommand, OverviewCommand

__all__ = [
    "RefreshCommand",
    "CatchUpCommand",
    "BootstrapCommand",
    "BanCommand",
    "OverviewCommand",
]
