"""Rank ladder enumerations."""
from __future__ import annotations

from enum import Enum
from typing import Optional


class Tier(Enum):
    """League of Legends rank tiers, ordered low to high."""

    IRON = "IRON"
    BRONZE = "BRONZE"
    SILVER = "SILVER"
    GOLD = "GOLD"
    PLATINUM = "PLATINUM"
    EMERALD = "EMERALD"
    DIAMOND = "DIAMOND"
    MASTER = "MASTER"
    GRANDMASTER = "GRANDMASTER"
    CHALLENGER = "CHALLENGER"

    @property
    def index(self) -> int:
        """1-based position on the ladder (IRON = 1)."""
        return list(Tier).index(self) + 1

    @property
    def is_apex(self) -> bool:
        """Apex tiers have no divisions."""
        return self in (Tier.MASTER, Tier.GRANDMASTER, Tier.CHALLENGER)

    @classmethod
    def from_string(cls, value: Optional[str]) -> Optional['Tier']:
        """Parse a tier name; unknown or empty values give None."""
        if not value:
            return None
        try:
            return cls[str(value).strip().upper()]
        except KeyError:
            return None


class Division(Enum):
    """Sub-tier divisions, IV lowest."""

    IV = "IV"
    III = "III"
    II = "II"
    I = "I"  # noqa: E741

    @property
    def index(self) -> int:
        return list(Division).index(self) + 1

    @classmethod
    def top(cls) -> 'Division':
        return cls.I

    @classmethod
    def from_string(cls, value: Optional[str]) -> Optional['Division']:
        if not value:
            return None
        try:
            return cls[str(value).strip().upper()]
        except KeyError:
            return None
