"""Rank snapshots and the promotion ordering."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Tuple

from ..enums import Tier, Division


@dataclass(frozen=True)
class WinLoss:
    """Solo queue win/loss counters as last seen by a refresh."""

    wins: int = 0
    losses: int = 0

    @property
    def total(self) -> int:
        return self.wins + self.losses

    def to_dict(self) -> dict:
        return {'wins': self.wins, 'losses': self.losses}

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> Optional['WinLoss']:
        if not data:
            return None
        return cls(wins=_as_int(data.get('wins')), losses=_as_int(data.get('losses')))


@dataclass(frozen=True)
class RankSnapshot:
    """Solo queue rank at one point in time. Replaced, never merged."""

    unranked: bool = False
    tier: Optional[str] = None
    division: Optional[str] = None
    league_points: int = 0
    wins: int = 0
    losses: int = 0
    winrate: Optional[float] = None

    @classmethod
    def unranked_snapshot(cls, wins: int = 0, losses: int = 0) -> 'RankSnapshot':
        return cls(unranked=True, wins=wins, losses=losses)

    @classmethod
    def from_league_entry(cls, entry: dict) -> 'RankSnapshot':
        """Build from a league-v4 entry (``tier``, ``rank``, ``leaguePoints``...)."""
        wins = _as_int(entry.get('wins'))
        losses = _as_int(entry.get('losses'))
        games = wins + losses
        return cls(
            unranked=False,
            tier=entry.get('tier'),
            division=entry.get('rank'),
            league_points=_as_int(entry.get('leaguePoints')),
            wins=wins,
            losses=losses,
            winrate=round(wins / games * 100, 1) if games else None,
        )

    @property
    def win_loss(self) -> WinLoss:
        return WinLoss(self.wins, self.losses)

    def rank_key(self) -> Optional[Tuple[int, int]]:
        """(tier index, division index) or None when unranked/unknown.

        League points are deliberately not part of the key. Apex tiers and
        entries without a division sit at the top division of their tier.
        """
        if self.unranked:
            return None
        tier = Tier.from_string(self.tier)
        if tier is None:
            return None
        division = None if tier.is_apex else Division.from_string(self.division)
        return tier.index, (division or Division.top()).index

    def label(self) -> str:
        if self.unranked:
            return "Unranked"
        tier = (self.tier or "").upper()
        tier_obj = Tier.from_string(tier)
        div = f" {self.division}" if self.division and not (tier_obj and tier_obj.is_apex) else ""
        return f"{tier}{div} {self.league_points} LP".strip()

    def to_dict(self) -> dict:
        if self.unranked:
            return {'unranked': True, 'wins': self.wins, 'losses': self.losses}
        return {
            'tier': self.tier,
            'division': self.division,
            'league_points': self.league_points,
            'wins': self.wins,
            'losses': self.losses,
            'winrate': self.winrate,
        }

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> Optional['RankSnapshot']:
        if not data:
            return None
        if data.get('unranked'):
            return cls.unranked_snapshot(_as_int(data.get('wins')), _as_int(data.get('losses')))
        return cls(
            tier=data.get('tier'),
            division=data.get('division'),
            league_points=_as_int(data.get('league_points', data.get('lp'))),
            wins=_as_int(data.get('wins')),
            losses=_as_int(data.get('losses')),
            winrate=data.get('winrate'),
        )


def is_promotion(previous: Optional[RankSnapshot], current: Optional[RankSnapshot]) -> bool:
    """True when ``current`` ranks strictly above ``previous``.

    Moving from or to unranked is never a promotion.
    """
    if previous is None or current is None:
        return False
    old_key = previous.rank_key()
    new_key = current.rank_key()
    if old_key is None or new_key is None:
        return False
    return new_key > old_key


@dataclass(frozen=True)
class PendingPromotion:
    """A detected promotion waiting for its ban to be recorded."""

    detected_at: str
    from_rank: RankSnapshot
    to_rank: RankSnapshot

    def to_dict(self) -> dict:
        return {
            'detected_at': self.detected_at,
            'from': self.from_rank.to_dict(),
            'to': self.to_rank.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> Optional['PendingPromotion']:
        if not data:
            return None
        return cls(
            detected_at=data.get('detected_at', ''),
            from_rank=RankSnapshot.from_dict(data.get('from')) or RankSnapshot.unranked_snapshot(),
            to_rank=RankSnapshot.from_dict(data.get('to')) or RankSnapshot.unranked_snapshot(),
        )


def _as_int(value: Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0
