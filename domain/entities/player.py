"""Player entity and ban bookkeeping."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .rank import RankSnapshot, WinLoss, PendingPromotion
from .recent_games import RecentGames
from .year_aggregate import YearAggregate


@dataclass(frozen=True)
class RiotId:
    """Human-readable account handle: ``gameName#tagLine``."""

    game_name: str
    tag_line: str

    def __str__(self) -> str:
        return f"{self.game_name}#{self.tag_line}"

    def to_dict(self) -> dict:
        return {'game_name': self.game_name, 'tag_line': self.tag_line}

    @classmethod
    def from_dict(cls, data: dict) -> 'RiotId':
        return cls(
            game_name=data.get('game_name', data.get('gameName', '')),
            tag_line=data.get('tag_line', data.get('tagLine', '')),
        )


def normalize_champion(name: str) -> str:
    """Comparison form of a champion name: trimmed, single-spaced, lower-case."""
    return " ".join(str(name).split()).lower()


@dataclass(frozen=True)
class BanRecord:
    time: str
    champion: str
    note: str = ""

    def to_dict(self) -> dict:
        return {'time': self.time, 'champion': self.champion, 'note': self.note}

    @classmethod
    def from_dict(cls, data: dict) -> 'BanRecord':
        return cls(time=data.get('time', ''), champion=data['champion'], note=data.get('note', ''))


@dataclass(frozen=True)
class HistoryEntry:
    """Ban history row; ``promotion`` is the pending promotion frozen at write time."""

    time: str
    player_id: str
    player_name: str
    champion: str
    note: str
    promotion: Optional[PendingPromotion]

    def to_dict(self) -> dict:
        return {
            'time': self.time,
            'player_id': self.player_id,
            'player_name': self.player_name,
            'champion': self.champion,
            'note': self.note,
            'promotion': self.promotion.to_dict() if self.promotion else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'HistoryEntry':
        return cls(
            time=data.get('time', ''),
            player_id=data.get('player_id', ''),
            player_name=data.get('player_name', ''),
            champion=data.get('champion', ''),
            note=data.get('note', ''),
            promotion=PendingPromotion.from_dict(data.get('promotion')),
        )


@dataclass
class Player:
    """A tracked roster member.

    Created out of band (roster provisioning); mutated only by the refresh
    orchestrator, the catch-up / bootstrap passes and the ban action.
    """

    # Identity
    id: str
    display_name: str
    riot_id: RiotId
    platform: str
    puuid: Optional[str] = None

    # Ranked info (Solo/Duo)
    current_rank: Optional[RankSnapshot] = None
    last_rank: Optional[RankSnapshot] = None
    solo_wl: Optional[WinLoss] = None

    # Derived match history
    champ_games_by_year: Dict[str, YearAggregate] = field(default_factory=dict)
    last5: Optional[RecentGames] = None

    # Ban state machine
    pending_ban: Optional[PendingPromotion] = None
    bans: List[BanRecord] = field(default_factory=list)

    last_updated_at: Optional[str] = None
    last_error: Optional[str] = None

    @property
    def needs_catchup(self) -> bool:
        return any(agg.needs_catchup for agg in self.champ_games_by_year.values())

    def year_stats(self, year: int) -> Optional[YearAggregate]:
        return self.champ_games_by_year.get(str(year))

    def ensure_year_stats(self, year: int, queue_id: Optional[int]) -> YearAggregate:
        """Return the aggregate for ``year``, creating it lazily."""
        stats = self.champ_games_by_year.get(str(year))
        if stats is None:
            stats = YearAggregate(year=year, queue_id=queue_id)
            self.champ_games_by_year[str(year)] = stats
        elif stats.queue_id != queue_id:
            # counts for another queue filter are meaningless here
            stats = YearAggregate(year=year, queue_id=queue_id)
            self.champ_games_by_year[str(year)] = stats
        return stats

    def has_ban(self, champion: str) -> bool:
        wanted = normalize_champion(champion)
        return any(normalize_champion(b.champion) == wanted for b in self.bans)

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'display_name': self.display_name,
            'riot_id': self.riot_id.to_dict(),
            'platform': self.platform,
            'puuid': self.puuid,
            'current_rank': self.current_rank.to_dict() if self.current_rank else None,
            'last_rank': self.last_rank.to_dict() if self.last_rank else None,
            'solo_wl': self.solo_wl.to_dict() if self.solo_wl else None,
            'champ_games_by_year': {k: v.to_dict() for k, v in self.champ_games_by_year.items()},
            'last5': self.last5.to_dict() if self.last5 else None,
            'pending_ban': self.pending_ban.to_dict() if self.pending_ban else None,
            'bans': [b.to_dict() for b in self.bans],
            'needs_catchup': self.needs_catchup,
            'last_updated_at': self.last_updated_at,
            'last_error': self.last_error,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Player':
        return cls(
            id=str(data['id']),
            display_name=data.get('display_name', data.get('displayName', str(data['id']))),
            riot_id=RiotId.from_dict(data.get('riot_id') or data.get('riotId') or {}),
            platform=data.get('platform', 'euw1'),
            puuid=data.get('puuid'),
            current_rank=RankSnapshot.from_dict(data.get('current_rank')),
            last_rank=RankSnapshot.from_dict(data.get('last_rank')),
            solo_wl=WinLoss.from_dict(data.get('solo_wl')),
            champ_games_by_year={
                k: YearAggregate.from_dict(v) for k, v in (data.get('champ_games_by_year') or {}).items()
            },
            last5=RecentGames.from_dict(data.get('last5')),
            pending_ban=PendingPromotion.from_dict(data.get('pending_ban')),
            bans=[BanRecord.from_dict(b) for b in data.get('bans') or []],
            last_updated_at=data.get('last_updated_at'),
            last_error=data.get('last_error'),
        )
