"""Most-recent games summary."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class RecentGame:
    match_id: str
    time: str
    win: bool
    champion_id: int
    champion_name: str
    champion_icon: Optional[str]
    kills: int
    deaths: int
    assists: int
    duration_sec: int
    queue_id: int

    @property
    def kda(self) -> str:
        return f"{self.kills}/{self.deaths}/{self.assists}"

    def to_dict(self) -> dict:
        return {
            'match_id': self.match_id,
            'time': self.time,
            'win': self.win,
            'champion_id': self.champion_id,
            'champion_name': self.champion_name,
            'champion_icon': self.champion_icon,
            'kills': self.kills,
            'deaths': self.deaths,
            'assists': self.assists,
            'duration_sec': self.duration_sec,
            'queue_id': self.queue_id,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'RecentGame':
        return cls(
            match_id=data['match_id'],
            time=data.get('time', ''),
            win=bool(data.get('win')),
            champion_id=int(data.get('champion_id', 0)),
            champion_name=data.get('champion_name', ''),
            champion_icon=data.get('champion_icon'),
            kills=int(data.get('kills', 0)),
            deaths=int(data.get('deaths', 0)),
            assists=int(data.get('assists', 0)),
            duration_sec=int(data.get('duration_sec', 0)),
            queue_id=int(data.get('queue_id', 0)),
        )


@dataclass
class RecentGames:
    computed_at: str
    games: List[RecentGame] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {'computed_at': self.computed_at, 'games': [g.to_dict() for g in self.games]}

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> Optional['RecentGames']:
        if not data:
            return None
        return cls(
            computed_at=data.get('computed_at', ''),
            games=[RecentGame.from_dict(g) for g in data.get('games') or []],
        )
