"""Whole persisted document."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from ..errors import EntityNotFound
from .player import Player, HistoryEntry


@dataclass
class TrackerState:
    players: List[Player] = field(default_factory=list)
    ban_history: List[HistoryEntry] = field(default_factory=list)  # newest first
    global_last_updated_at: Optional[str] = None

    def find_player(self, player_id: str) -> Optional[Player]:
        return next((p for p in self.players if p.id == player_id), None)

    def get_player(self, player_id: str) -> Player:
        player = self.find_player(player_id)
        if player is None:
            raise EntityNotFound("player", player_id)
        return player

    def to_dict(self) -> dict:
        return {
            'players': [p.to_dict() for p in self.players],
            'ban_history': [h.to_dict() for h in self.ban_history],
            'global_last_updated_at': self.global_last_updated_at,
        }

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> 'TrackerState':
        data = data or {}
        return cls(
            players=[Player.from_dict(p) for p in data.get('players') or []],
            ban_history=[HistoryEntry.from_dict(h) for h in data.get('ban_history') or []],
            global_last_updated_at=data.get('global_last_updated_at'),
        )
