"""Static champion catalog (Data Dragon) entities."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass(frozen=True)
class ChampionInfo:
    """One champion as exposed by the catalog."""

    id: str          # Data Dragon id, e.g. "MonkeyKing"
    key: int         # numeric champion id used by match-v5
    name: str        # localized display name
    title: str = ""
    icon: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'key': self.key,
            'name': self.name,
            'title': self.title,
            'icon': self.icon,
        }


@dataclass
class Catalog:
    """A versioned, localized champion list sorted by name."""

    version: str
    locale: str
    champions: List[ChampionInfo]
    fetched_at: float
    _by_key: Dict[int, ChampionInfo] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self) -> None:
        self._by_key = {c.key: c for c in self.champions}

    def by_key(self, champion_id: int) -> Optional[ChampionInfo]:
        return self._by_key.get(champion_id)

    def display_name(self, champion_id: int) -> str:
        champ = self.by_key(champion_id)
        return champ.name if champ else f"Champion {champion_id}"

    def icon(self, champion_id: int) -> Optional[str]:
        champ = self.by_key(champion_id)
        return champ.icon if champ else None

    def to_dict(self) -> dict:
        return {
            'version': self.version,
            'locale': self.locale,
            'fetched_at': self.fetched_at,
            'champions': [c.to_dict() for c in self.champions],
        }
