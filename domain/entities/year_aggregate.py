"""Per-year champion play aggregate."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .catalog import Catalog


@dataclass(frozen=True)
class ChampionCount:
    champion_id: int
    count: int
    name: str
    icon: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            'champion_id': self.champion_id,
            'count': self.count,
            'name': self.name,
            'icon': self.icon,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'ChampionCount':
        champion_id = int(data['champion_id'])
        return cls(
            champion_id=champion_id,
            count=int(data.get('count', 0)),
            name=data.get('name') or f"Champion {champion_id}",
            icon=data.get('icon'),
        )


@dataclass
class YearAggregate:
    """Champion play counts for one player, year and queue filter.

    ``cursor_match_id`` is the newest match id already accounted for.
    ``pending_match_ids`` holds ids that are newer than an earlier cursor
    but were not processed yet (budget cut-off or remote failure); they are
    drained by the catch-up pass.
    """

    year: int
    queue_id: Optional[int] = None
    total_games: int = 0
    counts_by_entity: Dict[int, int] = field(default_factory=dict)
    by_entity_list: List[ChampionCount] = field(default_factory=list)
    cursor_match_id: Optional[str] = None
    computed_at: Optional[str] = None
    match_count: int = 0
    needs_catchup: bool = False
    pending_match_ids: List[str] = field(default_factory=list)
    # False while the ids older than the first cursor were never counted
    backlog_loaded: bool = False
    last_increment: Dict[str, int] = field(default_factory=dict)

    def add_game(self, champion_id: int) -> None:
        self.counts_by_entity[champion_id] = self.counts_by_entity.get(champion_id, 0) + 1
        self.total_games += 1

    def reset_counts(self) -> None:
        self.counts_by_entity = {}
        self.total_games = 0
        self.by_entity_list = []

    def rebuild_list(self, catalog: Optional[Catalog]) -> None:
        """Re-derive ``by_entity_list`` from the counts, most played first."""
        rows = [
            ChampionCount(
                champion_id=champion_id,
                count=count,
                name=catalog.display_name(champion_id) if catalog else f"Champion {champion_id}",
                icon=catalog.icon(champion_id) if catalog else None,
            )
            for champion_id, count in self.counts_by_entity.items()
        ]
        rows.sort(key=lambda row: row.count, reverse=True)
        self.by_entity_list = rows

    def is_consistent(self) -> bool:
        counted = sum(self.counts_by_entity.values())
        listed = sum(row.count for row in self.by_entity_list)
        return self.total_games == counted == listed

    def to_dict(self) -> dict:
        return {
            'year': self.year,
            'queue_id': self.queue_id,
            'total_games': self.total_games,
            # JSON object keys are strings
            'counts_by_entity': {str(k): v for k, v in self.counts_by_entity.items()},
            'by_entity_list': [row.to_dict() for row in self.by_entity_list],
            'cursor_match_id': self.cursor_match_id,
            'computed_at': self.computed_at,
            'match_count': self.match_count,
            'needs_catchup': self.needs_catchup,
            'pending_match_ids': list(self.pending_match_ids),
            'backlog_loaded': self.backlog_loaded,
            'last_increment': dict(self.last_increment),
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'YearAggregate':
        counts = {int(k): int(v) for k, v in (data.get('counts_by_entity') or {}).items()}
        rows = [ChampionCount.from_dict(r) for r in data.get('by_entity_list') or []]
        if not counts and rows:
            counts = {row.champion_id: row.count for row in rows}
        return cls(
            year=int(data['year']),
            queue_id=data.get('queue_id'),
            total_games=int(data.get('total_games', sum(counts.values()))),
            counts_by_entity=counts,
            by_entity_list=rows,
            cursor_match_id=data.get('cursor_match_id'),
            computed_at=data.get('computed_at'),
            match_count=int(data.get('match_count', 0)),
            needs_catchup=bool(data.get('needs_catchup', False)),
            pending_match_ids=list(data.get('pending_match_ids') or []),
            backlog_loaded=bool(data.get('backlog_loaded', bool(counts))),
            last_increment=dict(data.get('last_increment') or {}),
        )
