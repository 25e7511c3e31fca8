from __future__ import annotations

import json
from typing import Optional

from core.logging.logger import get_logger
from domain.errors import EntityNotFound, RemoteError
from .session import tracker_session


class OverviewCommand:
    """Read-side views: player overview, champion games, mastery, catalog."""

    def __init__(self) -> None:
        self._log = get_logger(__name__, service="overview-cli")

    async def overview(self, player_id: str, year: Optional[int] = None, as_json: bool = False) -> int:
        async with tracker_session(require_api_key=False) as runtime:
            try:
                data = await runtime.overview.overview(player_id, year)
            except EntityNotFound as e:
                print(str(e), flush=True)
                return 1
        if as_json:
            print(json.dumps(data, ensure_ascii=False, indent=2), flush=True)
            return 0

        print(f"\n=== {data['display_name']} ({data['riot_id']}) ===", flush=True)
        rank = data['current_rank']
        print(f"Rank: {self._rank_label(rank)}", flush=True)
        if data['pending_ban']:
            print("Pending ban: yes", flush=True)
        print(f"Bans: {', '.join(b['champion'] for b in data['bans']) or '-'}", flush=True)
        print(f"{data['year']} {data['queue']} games: {data['total_games']}" + (" (catch-up pending)" if data['needs_catchup'] else ""))
        for row in data['games'][:10]:
            print(f"  {row['count']:>4}  {row['name']}", flush=True)
        print("Last games:", flush=True)
        for g in data['last5']:
            outcome = "W" if g['win'] else "L"
            print(f"  {outcome} {g['champion_name']:<14} {g['kills']}/{g['deaths']}/{g['assists']}  {g['time']}", flush=True)
        if data['last_error']:
            print(f"Last error: {data['last_error']}", flush=True)
        return 0

    async def champion_games(self, player_id: str, year: Optional[int] = None) -> int:
        async with tracker_session(require_api_key=False) as runtime:
            try:
                data = await runtime.overview.champion_games(player_id, year)
            except EntityNotFound as e:
                print(str(e), flush=True)
                return 1
        print(json.dumps(data, ensure_ascii=False, indent=2), flush=True)
        return 0

    async def mastery(self, player_id: str, count: int = 5) -> int:
        async with tracker_session() as runtime:
            try:
                rows = await runtime.overview.top_mastery(player_id, count)
            except (EntityNotFound, RemoteError) as e:
                self._log.error(lambda: f"mastery-failed {e}")
                print(f"Error: {e}", flush=True)
                return 1
        for row in rows:
            print(f"  L{row['level']:<2} {row['name']:<16} {row['points']:>9,} pts", flush=True)
        return 0

    async def champions(self, locale: Optional[str] = None) -> int:
        async with tracker_session(require_api_key=False) as runtime:
            try:
                catalog = await runtime.overview.champions(locale)
            except RemoteError as e:
                print(f"Error: {e}", flush=True)
                return 1
        print(f"Catalog {catalog.version} ({catalog.locale}): {len(catalog.champions)} champions", flush=True)
        for champ in catalog.champions:
            print(f"  {champ.key:>4}  {champ.name}", flush=True)
        return 0

    @staticmethod
    def _rank_label(rank: Optional[dict]) -> str:
        if not rank:
            return "unknown"
        if rank.get('unranked'):
            return "Unranked"
        winrate = f", {rank['winrate']}% WR" if rank.get('winrate') is not None else ""
        return f"{rank['tier']} {rank.get('division') or ''} {rank['league_points']} LP ({rank['wins']}W/{rank['losses']}L{winrate})"
