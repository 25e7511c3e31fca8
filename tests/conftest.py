"""
Shared fixtures: an in-memory Riot gateway, an in-memory state repository
and small builders for players, league entries and match records.
"""
from __future__ import annotations

import asyncio
import copy
from typing import Any, Dict, List, Optional, Set

import pytest

from application import TrackerRuntime
from domain.entities import Player, RankSnapshot, RiotId, TrackerState, WinLoss
from domain.enums import Region
from domain.errors import RemoteRequestFailed
from domain.interfaces import ICatalogSource, IPlayerDataSource, IStateRepository

YEAR = 2026
SOLO = 420

CHAMPION_DATA: Dict[str, Any] = {
    "type": "champion",
    "version": "16.1.1",
    "data": {
        "Ahri": {"id": "Ahri", "key": "103", "name": "Ahri", "title": "die neunschwänzige Füchsin",
                 "image": {"full": "Ahri.png"}},
        "Annie": {"id": "Annie", "key": "1", "name": "Annie", "title": "das Kind der Finsternis",
                  "image": {"full": "Annie.png"}},
        "Ezreal": {"id": "Ezreal", "key": "81", "name": "Ezreal", "title": "der verschwenderische Entdecker",
                   "image": {"full": "Ezreal.png"}},
        "LeeSin": {"id": "LeeSin", "key": "64", "name": "Lee Sin", "title": "der blinde Mönch",
                   "image": {"full": "LeeSin.png"}},
        "MonkeyKing": {"id": "MonkeyKing", "key": "62", "name": "Wukong", "title": "der Affenkönig",
                       "image": {"full": "MonkeyKing.png"}},
    },
}


def league_entry(tier: str, rank: str = "IV", lp: int = 0, wins: int = 10, losses: int = 10,
                 queue_type: str = "RANKED_SOLO_5x5") -> Dict[str, Any]:
    return {
        "queueType": queue_type,
        "tier": tier,
        "rank": rank,
        "leaguePoints": lp,
        "wins": wins,
        "losses": losses,
    }


def make_detail(match_id: str, puuid: str, champion_id: int, *, duration: int = 1800, win: bool = True,
                kills: int = 5, deaths: int = 2, assists: int = 7, queue_id: int = SOLO,
                end_ts: int = 1767300000000) -> Dict[str, Any]:
    return {
        "metadata": {"matchId": match_id},
        "info": {
            "gameDuration": duration,
            "gameEndTimestamp": end_ts,
            "queueId": queue_id,
            "participants": [
                {"puuid": "someone-else", "championId": 81, "win": not win,
                 "kills": 1, "deaths": 1, "assists": 1},
                {"puuid": puuid, "championId": champion_id, "win": win,
                 "kills": kills, "deaths": deaths, "assists": assists},
            ],
        },
    }


def make_player(player_id: str = "alex", puuid: Optional[str] = "puuid-alex", **overrides: Any) -> Player:
    values: Dict[str, Any] = dict(
        id=player_id,
        display_name=player_id.capitalize(),
        riot_id=RiotId(f"{player_id.capitalize()}Plays", "EUW"),
        platform="euw1",
        puuid=puuid,
    )
    values.update(overrides)
    return Player(**values)


class FakeRiotGateway(IPlayerDataSource, ICatalogSource):
    """Serves canned provider data and records every call."""

    def __init__(self) -> None:
        self.puuids: Dict[str, str] = {}
        self.rank_entries: Dict[str, List[Dict[str, Any]]] = {}
        self.match_ids: Dict[str, List[str]] = {}
        self.details: Dict[str, Dict[str, Any]] = {}
        self.mastery: Dict[str, List[Dict[str, Any]]] = {}
        self.versions: List[str] = ["16.1.1", "15.24.1"]
        self.champion_data: Dict[str, Any] = CHAMPION_DATA

        self.failing_details: Set[str] = set()
        self.failing_rank_puuids: Set[str] = set()
        self.fail_catalog = False

        self.identity_calls: List[str] = []
        self.rank_calls: List[str] = []
        self.list_calls: List[Dict[str, Any]] = []
        self.detail_calls: List[str] = []
        self.catalog_calls = 0

    async def resolve_identity(self, game_name: str, tag_line: str) -> str:
        riot_id = f"{game_name}#{tag_line}"
        self.identity_calls.append(riot_id)
        if riot_id not in self.puuids:
            raise RemoteRequestFailed(404, "account not found")
        return self.puuids[riot_id]

    async def get_rank_entries(self, puuid: str, region: Region) -> List[Dict[str, Any]]:
        self.rank_calls.append(puuid)
        if puuid in self.failing_rank_puuids:
            raise RemoteRequestFailed(503, "league service unavailable")
        return list(self.rank_entries.get(puuid, []))

    async def get_match_ids(self, puuid: str, region: Region, *, start_time: Optional[int] = None,
                            end_time: Optional[int] = None, start: int = 0, count: int = 20,
                            queue_id: Optional[int] = None) -> List[str]:
        self.list_calls.append({"puuid": puuid, "start_time": start_time, "end_time": end_time,
                                "start": start, "count": count, "queue_id": queue_id})
        return list(self.match_ids.get(puuid, [])[start:start + count])

    async def get_match_detail(self, region: Region, match_id: str) -> Dict[str, Any]:
        self.detail_calls.append(match_id)
        await asyncio.sleep(0)
        if match_id in self.failing_details:
            raise RemoteRequestFailed(500, "match service error")
        if match_id not in self.details:
            raise RemoteRequestFailed(404, "match not found")
        return self.details[match_id]

    async def get_top_mastery(self, puuid: str, region: Region, count: int = 5) -> List[Dict[str, Any]]:
        return list(self.mastery.get(puuid, []))[:count]

    async def get_versions(self) -> List[str]:
        self.catalog_calls += 1
        if self.fail_catalog:
            raise RemoteRequestFailed(None, "network error")
        return list(self.versions)

    async def get_champion_data(self, version: str, locale: str) -> Dict[str, Any]:
        return copy.deepcopy(self.champion_data)

    def champion_icon_url(self, version: str, image_file: str) -> str:
        return f"https://cdn.test/{version}/img/champion/{image_file}"


class InMemoryStateRepository(IStateRepository):
    """Keeps the serialized document in memory; counts saves."""

    def __init__(self, state: Optional[TrackerState] = None) -> None:
        self._document = (state or TrackerState()).to_dict()
        self._lock = asyncio.Lock()
        self.saves = 0
        self.fail_save = False

    def lock(self):
        return self._lock

    async def load(self) -> TrackerState:
        return TrackerState.from_dict(copy.deepcopy(self._document))

    async def save(self, state: TrackerState) -> None:
        if self.fail_save:
            raise OSError("disk full")
        self._document = copy.deepcopy(state.to_dict())
        self.saves += 1

    def snapshot(self) -> TrackerState:
        return TrackerState.from_dict(copy.deepcopy(self._document))


@pytest.fixture
def gateway() -> FakeRiotGateway:
    """Fresh fake provider."""
    return FakeRiotGateway()


@pytest.fixture
def gold_iv() -> RankSnapshot:
    """Gold IV snapshot at 10W/10L."""
    return RankSnapshot.from_league_entry(league_entry("GOLD", "IV", 75, 10, 10))


@pytest.fixture
def make_runtime(gateway):
    """Build a runtime over the fake gateway and an in-memory repository."""

    def _build(state: TrackerState, budget_limit: int = 20):
        repository = InMemoryStateRepository(state)
        runtime = TrackerRuntime.build(gateway, gateway, repository, year=YEAR, queue_id=SOLO,
                                       budget_limit=budget_limit)
        return runtime, repository

    return _build


@pytest.fixture
def synced_player(gold_iv) -> Player:
    """Player whose tracked year is loaded and whose cursor sits at EUW1_100."""
    from domain.entities import RecentGames, YearAggregate

    player = make_player(current_rank=gold_iv, solo_wl=WinLoss(10, 10))
    stats = YearAggregate(year=YEAR, queue_id=SOLO, cursor_match_id="EUW1_100", backlog_loaded=True)
    stats.counts_by_entity = {103: 3}
    stats.total_games = 3
    stats.rebuild_list(None)
    player.champ_games_by_year[str(YEAR)] = stats
    player.last5 = RecentGames(computed_at="2026-01-02T00:00:00.000Z", games=[])
    return player
