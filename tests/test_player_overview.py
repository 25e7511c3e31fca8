"""
Tests for the read-side player queries.
"""
import pytest

from domain.entities import TrackerState
from domain.errors import EntityNotFound

from conftest import YEAR, make_player


class TestPlayerOverviewQuery:
    """Test cases for PlayerOverviewQuery."""

    @pytest.mark.asyncio
    async def test_overview_of_synced_player(self, gateway, make_runtime, synced_player):
        """The overview is served from the stored document."""
        runtime, _ = make_runtime(TrackerState(players=[synced_player]))

        data = await runtime.overview.overview("alex")

        assert data['year'] == YEAR
        assert data['queue'] == "Ranked Solo/Duo"
        assert data['total_games'] == 3
        assert data['games'][0]['champion_id'] == 103
        assert data['current_rank']['tier'] == "GOLD"
        assert data['pending_ban'] is None
        assert gateway.rank_calls == [] and gateway.list_calls == []

    @pytest.mark.asyncio
    async def test_unknown_year_is_empty(self, make_runtime, synced_player):
        runtime, _ = make_runtime(TrackerState(players=[synced_player]))

        data = await runtime.overview.champion_games("alex", YEAR - 1)

        assert data['year'] == YEAR - 1
        assert data['total_games'] == 0 and data['by_entity_list'] == []

    @pytest.mark.asyncio
    async def test_unknown_player(self, make_runtime):
        runtime, _ = make_runtime(TrackerState())

        with pytest.raises(EntityNotFound):
            await runtime.overview.overview("ghost")

    @pytest.mark.asyncio
    async def test_top_mastery_resolves_and_stores_puuid(self, gateway, make_runtime):
        """A player without a puuid is resolved once and the id is persisted."""
        gateway.puuids["AlexPlays#EUW"] = "puuid-alex"
        gateway.mastery["puuid-alex"] = [
            {"championId": 64, "championLevel": 12, "championPoints": 154000},
            {"championId": 999, "championLevel": 3, "championPoints": 8000},
        ]
        runtime, repository = make_runtime(TrackerState(players=[make_player(puuid=None)]))

        rows = await runtime.overview.top_mastery("alex", count=2)

        assert [r['name'] for r in rows] == ["Lee Sin", "Champion 999"]
        assert rows[0]['points'] == 154000
        assert repository.snapshot().get_player("alex").puuid == "puuid-alex"
        assert gateway.identity_calls == ["AlexPlays#EUW"]
