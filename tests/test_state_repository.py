"""
Tests for the JSON state repository.
"""
import json

import pytest

from domain.entities import BanRecord, TrackerState, YearAggregate
from infrastructure.repositories import JsonStateRepository

from conftest import make_player


class TestJsonStateRepository:
    """Test cases for JsonStateRepository."""

    @pytest.mark.asyncio
    async def test_missing_document_is_provisioned_from_seed(self, tmp_path):
        """The seed file is copied into place on first load."""
        seed = tmp_path / "seed.json"
        seed.write_text(json.dumps({"players": [
            {"id": "alex", "displayName": "Alex", "riotId": {"gameName": "Alex", "tagLine": "EUW"},
             "platform": "euw1"},
        ]}), encoding="utf-8")
        repository = JsonStateRepository(tmp_path / "data" / "data.json", seed)

        state = await repository.load()

        assert [p.id for p in state.players] == ["alex"]
        assert state.players[0].riot_id.game_name == "Alex"
        assert (tmp_path / "data" / "data.json").exists()

    @pytest.mark.asyncio
    async def test_missing_document_without_seed_is_empty(self, tmp_path):
        """No seed means an empty roster."""
        repository = JsonStateRepository(tmp_path / "data.json", tmp_path / "absent.json")

        state = await repository.load()

        assert state.players == [] and state.ban_history == []

    @pytest.mark.asyncio
    async def test_round_trip(self, tmp_path):
        """A saved document loads back equal, with integer champion keys."""
        stats = YearAggregate(year=2026, queue_id=420, cursor_match_id="EUW1_9", backlog_loaded=True)
        stats.add_game(103)
        stats.add_game(103)
        stats.rebuild_list(None)
        player = make_player(champ_games_by_year={"2026": stats}, bans=[BanRecord("t", "Ahri", "")])
        repository = JsonStateRepository(tmp_path / "data.json")

        async with repository.lock():
            await repository.save(TrackerState(players=[player]))
        loaded = (await repository.load()).get_player("alex")

        assert loaded.year_stats(2026).counts_by_entity == {103: 2}
        assert loaded.year_stats(2026).cursor_match_id == "EUW1_9"
        assert loaded.bans[0].champion == "Ahri"
        raw = json.loads((tmp_path / "data.json").read_text(encoding="utf-8"))
        assert raw["players"][0]["champ_games_by_year"]["2026"]["counts_by_entity"] == {"103": 2}

    @pytest.mark.asyncio
    async def test_save_leaves_no_temp_files(self, tmp_path):
        """Writes go through a temp file that is moved into place."""
        repository = JsonStateRepository(tmp_path / "data.json")
        await repository.save(TrackerState())
        await repository.save(TrackerState(global_last_updated_at="2026-01-01T00:00:00.000Z"))

        assert sorted(p.name for p in tmp_path.iterdir()) == ["data.json"]
        assert (await repository.load()).global_last_updated_at == "2026-01-01T00:00:00.000Z"
