"""
Tests for the incremental per-year champion aggregation.
"""
import pytest

from application.services import (
    FetchBudget,
    IncrementalAggregator,
    MatchDetailCache,
    StaticCatalogCache,
    YearWindowMatchEnumerator,
    is_remake,
)
from domain.entities import YearAggregate
from domain.enums import Region
from domain.errors import RemoteRequestFailed

from conftest import SOLO, YEAR, make_detail, make_player

PUUID = "puuid-alex"


@pytest.fixture
def budget():
    """Per-cycle budget of 20 details."""
    return FetchBudget(20)


@pytest.fixture
def aggregator(gateway, budget):
    """Aggregator wired over the fake gateway."""
    cache = MatchDetailCache(gateway, budget)
    catalog = StaticCatalogCache(gateway)
    return IncrementalAggregator(YearWindowMatchEnumerator(gateway), cache, catalog, workers=3)


@pytest.fixture
def player():
    """Player with a resolved puuid."""
    return make_player()


def synced_stats(cursor="EUW1_100"):
    stats = YearAggregate(year=YEAR, queue_id=SOLO, cursor_match_id=cursor, backlog_loaded=True)
    stats.add_game(103)
    stats.rebuild_list(None)
    return stats


def publish(gateway, ids_with_champions, *, older=("EUW1_100", "EUW1_099"), remakes=()):
    """Newest-first listing: the given new matches followed by ``older``."""
    ids = [match_id for match_id, _ in ids_with_champions] + list(older)
    gateway.match_ids[PUUID] = ids
    for match_id, champion_id in ids_with_champions:
        duration = 200 if match_id in remakes else 1800
        gateway.details[match_id] = make_detail(match_id, PUUID, champion_id, duration=duration)
    for match_id in older:
        gateway.details.setdefault(match_id, make_detail(match_id, PUUID, 103))


class TestAdvance:
    """Test cases for IncrementalAggregator.advance."""

    @pytest.mark.asyncio
    async def test_first_run_seeds_cursor_without_counting(self, aggregator, gateway, player):
        """The head of the listing becomes the cursor and the backlog is flagged."""
        publish(gateway, [("EUW1_101", 1)])
        stats = YearAggregate(year=YEAR, queue_id=SOLO)

        result = await aggregator.advance(player, stats, Region.EUW1)

        assert result.seeded
        assert stats.cursor_match_id == "EUW1_101"
        assert stats.total_games == 0
        assert stats.needs_catchup and not stats.backlog_loaded
        assert gateway.detail_calls == []

    @pytest.mark.asyncio
    async def test_counts_new_games_and_moves_cursor(self, aggregator, gateway, player):
        """Only ids newer than the cursor are fetched and counted."""
        publish(gateway, [("EUW1_102", 1), ("EUW1_101", 103)])
        stats = synced_stats()

        result = await aggregator.advance(player, stats, Region.EUW1)

        assert (result.new_matches_seen, result.games_counted) == (2, 2)
        assert stats.cursor_match_id == "EUW1_102"
        assert stats.counts_by_entity == {103: 2, 1: 1}
        assert [row.name for row in stats.by_entity_list] == ["Ahri", "Annie"]
        assert sorted(gateway.detail_calls) == ["EUW1_101", "EUW1_102"]
        assert stats.last_increment == {"new_matches_seen": 2, "games_counted": 2}
        assert stats.is_consistent()

    @pytest.mark.asyncio
    async def test_replay_does_not_double_count(self, aggregator, gateway, player):
        """Running again over the same listing changes nothing."""
        publish(gateway, [("EUW1_101", 1)])
        stats = synced_stats()
        await aggregator.advance(player, stats, Region.EUW1)
        before = dict(stats.counts_by_entity)

        result = await aggregator.advance(player, stats, Region.EUW1)

        assert result.new_matches_seen == 0
        assert stats.counts_by_entity == before
        assert stats.cursor_match_id == "EUW1_101"

    @pytest.mark.asyncio
    async def test_remakes_are_not_counted(self, aggregator, gateway, player):
        """Games shorter than five minutes are seen but not counted."""
        publish(gateway, [("EUW1_102", 1), ("EUW1_101", 64)], remakes={"EUW1_102"})
        stats = synced_stats()

        result = await aggregator.advance(player, stats, Region.EUW1)

        assert (result.new_matches_seen, result.games_counted) == (2, 1)
        assert 1 not in stats.counts_by_entity
        assert stats.counts_by_entity[64] == 1
        assert stats.cursor_match_id == "EUW1_102"

    @pytest.mark.asyncio
    async def test_budget_cutoff_parks_remainder(self, gateway, player):
        """Budget 2 with five new games: two counted, three pending, cursor at head."""
        new = [(f"EUW1_10{i}", 103) for i in range(5, 0, -1)]
        publish(gateway, new)
        budget = FetchBudget(2)
        aggregator = IncrementalAggregator(
            YearWindowMatchEnumerator(gateway), MatchDetailCache(gateway, budget), StaticCatalogCache(gateway)
        )
        stats = synced_stats()

        result = await aggregator.advance(player, stats, Region.EUW1)

        assert result.budget_exhausted
        assert result.games_counted == 2
        assert stats.cursor_match_id == "EUW1_105"
        assert stats.pending_match_ids == ["EUW1_103", "EUW1_102", "EUW1_101"]
        assert stats.needs_catchup
        assert stats.total_games == 3
        assert stats.is_consistent()

    @pytest.mark.asyncio
    async def test_remote_error_keeps_counted_and_parks_rest(self, aggregator, gateway, player):
        """A failing detail propagates; earlier games stay counted."""
        publish(gateway, [("EUW1_103", 1), ("EUW1_102", 1), ("EUW1_101", 1)])
        gateway.failing_details.add("EUW1_102")
        stats = synced_stats()

        with pytest.raises(RemoteRequestFailed):
            await aggregator.advance(player, stats, Region.EUW1)

        assert stats.counts_by_entity[1] == 1
        assert stats.pending_match_ids == ["EUW1_102", "EUW1_101"]
        assert stats.cursor_match_id == "EUW1_103"
        assert stats.is_consistent()

    @pytest.mark.asyncio
    async def test_catalog_failure_leaves_aggregate_untouched(self, aggregator, gateway, player):
        """Nothing moves when the catalog cannot be loaded."""
        publish(gateway, [("EUW1_101", 1)])
        gateway.fail_catalog = True
        stats = synced_stats()

        with pytest.raises(RemoteRequestFailed):
            await aggregator.advance(player, stats, Region.EUW1)

        assert stats.cursor_match_id == "EUW1_100"
        assert stats.total_games == 1
        assert gateway.detail_calls == []

    @pytest.mark.asyncio
    async def test_cursor_only_moves_forward(self, aggregator, gateway, player):
        """Successive cycles move the cursor to each new head."""
        stats = synced_stats()
        cursors = []
        for head in ("EUW1_101", "EUW1_102", "EUW1_103"):
            older = tuple(gateway.match_ids.get(PUUID, ["EUW1_100"]))
            publish(gateway, [(head, 81)], older=older)
            await aggregator.advance(player, stats, Region.EUW1)
            cursors.append(stats.cursor_match_id)

        assert cursors == ["EUW1_101", "EUW1_102", "EUW1_103"]
        assert stats.counts_by_entity[81] == 3


class TestDrainPending:
    """Test cases for IncrementalAggregator.drain_pending."""

    @pytest.mark.asyncio
    async def test_drains_parked_ids(self, aggregator, gateway, player, budget):
        """Parked ids are fetched by the pool and counted once."""
        for match_id in ("EUW1_103", "EUW1_102", "EUW1_101"):
            gateway.details[match_id] = make_detail(match_id, PUUID, 64)
        stats = synced_stats(cursor="EUW1_105")
        stats.pending_match_ids = ["EUW1_103", "EUW1_102", "EUW1_101"]
        stats.needs_catchup = True

        result = await aggregator.drain_pending(player, stats, Region.EUW1)

        assert result.games_counted == 3
        assert stats.pending_match_ids == []
        assert not stats.needs_catchup
        assert stats.counts_by_entity[64] == 3
        assert stats.cursor_match_id == "EUW1_105"
        assert stats.is_consistent()

    @pytest.mark.asyncio
    async def test_drain_respects_budget(self, gateway, player):
        """Whatever the budget does not cover stays pending."""
        for match_id in ("EUW1_103", "EUW1_102", "EUW1_101"):
            gateway.details[match_id] = make_detail(match_id, PUUID, 64)
        aggregator = IncrementalAggregator(
            YearWindowMatchEnumerator(gateway), MatchDetailCache(gateway, FetchBudget(1)),
            StaticCatalogCache(gateway), workers=3,
        )
        stats = synced_stats(cursor="EUW1_105")
        stats.pending_match_ids = ["EUW1_103", "EUW1_102", "EUW1_101"]

        result = await aggregator.drain_pending(player, stats, Region.EUW1)

        assert result.budget_exhausted
        assert len(stats.pending_match_ids) == 2
        assert stats.counts_by_entity[64] == 1
        assert stats.needs_catchup
        assert stats.is_consistent()


@pytest.mark.parametrize("duration,expected", [(0, False), (1, True), (299, True), (300, False), (1800, False)])
def test_is_remake_threshold(duration, expected):
    """Only 0 < duration < 300 seconds is a remake."""
    assert is_remake({"info": {"gameDuration": duration}}, 300) is expected
