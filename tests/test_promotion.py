"""
Tests for rank ordering, promotion detection and the pending-ban slot.
"""
import pytest

from application.services import PromotionDetector, solo_queue_snapshot
from domain.entities import RankSnapshot, is_promotion

from conftest import league_entry, make_player


def snap(tier, division="IV", lp=0):
    return RankSnapshot.from_league_entry(league_entry(tier, division, lp))


LADDER = [
    ("IRON", "IV"), ("IRON", "I"), ("BRONZE", "II"), ("SILVER", "III"), ("GOLD", "IV"),
    ("GOLD", "III"), ("PLATINUM", "I"), ("EMERALD", "IV"), ("DIAMOND", "I"),
    ("MASTER", "I"), ("GRANDMASTER", "I"), ("CHALLENGER", "I"),
]


class TestRankOrdering:
    """Test cases for rank keys and is_promotion."""

    def test_ladder_is_totally_ordered(self):
        """Every step up the ladder compares strictly greater."""
        keys = [snap(t, d).rank_key() for t, d in LADDER]
        assert keys == sorted(keys)
        assert len(set(keys)) == len(keys)

    @pytest.mark.parametrize("old,new", [
        (("GOLD", "IV"), ("GOLD", "III")),
        (("GOLD", "I"), ("PLATINUM", "IV")),
        (("DIAMOND", "I"), ("MASTER", "I")),
        (("MASTER", "I"), ("GRANDMASTER", "I")),
    ])
    def test_promotions(self, old, new):
        """Division and tier climbs are promotions."""
        assert is_promotion(snap(*old), snap(*new))

    @pytest.mark.parametrize("old,new", [
        (("GOLD", "III"), ("GOLD", "IV")),
        (("PLATINUM", "IV"), ("GOLD", "I")),
        (("GOLD", "II"), ("GOLD", "II")),
    ])
    def test_demotions_and_same_rank(self, old, new):
        """Moving down or staying put is not a promotion."""
        assert not is_promotion(snap(*old), snap(*new))

    def test_league_points_do_not_count(self):
        """Gaining LP inside a division is not a promotion."""
        assert not is_promotion(snap("GOLD", "IV", 0), snap("GOLD", "IV", 99))

    def test_apex_tiers_ignore_division(self):
        """Master and above compare at the top division whatever the entry says."""
        assert snap("MASTER", "I").rank_key() == snap("MASTER", "IV").rank_key()

    def test_unranked_is_never_part_of_a_promotion(self):
        """Placement from unranked and decay to unranked are ignored."""
        unranked = RankSnapshot.unranked_snapshot()
        assert not is_promotion(unranked, snap("GOLD", "IV"))
        assert not is_promotion(snap("GOLD", "IV"), unranked)
        assert not is_promotion(None, snap("GOLD", "IV"))

    def test_unknown_tier_is_not_comparable(self):
        """An unrecognised tier never produces a promotion."""
        assert not is_promotion(snap("GOLD", "IV"), snap("WOOD", "I"))


class TestSoloQueueSnapshot:
    """Test cases for solo_queue_snapshot."""

    def test_picks_solo_entry(self):
        """Flex entries are ignored."""
        entries = [
            league_entry("DIAMOND", "II", queue_type="RANKED_FLEX_SR"),
            league_entry("GOLD", "III", 40, wins=21, losses=19),
        ]
        result = solo_queue_snapshot(entries)

        assert (result.tier, result.division, result.league_points) == ("GOLD", "III", 40)
        assert result.winrate == 52.5

    def test_no_entry_is_unranked(self):
        """A player without a solo entry is unranked."""
        assert solo_queue_snapshot([]).unranked


class TestPromotionDetector:
    """Test cases for PromotionDetector."""

    def test_records_pending_promotion(self, gold_iv):
        """GOLD IV -> GOLD III sets the pending ban with both snapshots."""
        player = make_player(current_rank=gold_iv)
        detector = PromotionDetector()

        promotion = detector.record_snapshot(player, snap("GOLD", "III"), "2026-03-01T10:00:00.000Z")

        assert promotion is player.pending_ban
        assert promotion.from_rank == gold_iv
        assert promotion.to_rank.division == "III"
        assert player.last_rank == gold_iv

    def test_first_detected_promotion_wins(self, gold_iv):
        """A second promotion while one is pending is dropped."""
        player = make_player(current_rank=gold_iv)
        detector = PromotionDetector()
        first = detector.record_snapshot(player, snap("GOLD", "III"), "t1")

        second = detector.record_snapshot(player, snap("GOLD", "II"), "t2")

        assert second is None
        assert player.pending_ban is first
        assert player.current_rank.division == "II"

    def test_no_previous_snapshot(self):
        """The very first observation cannot be a promotion."""
        player = make_player()
        assert PromotionDetector().record_snapshot(player, snap("GOLD", "III"), "t") is None
        assert player.pending_ban is None
