"""
Tests for year-window match id enumeration.
"""
import pytest

from application.services import YearWindowMatchEnumerator, year_window
from domain.enums import Region


def test_year_window_bounds():
    """Jan 1 UTC to the next Jan 1 UTC, in epoch seconds."""
    assert year_window(2026) == (1767225600, 1798761600)
    start, end = year_window(2024)
    assert end - start == 366 * 86400


class TestYearWindowMatchEnumerator:
    """Test cases for YearWindowMatchEnumerator."""

    @pytest.mark.asyncio
    async def test_pages_until_short_page(self, gateway):
        """250 ids are read in pages of 100, 100 and 50."""
        gateway.match_ids["p"] = [f"EUW1_{i}" for i in range(250, 0, -1)]
        enumerator = YearWindowMatchEnumerator(gateway, page_size=100)

        ids = await enumerator.list_match_ids("p", Region.EUW1, 2026, queue_id=420)

        assert ids == gateway.match_ids["p"]
        assert [c["start"] for c in gateway.list_calls] == [0, 100, 200]
        assert all(c["count"] == 100 for c in gateway.list_calls)
        assert all(c["queue_id"] == 420 for c in gateway.list_calls)
        assert gateway.list_calls[0]["start_time"] == 1767225600
        assert gateway.list_calls[0]["end_time"] == 1798761600

    @pytest.mark.asyncio
    async def test_stops_on_empty_page(self, gateway):
        """An exact multiple of the page size ends with an empty page."""
        gateway.match_ids["p"] = [f"EUW1_{i}" for i in range(200, 0, -1)]
        enumerator = YearWindowMatchEnumerator(gateway, page_size=100)

        ids = await enumerator.list_match_ids("p", Region.EUW1, 2026)

        assert len(ids) == 200
        assert len(gateway.list_calls) == 3

    @pytest.mark.asyncio
    async def test_stop_at_ends_after_page_with_cursor(self, gateway):
        """Paging stops once the known cursor shows up."""
        gateway.match_ids["p"] = [f"EUW1_{i}" for i in range(250, 0, -1)]
        enumerator = YearWindowMatchEnumerator(gateway, page_size=100)

        ids = await enumerator.list_match_ids("p", Region.EUW1, 2026, stop_at="EUW1_240")

        assert len(ids) == 100
        assert len(gateway.list_calls) == 1

    @pytest.mark.asyncio
    async def test_no_games(self, gateway):
        """A player without games yields an empty list after one call."""
        enumerator = YearWindowMatchEnumerator(gateway, page_size=100)
        assert await enumerator.list_match_ids("nobody", Region.EUW1, 2026) == []
        assert len(gateway.list_calls) == 1
