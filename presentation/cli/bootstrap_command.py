from __future__ import annotations

from typing import List, Optional

from core.logging.logger import get_logger
from .session import tracker_session


class BootstrapCommand:
    """Recounts the tracked year for some or all players."""

    def __init__(self) -> None:
        self._log = get_logger(__name__, service="bootstrap-cli")

    async def run(self, player_ids: Optional[List[str]] = None, year: Optional[int] = None) -> int:
        async with tracker_session(year=year) as runtime:
            results = await runtime.bootstrap.execute(player_ids)
        for r in results:
            if r.ok:
                print(
                    f"  ✔ {r.player_id:<16} {r.games_counted} game(s) from {r.match_ids} match id(s)"
                    + (f", {r.pending} pending" if r.pending else ""),
                    flush=True,
                )
            else:
                print(f"  ✖ {r.player_id:<16} {r.error}", flush=True)
            if r.promotion is not None:
                print(
                    f"  ★ {r.player_id}: {r.promotion.from_rank.label()} -> {r.promotion.to_rank.label()} (ban pending)",
                    flush=True,
                )
        return 0 if all(r.ok for r in results) else 1
