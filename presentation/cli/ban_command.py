from __future__ import annotations

from core.logging.logger import get_logger
from .session import tracker_session


class BanCommand:
    """Records a ban for a player with a pending promotion."""

    def __init__(self) -> None:
        self._log = get_logger(__name__, service="ban-cli")

    async def run(self, player_id: str, champion: str, note: str = "") -> int:
        async with tracker_session(require_api_key=False) as runtime:
            result = await runtime.record_ban.execute(player_id, champion, note)
        if not result.ok:
            print(f"Rejected: {result.message}", flush=True)
            return 1
        entry = result.entry
        print(
            f"Recorded: {entry.player_name} bans {entry.champion} "
            f"({entry.promotion.from_rank.label()} -> {entry.promotion.to_rank.label()})",
            flush=True,
        )
        return 0

    async def run_interactive(self) -> int:
        player_id = input("Player id: ").strip()
        champion = input("Champion: ").strip()
        note = input("Note (optional): ").strip()
        return await self.run(player_id, champion, note)
