from __future__ import annotations

from core.logging.logger import get_logger
from .session import tracker_session


class CatchUpCommand:
    """Works off parked match ids and unloaded year backlogs."""

    def __init__(self) -> None:
        self._log = get_logger(__name__, service="catch-up-cli")

    async def run(self) -> int:
        async with tracker_session() as runtime:
            report = await runtime.catch_up.execute()
        if not report.results:
            print("Nothing to catch up.", flush=True)
        for r in report.results:
            kind = "bootstrap" if r.bootstrapped else "drain"
            status = f"error: {r.error}" if r.error else f"{r.processed} processed, {r.pending} pending"
            print(f"  {r.player_id:<16} {r.year} {kind:<9} +{r.games_counted} game(s)  {status}", flush=True)
        if not report.persisted:
            print(f"  state not saved: {report.save_error}", flush=True)
        return 0 if report.ok else 1
