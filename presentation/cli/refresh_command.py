from __future__ import annotations

import asyncio
from typing import Optional

from core.logging.logger import get_logger
from application.use_cases import CycleReport, RefreshStatus
from .session import tracker_session

_STATUS_MARK = {
    RefreshStatus.UPDATED: "✔",
    RefreshStatus.UNCHANGED: "·",
    RefreshStatus.PARTIAL: "…",
    RefreshStatus.FAILED: "✖",
}


class RefreshCommand:
    """Runs refresh cycles and prints a per-player summary."""

    def __init__(self) -> None:
        self._log = get_logger(__name__, service="refresh-cli")

    async def run(self, interval_s: Optional[float] = None, catch_up: bool = False) -> int:
        async with tracker_session() as runtime:
            while True:
                report = await runtime.refresh.execute()
                self._print_report(report)
                if catch_up:
                    backlog = await runtime.catch_up.execute()
                    if not backlog.persisted:
                        self._log.error(f"Catch-up state not saved: {backlog.save_error}")
                if not interval_s:
                    return 0 if report.persisted else 1
                self._log.info(lambda: f"Next refresh in {interval_s:.0f}s")
                await asyncio.sleep(interval_s)

    @staticmethod
    def _print_report(report: CycleReport) -> None:
        print(f"\n=== Refresh {report.started_at} ===", flush=True)
        for result in report.results:
            line = f"  {_STATUS_MARK[result.status]} {result.player_id:<16} {result.status.value:<9}"
            if result.new_matches_seen:
                line += f" +{result.games_counted} game(s) from {result.new_matches_seen} match(es)"
            if result.pending:
                line += f" [{result.pending} pending]"
            if result.error:
                line += f" error: {result.error}"
            print(line, flush=True)
        for result in report.promotions:
            promo = result.promotion
            print(
                f"  ★ {result.player_id}: {promo.from_rank.label()} -> {promo.to_rank.label()} (ban pending)",
                flush=True,
            )
        print(f"  budget spent: {report.budget_spent}  saved: {'yes' if report.persisted else 'NO'}", flush=True)
