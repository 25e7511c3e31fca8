"""Ban recording for a pending promotion."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from core.logging import context as log_context, get_logger
from domain.entities import BanRecord, HistoryEntry, TrackerState
from domain.errors import EntityNotFound, InvariantViolation, StateNotSaved, TrackerError
from domain.interfaces import IStateRepository
from application.services import utc_now_iso


@dataclass
class ActionResult:
    """Outcome of a user action. Rejections carry the error instead of raising it."""

    ok: bool
    error: Optional[TrackerError] = None
    entry: Optional[HistoryEntry] = None
    state: Optional[TrackerState] = None

    @property
    def message(self) -> str:
        return str(self.error) if self.error else "ok"


class RecordBanUseCase:
    """
    Records the champion a promoted player has to give up.

    A ban is only accepted while a promotion is pending, and a player can
    ban each champion once (compared trimmed, single-spaced, lower-case).
    A rejected request or a failed save leaves the stored document unchanged.
    """

    def __init__(self, repository: IStateRepository):
        self.repository = repository
        self._log = get_logger(__name__, service="ban")

    async def execute(self, player_id: str, champion: str, note: str = "") -> ActionResult:
        champion = " ".join(str(champion or "").split())
        if not player_id or not champion:
            return self._reject(InvariantViolation("player id and champion are required"))

        async with self.repository.lock():
            state = await self.repository.load()
            player = state.find_player(player_id)
            if player is None:
                return self._reject(EntityNotFound("player", player_id))

            with log_context(player=player.id):
                if player.pending_ban is None:
                    return self._reject(
                        InvariantViolation("no promotion detected; bans are only allowed after a promotion")
                    )
                if player.has_ban(champion):
                    return self._reject(InvariantViolation(f"{champion} is already banned for {player.display_name}"))

                now = utc_now_iso()
                entry = HistoryEntry(
                    time=now,
                    player_id=player.id,
                    player_name=player.display_name,
                    champion=champion,
                    note=str(note or ""),
                    promotion=player.pending_ban,
                )
                player.bans.append(BanRecord(time=now, champion=champion, note=entry.note))
                player.pending_ban = None
                state.ban_history.insert(0, entry)

                try:
                    await self.repository.save(state)
                except (OSError, TypeError, ValueError) as exc:
                    self._log.error(f"Saving ban for {player.id} failed: {exc}", exc_info=True)
                    return ActionResult(ok=False, error=StateNotSaved(str(exc)))
                self._log.success(
                    f"{player.display_name} banned {champion} "
                    f"({entry.promotion.from_rank.label()} -> {entry.promotion.to_rank.label()})"
                )
                return ActionResult(ok=True, entry=entry, state=state)

    def _reject(self, error: TrackerError) -> ActionResult:
        self._log.warning(f"Ban rejected: {error}")
        return ActionResult(ok=False, error=error)
