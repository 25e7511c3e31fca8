"""Rank snapshot bookkeeping and promotion detection."""
import logging
from typing import Any, Dict, Iterable, Optional

from domain.entities import PendingPromotion, Player, RankSnapshot, is_promotion
from domain.enums import QueueType

logger = logging.getLogger(__name__)


def solo_queue_snapshot(entries: Iterable[Dict[str, Any]]) -> RankSnapshot:
    """Solo/Duo snapshot from league entries; unranked when the player has none."""
    wanted = QueueType.RANKED_SOLO_5x5.api_queue_name
    for entry in entries or []:
        if entry.get("queueType") == wanted:
            return RankSnapshot.from_league_entry(entry)
    return RankSnapshot.unranked_snapshot()


class PromotionDetector:
    """Turns rank changes into a single pending promotion per player.

    The pending promotion stays until a ban is recorded for it; a second
    promotion observed meanwhile is dropped (first detected wins).
    """

    def observe(
        self,
        player: Player,
        previous: Optional[RankSnapshot],
        current: Optional[RankSnapshot],
        now: str,
    ) -> Optional[PendingPromotion]:
        if not is_promotion(previous, current):
            return None
        if player.pending_ban is not None:
            logger.info(
                f"Promotion {previous.label()} -> {current.label()} for {player.id} dropped: "
                f"ban for {player.pending_ban.to_rank.label()} still pending"
            )
            return None
        promotion = PendingPromotion(detected_at=now, from_rank=previous, to_rank=current)
        player.pending_ban = promotion
        logger.info(f"Promotion detected for {player.id}: {previous.label()} -> {current.label()}")
        return promotion

    def record_snapshot(self, player: Player, snapshot: RankSnapshot, now: str) -> Optional[PendingPromotion]:
        """Shift ``current_rank`` into ``last_rank``, store ``snapshot`` and check for a promotion."""
        previous = player.current_rank
        player.last_rank = previous
        player.current_rank = snapshot
        return self.observe(player, previous, snapshot, now)
