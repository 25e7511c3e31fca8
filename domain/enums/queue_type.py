"""Queue type enumeration for ranked matches."""
from __future__ import annotations

from enum import Enum
from typing import Optional


class QueueType(Enum):
    """Ranked queue types in League of Legends.

    Provides:
    - queue_id: numeric queue id for match-v5 filters
    - queue_name: human-readable name
    - api_queue_name: ``queueType`` string used by league-v4 entries
    """

    RANKED_SOLO_5x5 = 420  # Solo/Duo Queue
    RANKED_FLEX_SR = 440   # Flex 5v5 Queue

    @property
    def queue_id(self) -> int:
        return self.value

    @property
    def queue_name(self) -> str:
        names = {
            420: "Ranked Solo/Duo",
            440: "Ranked Flex 5v5",
        }
        return names[self.value]

    @property
    def api_queue_name(self) -> str:
        return self.name

    @classmethod
    def from_queue_id(cls, queue_id: Optional[int]) -> Optional['QueueType']:
        """Map a numeric filter to a ranked queue; None for all-queue filters."""
        for queue in cls:
            if queue.value == queue_id:
                return queue
        return None
