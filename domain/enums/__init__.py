"""Domain enumerations."""
from .region import Region
from .queue_type import QueueType
from .rank import Tier, Division

__all__ = [
    'Region',
    'QueueType',
    'Tier',
    'Division',
]
