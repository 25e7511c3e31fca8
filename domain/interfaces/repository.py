"""Interfaces to the collaborators the core depends on."""
from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from typing import Any, Dict, List, Optional

from ..entities import TrackerState
from ..enums import Region


class IStateRepository(ABC):
    """Whole-document persistence. No partial updates."""

    @abstractmethod
    async def load(self) -> TrackerState:
        """Read the full state document."""

    @abstractmethod
    async def save(self, state: TrackerState) -> None:
        """Replace the full state document."""

    @abstractmethod
    def lock(self) -> AbstractAsyncContextManager:
        """Exclusive section for a load → mutate → save sequence."""


class IPlayerDataSource(ABC):
    """Player identity / rank / match lookups on the remote provider."""

    @abstractmethod
    async def resolve_identity(self, game_name: str, tag_line: str) -> str:
        """Return the persistent id (puuid) for a Riot ID."""

    @abstractmethod
    async def get_rank_entries(self, puuid: str, region: Region) -> List[Dict[str, Any]]:
        """League-v4 entries, one per ranked queue the player is placed in."""

    @abstractmethod
    async def get_match_ids(
        self,
        puuid: str,
        region: Region,
        *,
        start_time: Optional[int] = None,
        end_time: Optional[int] = None,
        start: int = 0,
        count: int = 20,
        queue_id: Optional[int] = None,
    ) -> List[str]:
        """Match ids, newest first."""

    @abstractmethod
    async def get_match_detail(self, region: Region, match_id: str) -> Dict[str, Any]:
        """Raw match-v5 record."""

    @abstractmethod
    async def get_top_mastery(self, puuid: str, region: Region, count: int = 5) -> List[Dict[str, Any]]:
        """Top champion-mastery entries."""


class ICatalogSource(ABC):
    """Versioned static champion data."""

    @abstractmethod
    async def get_versions(self) -> List[str]:
        """Known catalog versions, newest first."""

    @abstractmethod
    async def get_champion_data(self, version: str, locale: str) -> Dict[str, Any]:
        """Raw localized ``champion.json`` for a version."""

    @abstractmethod
    def champion_icon_url(self, version: str, image_file: str) -> str:
        """Square icon URL for a champion image file."""
