"""JSON document repository for the tracker state."""
import asyncio
import json
import logging
import os
import shutil
import tempfile
from contextlib import AbstractAsyncContextManager
from pathlib import Path
from typing import Optional

from domain.entities import TrackerState
from domain.interfaces import IStateRepository

logger = logging.getLogger(__name__)


class JsonStateRepository(IStateRepository):
    """Stores the whole :class:`TrackerState` as one JSON file.

    A missing document is provisioned from ``seed_path`` when that exists,
    otherwise an empty state is written. Saves go to a temp file in the
    same directory and are moved into place with ``os.replace``, so a
    crash never leaves a half-written document behind.
    """

    def __init__(self, path: Path, seed_path: Optional[Path] = None):
        """
        Initialize repository.

        Args:
            path: Location of the state document
            seed_path: Optional document copied into place on first load
        """
        self.path = Path(path)
        self.seed_path = Path(seed_path) if seed_path else None
        self._lock = asyncio.Lock()

    def lock(self) -> AbstractAsyncContextManager:
        return self._lock

    async def load(self) -> TrackerState:
        return await asyncio.to_thread(self._load_sync)

    async def save(self, state: TrackerState) -> None:
        await asyncio.to_thread(self._save_sync, state.to_dict())

    def _provision(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if self.seed_path and self.seed_path.exists() and self.seed_path != self.path:
            shutil.copyfile(self.seed_path, self.path)
            logger.info(f"State document provisioned from seed {self.seed_path}")
        else:
            self._save_sync(TrackerState().to_dict())
            logger.info(f"Empty state document created at {self.path}")

    def _load_sync(self) -> TrackerState:
        if not self.path.exists():
            self._provision()
        with open(self.path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
        return TrackerState.from_dict(data)

    def _save_sync(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh, ensure_ascii=False, indent=2)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, self.path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
        logger.debug(f"State document saved to {self.path}")
