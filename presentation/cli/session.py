"""Builds the runtime a CLI command works against."""
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from config import settings
from application import TrackerRuntime
from infrastructure import JsonStateRepository, RiotAPIClient


@asynccontextmanager
async def tracker_session(*, require_api_key: bool = True, year: Optional[int] = None) -> AsyncIterator[TrackerRuntime]:
    """Open the Riot client and the state document for one command run."""
    if require_api_key:
        settings.validate()
    settings.create_directories()
    repository = JsonStateRepository(settings.STATE_PATH, settings.SEED_STATE_PATH)
    async with RiotAPIClient(settings.RIOT_API_KEY) as api:
        yield TrackerRuntime.build(api, api, repository, year=year)
