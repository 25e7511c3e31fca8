"""Riot Games API client."""
from __future__ import annotations

import asyncio
import logging
import random
import time
from typing import Any, Awaitable, Callable, Dict, List, Optional
from urllib.parse import quote, urlencode

import httpx

from config import settings
from domain.enums import Region
from domain.errors import RateLimitExceeded, RemoteRequestFailed
from domain.interfaces import ICatalogSource, IPlayerDataSource
from .rate_limiter import EndpointRateLimiter
from .retry_policy import RateLimitRetryPolicy

logger = logging.getLogger(__name__)

_RIOT_HOST_SUFFIX = ".api.riotgames.com"


class RiotAPIClient(IPlayerDataSource, ICatalogSource):
    """Asynchronous Riot API + Data Dragon client.

    Every outbound call goes through :meth:`call`, the only place that
    knows about 429 backoff. Use as ``async with RiotAPIClient(key) as api``.
    """

    def __init__(
        self,
        api_key: str,
        *,
        retry_policy: Optional[RateLimitRetryPolicy] = None,
        rate_limiter: Optional[EndpointRateLimiter] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
        rng: Optional[random.Random] = None,
        account_route: Optional[str] = None,
        ddragon_base_url: Optional[str] = None,
    ):
        self.api_key = api_key
        self.session: Optional[httpx.AsyncClient] = None
        self.timeout = settings.REQUEST_TIMEOUT
        self.retry = retry_policy or RateLimitRetryPolicy.from_settings()
        self.last_status_code: Optional[int] = None
        self.account_route = account_route or settings.ACCOUNT_ROUTE
        self.ddragon_base_url = (ddragon_base_url or settings.DDRAGON_BASE_URL).rstrip("/")
        self._transport = transport
        self._sleep = sleep
        self._clock = clock
        self._rng = rng or random.Random()

        if rate_limiter is None:
            rate_limiter = EndpointRateLimiter()
            rate_limiter.set_default_limiter(
                requests_per_1_sec=settings.RATE_LIMIT_PER_1_SEC,
                requests_per_2_min=settings.RATE_LIMIT_PER_2_MIN,
            )
            self._setup_endpoint_limiters(rate_limiter)
        self.rate_limiter = rate_limiter

    @staticmethod
    def _setup_endpoint_limiters(limiter: EndpointRateLimiter) -> None:
        limiter.add_endpoint_limiter(
            "match",
            requests_per_1_sec=settings.MATCH_RATE_LIMIT_PER_1_SEC,
            requests_per_2_min=settings.MATCH_RATE_LIMIT_PER_2_MIN,
        )
        limiter.add_endpoint_limiter(
            "league",
            requests_per_1_sec=settings.LEAGUE_RATE_LIMIT_PER_1_SEC,
            requests_per_2_min=settings.LEAGUE_RATE_LIMIT_PER_2_MIN,
        )
        limiter.add_endpoint_limiter(
            "account",
            requests_per_1_sec=settings.ACCOUNT_RATE_LIMIT_PER_1_SEC,
            requests_per_2_min=settings.ACCOUNT_RATE_LIMIT_PER_2_MIN,
        )

    async def __aenter__(self) -> "RiotAPIClient":
        self._ensure_session()
        return self

    async def __aexit__(self, *_) -> None:
        await self.aclose()

    def _ensure_session(self) -> httpx.AsyncClient:
        if self.session is None:
            self.session = httpx.AsyncClient(timeout=self.timeout, transport=self._transport)
        return self.session

    async def aclose(self) -> None:
        if self.session:
            await self.session.aclose()
            self.session = None

    def _headers_for(self, url: str) -> Dict[str, str]:
        # the token is only for Riot's API hosts, never for Data Dragon
        if httpx.URL(url).host.endswith(_RIOT_HOST_SUFFIX):
            return {"X-Riot-Token": self.api_key}
        return {}

    # ── Remote access gate ─────────────────────────────────────────────

    async def call(self, url: str, endpoint_type: str = "default") -> Any:
        """GET ``url`` and return the decoded JSON body.

        429 → sleep ``Retry-After`` (or 0.5–1 s) and retry, at most
        ``max_retries`` times and never past the call deadline, then
        :class:`RateLimitExceeded`. Any other non-2xx response or a
        transport failure raises :class:`RemoteRequestFailed` immediately.
        """
        session = self._ensure_session()
        deadline = self._clock() + self.retry.deadline_s
        attempt = 0

        while True:
            attempt += 1
            if self.rate_limiter is not None:
                await self.rate_limiter.acquire(endpoint_type)

            try:
                response = await session.get(url, headers=self._headers_for(url))
            except httpx.TimeoutException as exc:
                raise RemoteRequestFailed(None, f"timeout: {exc}", url) from exc
            except httpx.HTTPError as exc:
                raise RemoteRequestFailed(None, f"network error: {exc}", url) from exc

            self.last_status_code = response.status_code

            if response.is_success:
                try:
                    return response.json()
                except ValueError as exc:
                    raise RemoteRequestFailed(response.status_code, "invalid JSON body", url) from exc

            if response.status_code == 429:
                if attempt > self.retry.max_retries:
                    raise RateLimitExceeded(url, attempt)
                wait = self.retry.backoff_seconds(response.headers.get("Retry-After"), self._rng)
                if self._clock() + wait > deadline:
                    raise RateLimitExceeded(url, attempt, reason="deadline")
                logger.warning(f"429 rate-limited — waiting {wait:.2f}s (attempt {attempt})")
                await self._sleep(wait)
                continue

            if response.status_code == 401:
                logger.error("401 Unauthorized — check RIOT_API_KEY")
            raise RemoteRequestFailed(response.status_code, response.text, url)

    def _platform_url(self, region: Region) -> str:
        return f"https://{region.platform_route}{_RIOT_HOST_SUFFIX}"

    def _regional_url(self, region: Region) -> str:
        return f"https://{region.regional_route}{_RIOT_HOST_SUFFIX}"

    # ── Account API ────────────────────────────────────────────────────

    async def resolve_identity(self, game_name: str, tag_line: str) -> str:
        url = (
            f"https://{self.account_route}{_RIOT_HOST_SUFFIX}/riot/account/v1/accounts/by-riot-id/"
            f"{quote(game_name, safe='')}/{quote(tag_line, safe='')}"
        )
        account = await self.call(url, "account")
        puuid = account.get("puuid") if isinstance(account, dict) else None
        if not puuid:
            raise RemoteRequestFailed(self.last_status_code, "account response without puuid", url)
        return puuid

    # ── League API ─────────────────────────────────────────────────────

    async def get_rank_entries(self, puuid: str, region: Region) -> List[Dict[str, Any]]:
        url = f"{self._platform_url(region)}/lol/league/v4/entries/by-puuid/{quote(puuid, safe='')}"
        result = await self.call(url, "league")
        return result if isinstance(result, list) else []

    # ── Match API ──────────────────────────────────────────────────────

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
        params: Dict[str, Any] = {}
        if start_time is not None:
            params["startTime"] = start_time
        if end_time is not None:
            params["endTime"] = end_time
        params["start"] = start
        params["count"] = min(count, 100)
        if queue_id is not None:
            params["queue"] = queue_id
        url = (
            f"{self._regional_url(region)}/lol/match/v5/matches/by-puuid/"
            f"{quote(puuid, safe='')}/ids?{urlencode(params)}"
        )
        result = await self.call(url, "match")
        return result if isinstance(result, list) else []

    async def get_match_detail(self, region: Region, match_id: str) -> Dict[str, Any]:
        url = f"{self._regional_url(region)}/lol/match/v5/matches/{quote(match_id, safe='')}"
        result = await self.call(url, "match")
        return result if isinstance(result, dict) else {}

    # ── Champion mastery API ───────────────────────────────────────────

    async def get_top_mastery(self, puuid: str, region: Region, count: int = 5) -> List[Dict[str, Any]]:
        url = (
            f"{self._platform_url(region)}/lol/champion-mastery/v4/champion-masteries/by-puuid/"
            f"{quote(puuid, safe='')}/top?{urlencode({'count': count})}"
        )
        result = await self.call(url)
        return result if isinstance(result, list) else []

    # ── Data Dragon ────────────────────────────────────────────────────

    async def get_versions(self) -> List[str]:
        result = await self.call(f"{self.ddragon_base_url}/api/versions.json", "ddragon")
        return [str(v) for v in result] if isinstance(result, list) else []

    async def get_champion_data(self, version: str, locale: str) -> Dict[str, Any]:
        url = f"{self.ddragon_base_url}/cdn/{version}/data/{locale}/champion.json"
        result = await self.call(url, "ddragon")
        return result if isinstance(result, dict) else {}

    def champion_icon_url(self, version: str, image_file: str) -> str:
        return f"{self.ddragon_base_url}/cdn/{version}/img/champion/{image_file}"
