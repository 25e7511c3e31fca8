"""Time-bounded cache of the static champion catalog."""
import logging
import time
import unicodedata
from typing import Any, Callable, Dict, List, Optional

from config import settings
from domain.entities import Catalog, ChampionInfo
from domain.errors import RemoteRequestFailed
from domain.interfaces import ICatalogSource

logger = logging.getLogger(__name__)


def collation_key(name: str) -> str:
    """Accent-stripped, case-folded sort key ("Nunu & Willump" < "Ölfass")."""
    decomposed = unicodedata.normalize("NFKD", name)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.casefold()


class StaticCatalogCache:
    """Holds one localized catalog and refreshes it after ``ttl_s`` seconds.

    A request for another locale than the cached one refreshes as well.
    Concurrent refreshes are tolerated; the last one to finish wins.
    """

    def __init__(
        self,
        source: ICatalogSource,
        *,
        ttl_s: Optional[int] = None,
        default_locale: Optional[str] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.source = source
        self.ttl_s = settings.CATALOG_TTL_S if ttl_s is None else ttl_s
        self.default_locale = default_locale or settings.CATALOG_LOCALE
        self._clock = clock
        self._catalog: Optional[Catalog] = None

    def peek(self) -> Optional[Catalog]:
        return self._catalog

    def _is_fresh(self, catalog: Optional[Catalog], locale: str) -> bool:
        return (
            catalog is not None
            and catalog.locale == locale
            and self._clock() - catalog.fetched_at < self.ttl_s
        )

    async def get_catalog(self, locale: Optional[str] = None) -> Catalog:
        locale = locale or self.default_locale
        cached = self._catalog
        if self._is_fresh(cached, locale):
            return cached

        catalog = await self._fetch(locale)
        self._catalog = catalog
        logger.info(f"Champion catalog {catalog.version} ({locale}) loaded: {len(catalog.champions)} champions")
        return catalog

    async def _fetch(self, locale: str) -> Catalog:
        versions = await self.source.get_versions()
        if not versions:
            raise RemoteRequestFailed(200, "empty catalog version list")
        version = versions[0]

        raw = await self.source.get_champion_data(version, locale)
        champions = self._normalize(version, raw.get("data") or {})
        return Catalog(version=version, locale=locale, champions=champions, fetched_at=self._clock())

    def _normalize(self, version: str, data: Dict[str, Any]) -> List[ChampionInfo]:
        champions: List[ChampionInfo] = []
        for entry in data.values():
            try:
                key = int(entry["key"])
            except (KeyError, TypeError, ValueError):
                logger.warning(f"Skipping catalog entry without numeric key: {entry.get('id')!r}")
                continue
            image_file = (entry.get("image") or {}).get("full") or f"{entry['id']}.png"
            champions.append(
                ChampionInfo(
                    id=entry["id"],
                    key=key,
                    name=entry.get("name") or entry["id"],
                    title=entry.get("title", ""),
                    icon=self.source.champion_icon_url(version, image_file),
                )
            )
        champions.sort(key=lambda c: collation_key(c.name))
        return champions
