"""UTC timestamp helpers."""
from datetime import datetime, timezone
from typing import Optional

from config import settings


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def epoch_ms_to_iso(value: Optional[int]) -> str:
    if not value:
        return utc_now_iso()
    moment = datetime.fromtimestamp(int(value) / 1000.0, tz=timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def current_utc_year() -> int:
    return datetime.now(timezone.utc).year


def tracked_year(explicit: Optional[int] = None) -> int:
    """``explicit``, else ``TRACKED_YEAR``, else the current UTC year."""
    return explicit or settings.TRACKED_YEAR or current_utc_year()
