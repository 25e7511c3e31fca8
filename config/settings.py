"""Application settings and configuration."""
import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

ENV_PATH = Path(__file__).resolve().parent / '.env'
load_dotenv(dotenv_path=ENV_PATH)


def _int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


def _optional_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(name, '').strip().lower()
    if not raw:
        return default
    if raw in ('none', 'all', 'any'):
        return None
    try:
        return int(raw)
    except ValueError:
        return default


class Settings:
    """
    ─── REFRESH CYCLE BUDGETS ────────────────────────────────────────────
    A refresh walks the whole roster once. Every uncached match detail
    costs one unit of MATCH_DETAIL_BUDGET_PER_REFRESH; when it runs out the
    remaining match ids are parked on the aggregate and drained later by
    the catch-up pass. Rank lookups are not budgeted.

    Riot personal key hard limits: 20/s and 100/120s. The proactive
    limiter stays slightly below; 429s are still handled by the client.
    ──────────────────────────────────────────────────────────────────────
    """

    RIOT_API_KEY: str = os.getenv('RIOT_API_KEY', '')

    # ── Routing ────────────────────────────────────────────────────────────
    # account-v1 is served from any regional cluster
    ACCOUNT_ROUTE: str = os.getenv('ACCOUNT_ROUTE', 'europe')

    # ── Rate limits (per 1 second / per 2 minutes) ───────────────────────
    RATE_LIMIT_PER_1_SEC:          int = 18
    RATE_LIMIT_PER_2_MIN:          int = 90

    MATCH_RATE_LIMIT_PER_1_SEC:    int = 18
    MATCH_RATE_LIMIT_PER_2_MIN:    int = 90

    LEAGUE_RATE_LIMIT_PER_1_SEC:   int = 15
    LEAGUE_RATE_LIMIT_PER_2_MIN:   int = 75

    ACCOUNT_RATE_LIMIT_PER_1_SEC:  int = 15
    ACCOUNT_RATE_LIMIT_PER_2_MIN:  int = 75

    # ── HTTP ───────────────────────────────────────────────────────────────
    REQUEST_TIMEOUT:            int   = _int('REQUEST_TIMEOUT', 30)
    MAX_RETRIES:                int   = _int('MAX_RETRIES', 5)
    RATE_LIMIT_FALLBACK_MIN_MS: int   = 500
    RATE_LIMIT_FALLBACK_MAX_MS: int   = 1000
    # wall-clock ceiling for one call including all 429 backoffs
    REQUEST_DEADLINE_S:         float = float(_int('REQUEST_DEADLINE_S', 90))

    # ── Tracking ───────────────────────────────────────────────────────────
    # unset = current UTC year, resolved again every cycle
    TRACKED_YEAR:     Optional[int] = _optional_int('TRACKED_YEAR', None)
    TRACKED_QUEUE_ID: Optional[int] = _optional_int('TRACKED_QUEUE_ID', 420)
    RECENT_GAMES_COUNT: int         = _int('RECENT_GAMES_COUNT', 5)

    # ── Match details ──────────────────────────────────────────────────────
    MATCH_DETAIL_BUDGET_PER_REFRESH: int = _int('MATCH_DETAIL_BUDGET_PER_REFRESH', 20)
    # 0 = unlimited, bootstrap is an explicit offline pass
    BOOTSTRAP_DETAIL_BUDGET:         int = _int('BOOTSTRAP_DETAIL_BUDGET', 0)
    REMAKE_MAX_DURATION_SEC:         int = 300
    MATCH_PAGE_SIZE:                 int = 100
    DETAIL_WORKERS:                  int = _int('DETAIL_WORKERS', 3)

    # ── Static catalog (Data Dragon) ───────────────────────────────────────
    DDRAGON_BASE_URL: str = 'https://ddragon.leagueoflegends.com'
    CATALOG_TTL_S:    int = 24 * 60 * 60
    CATALOG_LOCALE:   str = os.getenv('CATALOG_LOCALE', 'de_DE')

    # ── Paths ──────────────────────────────────────────────────────────────
    BASE_DIR: Path = Path(__file__).resolve().parent.parent
    DATA_DIR: Path = Path(os.getenv('DATA_DIR', '') or (BASE_DIR / 'data'))
    STATE_PATH: Path = DATA_DIR / 'data.json'
    SEED_STATE_PATH: Path = BASE_DIR / 'data.json'
    LOG_DIR:  Path = DATA_DIR / 'logs'

    LOG_LEVEL: str = os.getenv('LOG_LEVEL', 'INFO')

    @classmethod
    def validate(cls) -> None:
        if not cls.RIOT_API_KEY:
            raise ValueError("RIOT_API_KEY must be set in config/.env")

    @classmethod
    def create_directories(cls) -> None:
        cls.DATA_DIR.mkdir(parents=True, exist_ok=True)
        cls.LOG_DIR.mkdir(parents=True, exist_ok=True)


settings = Settings()
