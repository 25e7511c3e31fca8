"""Region enumeration for League of Legends servers."""
from enum import Enum


class Region(Enum):
    """League of Legends platform servers.

    Provides:
    - platform_route: platform host (e.g., euw1) for league-v4 / mastery
    - regional_route: routing host for match-v5 (e.g., europe)
    """

    # Europe
    EUW1 = "euw1"  # Europe West
    EUN1 = "eun1"  # Europe Nordic & East
    TR1 = "tr1"    # Turkey
    RU = "ru"      # Russia
    ME1 = "me1"    # Middle East

    # Americas
    NA1 = "na1"    # North America
    BR1 = "br1"    # Brazil
    LA1 = "la1"    # Latin America North
    LA2 = "la2"    # Latin America South

    # Asia
    KR = "kr"      # Korea
    JP1 = "jp1"    # Japan

    # SEA & Oceania
    OC1 = "oc1"    # Oceania
    PH2 = "ph2"    # Philippines
    SG2 = "sg2"    # Singapore
    TH2 = "th2"    # Thailand
    TW2 = "tw2"    # Taiwan
    VN2 = "vn2"    # Vietnam

    @property
    def platform_route(self) -> str:
        return self.value

    @property
    def regional_route(self) -> str:
        """Regional cluster serving match-v5 for this platform."""
        if self in (Region.EUW1, Region.EUN1, Region.TR1, Region.RU, Region.ME1):
            return "europe"
        if self in (Region.NA1, Region.BR1, Region.LA1, Region.LA2):
            return "americas"
        if self in (Region.KR, Region.JP1):
            return "asia"
        return "sea"

    @classmethod
    def from_platform(cls, platform: str) -> 'Region':
        """Resolve a stored platform code (case-insensitive)."""
        try:
            return cls(str(platform or "").strip().lower())
        except ValueError:
            raise ValueError(f"unknown platform: {platform!r}") from None
