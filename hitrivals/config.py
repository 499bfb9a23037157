"""Runtime configuration, read from environment variables.

TANK01_API_KEY          RapidAPI key sent with every request
TANK01_MLB_BASE_URL     override for the MLB host
TANK01_NBA_BASE_URL     override for the NBA host
HITRIVALS_USE_MOCK_DATA "true"/"1" skips the network and serves the mock slate
HITRIVALS_MAX_ATTEMPTS  attempt budget per schedule fetch (default 3)
HITRIVALS_TIMEOUT       per-request timeout in seconds (default 10)
HITRIVALS_TIMEZONE      IANA zone used for kickoff times (default: system zone)
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import tzinfo
from zoneinfo import ZoneInfo

from tzlocal import get_localzone

MLB_BASE_URL = "https://tank01-mlb-live-in-game-real-time-statistics.p.rapidapi.com"
NBA_BASE_URL = "https://tank01-fantasy-stats.p.rapidapi.com"

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_TIMEOUT_SECONDS = 10.0

_TRUTHY = {"1", "true", "yes", "on"}


def local_timezone() -> tzinfo:
    """Return the system's IANA zone, with its DST rules."""
    return get_localzone()


@dataclass(frozen=True)
class Settings:
    api_key: str = ""
    mlb_base_url: str = MLB_BASE_URL
    nba_base_url: str = NBA_BASE_URL
    use_mock_data: bool = False
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    timezone_name: str | None = None

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {self.max_attempts}")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")

    @property
    def tz(self) -> tzinfo:
        if self.timezone_name:
            return ZoneInfo(self.timezone_name)
        return local_timezone()

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if environ is None else environ
        return cls(
            api_key=env.get("TANK01_API_KEY", ""),
            mlb_base_url=env.get("TANK01_MLB_BASE_URL", MLB_BASE_URL),
            nba_base_url=env.get("TANK01_NBA_BASE_URL", NBA_BASE_URL),
            use_mock_data=env.get("HITRIVALS_USE_MOCK_DATA", "").strip().lower() in _TRUTHY,
            max_attempts=int(env.get("HITRIVALS_MAX_ATTEMPTS", DEFAULT_MAX_ATTEMPTS)),
            timeout=float(env.get("HITRIVALS_TIMEOUT", DEFAULT_TIMEOUT_SECONDS)),
            timezone_name=env.get("HITRIVALS_TIMEZONE") or None,
        )
