"""Team logo lookup with an in-memory cache.

Logos live on disk as {asset_root}/{MLB|NBA}/{ABBR}.png. The cache is shared
by every caller in the process, so reads and writes go through a lock.
"""

import logging
import threading
from pathlib import Path

from hitrivals.models.game import League
from hitrivals.models.team import TEAM_NAMES

logger = logging.getLogger(__name__)


class TeamLogoCache:
    """Thread-safe cache of logo bytes keyed by (league, abbreviation)."""

    def __init__(self, asset_root: Path) -> None:
        self.asset_root = Path(asset_root)
        self._cache: dict[tuple[League, str], bytes] = {}
        self._lock = threading.Lock()

    def logo_path(self, abbrev: str, league: League) -> Path:
        return self.asset_root / league.value.upper() / f"{abbrev}.png"

    def _load(self, abbrev: str, league: League) -> bytes | None:
        if not abbrev:
            return None
        path = self.logo_path(abbrev, league)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.warning("Unreadable logo %s: %s", path, e)
            return None

    def logo_for_team(self, abbrev: str, league: League) -> bytes | None:
        """Return the logo bytes for a team, or None if there is no asset."""
        key = (league, abbrev)
        with self._lock:
            cached = self._cache.get(key)
        if cached is not None:
            return cached

        logo = self._load(abbrev, league)
        if logo is not None:
            with self._lock:
                # Another thread may have loaded it meanwhile; keep the first copy
                logo = self._cache.setdefault(key, logo)
        return logo

    def verify(self, league: League) -> list[str]:
        """List the league's abbreviations that have a logo on disk."""
        found = [abbrev for abbrev in TEAM_NAMES[league] if self._load(abbrev, league) is not None]
        logger.info("Found %d/%d %s logos", len(found), len(TEAM_NAMES[league]), league.value.upper())
        return found

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)
