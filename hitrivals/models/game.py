from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum


class League(StrEnum):
    """Supported leagues. Each has its own upstream host and team table."""

    MLB = "mlb"
    NBA = "nba"


class GameStatus(StrEnum):
    SCHEDULED = "scheduled"
    LIVE = "live"
    FINAL = "final"

    @classmethod
    def from_upstream(cls, text: str | None) -> "GameStatus":
        """Map a free-form upstream status ("Live - In Progress", "Completed") to a status."""
        if not text:
            return cls.SCHEDULED
        lowered = text.strip().lower()
        if lowered in ("live", "final", "scheduled"):
            return cls(lowered)
        if "progress" in lowered or "live" in lowered:
            return cls.LIVE
        if "complete" in lowered or "final" in lowered:
            return cls.FINAL
        return cls.SCHEDULED


@dataclass(frozen=True)
class Game:
    """A single MLB or NBA game as shown to the user."""

    id: int
    home_team: str
    away_team: str
    home_team_abbr: str
    away_team_abbr: str
    start_time: datetime
    sport_type: League
    status: GameStatus = GameStatus.SCHEDULED
    user_vote: str | None = None
    # Upstream gameID as received; the date part is in US Eastern time
    game_key: str | None = None

    # Live-score fields, filled in by the live refresh only
    home_score: int | None = None
    away_score: int | None = None
    current_period: str | None = None  # inning for MLB, game clock/quarter for NBA
    home_score_by_period: dict[str, str] = field(default_factory=dict)
    away_score_by_period: dict[str, str] = field(default_factory=dict)

    @property
    def matchup(self) -> str:
        return f"{self.away_team_abbr} @ {self.home_team_abbr}"

    @property
    def is_final(self) -> bool:
        return self.status == GameStatus.FINAL

    @property
    def composite_key(self) -> str:
        """Upstream game key, e.g. '20250503_LAD@ATL'.

        Games built from a schedule record carry the key they arrived with.
        Others rebuild it from the local start date.
        """
        if self.game_key:
            return self.game_key
        return f"{self.start_time:%Y%m%d}_{self.away_team_abbr}@{self.home_team_abbr}"
