"""Fixed sample slate served when real schedule data isn't available."""

from datetime import date, datetime, time, tzinfo

from hitrivals.config import local_timezone
from hitrivals.models.game import Game, League
from hitrivals.models.team import full_team_name

# (id, away, home, kickoff)
MOCK_SLATES: dict[League, list[tuple[int, str, str, time]]] = {
    League.MLB: [
        (1, "BOS", "NYY", time(19, 5)),
        (2, "CHC", "STL", time(20, 15)),
        (3, "SF", "LAD", time(22, 10)),
    ],
    League.NBA: [
        (5_000_001, "BOS", "LAL", time(19, 30)),
        (5_000_002, "BKN", "GSW", time(20, 0)),
        (5_000_003, "CHI", "MIA", time(18, 30)),
    ],
}


def get_mock_games(
    league: League,
    today: date | None = None,
    tz: tzinfo | None = None,
) -> list[Game]:
    """Return the sample slate for a league, dated today."""
    tz = tz or local_timezone()
    today = today or datetime.now(tz).date()
    return [
        Game(
            id=game_id,
            home_team=full_team_name(home, league),
            away_team=full_team_name(away, league),
            home_team_abbr=home,
            away_team_abbr=away,
            start_time=datetime.combine(today, kickoff, tzinfo=tz),
            sport_type=league,
        )
        for game_id, away, home, kickoff in MOCK_SLATES[league]
    ]
