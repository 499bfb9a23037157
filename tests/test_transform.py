"""Tests for the transform layer."""

import random
import string
from datetime import date, datetime, timedelta, timezone

from hitrivals.models.game import GameStatus, League
from hitrivals.models.records import GameRecord
from hitrivals.models.team import MLB_TEAM_NAMES, NBA_TEAM_NAMES, full_team_name
from hitrivals.transform.clean import format_api_date, parse_api_date, parse_meridiem_time
from hitrivals.transform.normalize import (
    NBA_ID_OFFSET,
    derive_start_time,
    normalize_games,
    stable_hash,
    synthesize_game_id,
)

UTC = timezone.utc
EASTERN = timezone(timedelta(hours=-4))
GAME_DATE = date(2025, 5, 3)


def _make_record(
    game_id: str = "20250503_LAD@ATL",
    home: str = "ATL",
    away: str = "LAD",
    game_date: str | None = "20250503",
    game_time: str | None = "7:10p",
    epoch: str | None = None,
) -> GameRecord:
    """Create a test GameRecord."""
    return GameRecord(
        gameID=game_id,
        home=home,
        away=away,
        gameDate=game_date,
        gameTime=game_time,
        gameTime_epoch=epoch,
    )


def _random_key(rng: random.Random) -> str:
    away = "".join(rng.choices(string.ascii_uppercase, k=3))
    home = "".join(rng.choices(string.ascii_uppercase, k=3))
    return f"20250503_{away}@{home}"


class TestParseMeridiemTime:
    def test_pm(self) -> None:
        assert parse_meridiem_time("7:10p") == (19, 10)

    def test_am(self) -> None:
        assert parse_meridiem_time("10:15a") == (10, 15)

    def test_noon_stays_twelve(self) -> None:
        assert parse_meridiem_time("12:05p") == (12, 5)

    def test_midnight(self) -> None:
        assert parse_meridiem_time("12:05a") == (0, 5)

    def test_full_suffix(self) -> None:
        assert parse_meridiem_time("1:05 PM") == (13, 5)

    def test_unparseable_defaults_to_zero(self) -> None:
        assert parse_meridiem_time("TBD") == (0, 0)
        assert parse_meridiem_time("") == (0, 0)
        assert parse_meridiem_time(None) == (0, 0)


class TestApiDates:
    def test_parse(self) -> None:
        assert parse_api_date("20250503") == GAME_DATE

    def test_parse_invalid(self) -> None:
        assert parse_api_date("2025-05-03") is None
        assert parse_api_date("20251340") is None
        assert parse_api_date(None) is None

    def test_format(self) -> None:
        assert format_api_date(date(2025, 1, 9)) == "20250109"


class TestTeamNames:
    def test_tables_are_complete(self) -> None:
        assert len(MLB_TEAM_NAMES) == 30
        assert len(NBA_TEAM_NAMES) == 30

    def test_same_abbrev_differs_by_league(self) -> None:
        assert full_team_name("BOS", League.MLB) == "Boston Red Sox"
        assert full_team_name("BOS", League.NBA) == "Boston Celtics"

    def test_resolution_is_idempotent(self) -> None:
        assert full_team_name("NYY", League.MLB) == full_team_name("NYY", League.MLB)

    def test_unknown_abbrev_passes_through(self) -> None:
        assert full_team_name("XYZ", League.MLB) == "XYZ"
        assert full_team_name("XYZ", League.NBA) == "XYZ"


class TestSynthesizeGameId:
    def test_date_digits_fill_upper_part(self) -> None:
        game_id = synthesize_game_id("20250503_LAD@ATL", League.MLB)
        assert game_id // 10_000 == 503
        assert game_id % 10_000 == stable_hash("LAD@ATL") % 10_000

    def test_stable_for_same_key(self) -> None:
        first = synthesize_game_id("20250503_LAD@ATL", League.MLB)
        second = synthesize_game_id("20250503_LAD@ATL", League.MLB)
        assert first == second

    def test_nba_offset(self) -> None:
        mlb = synthesize_game_id("20250503_BOS@NYK", League.MLB)
        nba = synthesize_game_id("20250503_BOS@NYK", League.NBA)
        assert nba - mlb == NBA_ID_OFFSET

    def test_key_without_underscore(self) -> None:
        game_id = synthesize_game_id("LADATL", League.MLB)
        assert 0 <= game_id < 1_000_000

    def test_non_numeric_date_falls_back_to_bounded_random(self) -> None:
        game_id = synthesize_game_id("abcd_LAD@ATL", League.MLB)
        teams_hash = stable_hash("LAD@ATL") % 10_000
        assert teams_hash + 1000 <= game_id <= teams_hash + 9999

    def test_leagues_disjoint_for_same_day(self) -> None:
        # Best effort only: ids from different days can still overlap
        rng = random.Random(20250503)
        mlb_ids = {synthesize_game_id(_random_key(rng), League.MLB) for _ in range(10_000)}
        nba_ids = {synthesize_game_id(_random_key(rng), League.NBA) for _ in range(10_000)}
        assert mlb_ids.isdisjoint(nba_ids)


class TestDeriveStartTime:
    def test_epoch_wins_over_date_and_time(self) -> None:
        # 2025-05-03 23:10 UTC, while the strings say 1:05 PM
        record = _make_record(game_time="1:05p", epoch="1746313800")
        result = derive_start_time(record, League.MLB, UTC, GAME_DATE)
        assert result == datetime(2025, 5, 3, 23, 10, tzinfo=UTC)

    def test_fractional_epoch(self) -> None:
        record = _make_record(epoch="1746313800.0")
        result = derive_start_time(record, League.MLB, UTC, GAME_DATE)
        assert result == datetime(2025, 5, 3, 23, 10, tzinfo=UTC)

    def test_bad_epoch_falls_back_to_strings(self) -> None:
        record = _make_record(game_time="7:10p", epoch="soon")
        result = derive_start_time(record, League.MLB, EASTERN, GAME_DATE)
        assert result == datetime(2025, 5, 3, 19, 10, tzinfo=EASTERN)

    def test_mlb_date_and_time(self) -> None:
        record = _make_record(game_date="20250504", game_time="1:35p")
        result = derive_start_time(record, League.MLB, EASTERN, GAME_DATE)
        assert result == datetime(2025, 5, 4, 13, 35, tzinfo=EASTERN)

    def test_mlb_bad_time_is_midnight(self) -> None:
        record = _make_record(game_time="TBD")
        result = derive_start_time(record, League.MLB, EASTERN, GAME_DATE)
        assert result == datetime(2025, 5, 3, 0, 0, tzinfo=EASTERN)

    def test_nba_defaults_to_seven_thirty_on_game_date(self) -> None:
        record = _make_record(game_date="20250110", game_time=None)
        result = derive_start_time(record, League.NBA, EASTERN, GAME_DATE)
        assert result == datetime(2025, 1, 10, 19, 30, tzinfo=EASTERN)

    def test_missing_date_uses_fallback(self) -> None:
        record = _make_record(game_date=None, game_time=None)
        result = derive_start_time(record, League.NBA, EASTERN, GAME_DATE)
        assert result == datetime(2025, 5, 3, 19, 30, tzinfo=EASTERN)


class TestNormalizeGames:
    def test_maps_fields_and_keeps_order(self) -> None:
        records = [
            _make_record("20250503_LAD@ATL", home="ATL", away="LAD"),
            _make_record("20250503_NYY@BOS", home="BOS", away="NYY"),
        ]
        games = normalize_games(records, League.MLB, EASTERN, GAME_DATE)

        assert [g.matchup for g in games] == ["LAD @ ATL", "NYY @ BOS"]
        assert games[0].home_team == "Atlanta Braves"
        assert games[0].away_team == "Los Angeles Dodgers"
        assert games[0].home_team_abbr == "ATL"
        assert games[0].sport_type == League.MLB
        assert all(g.status == GameStatus.SCHEDULED for g in games)
        assert all(g.user_vote is None for g in games)

    def test_composite_key_round_trips(self) -> None:
        games = normalize_games([_make_record()], League.MLB, EASTERN, GAME_DATE)
        assert games[0].composite_key == "20250503_LAD@ATL"

    def test_composite_key_ignores_local_date(self) -> None:
        record = _make_record(epoch="1746331800")  # 22:10 EDT, 03:10 the next day in London
        games = normalize_games([record], League.MLB, timezone(timedelta(hours=1)), GAME_DATE)
        assert games[0].start_time.date() == date(2025, 5, 4)
        assert games[0].game_key == "20250503_LAD@ATL"
        assert games[0].composite_key == "20250503_LAD@ATL"

    def test_empty(self) -> None:
        assert normalize_games([], League.NBA, EASTERN, GAME_DATE) == []
