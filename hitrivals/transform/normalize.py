"""Turn upstream schedule records into Game objects."""

import logging
import random
import zlib
from dataclasses import replace
from datetime import date, datetime, time, tzinfo

from hitrivals.models.game import Game, GameStatus, League
from hitrivals.models.records import GameRecord, MLBLineScore, NBABoxScore, NBAQuarterLine
from hitrivals.models.team import full_team_name
from hitrivals.transform.clean import parse_api_date, parse_meridiem_time

logger = logging.getLogger(__name__)

# NBA ids live above this so they never meet MLB ids from the same day
NBA_ID_OFFSET = 5_000_000
TEAMS_HASH_SPACE = 10_000
BARE_KEY_HASH_SPACE = 1_000_000

# The NBA schedule carries no tip-off time
NBA_DEFAULT_START = time(19, 30)


def stable_hash(text: str) -> int:
    """CRC-32 of the text. Same value in every process, unlike hash()."""
    return zlib.crc32(text.encode("utf-8"))


def synthesize_game_id(composite_key: str, league: League) -> int:
    """Build an integer id from an upstream key like '20250503_LAD@ATL'.

    The last four digits of the date part (MMDD) fill the upper digits and a
    hash of the teams part fills the lower four. NBA ids are shifted by
    NBA_ID_OFFSET. This is best effort: two matchups on the same day can
    still share a teams hash.
    """
    offset = NBA_ID_OFFSET if league == League.NBA else 0

    date_part, sep, teams_part = composite_key.partition("_")
    if not sep:
        return stable_hash(composite_key) % BARE_KEY_HASH_SPACE + offset

    teams_hash = stable_hash(teams_part) % TEAMS_HASH_SPACE
    try:
        date_digits = int(date_part[-4:])
    except ValueError:
        logger.warning("Game key %r has no numeric date part, using a random id", composite_key)
        return teams_hash + random.randint(1000, 9999) + offset

    return date_digits * TEAMS_HASH_SPACE + teams_hash + offset


def derive_start_time(
    record: GameRecord,
    league: League,
    tz: tzinfo,
    fallback_date: date,
) -> datetime:
    """Pick the kickoff time for a record.

    Precedence: the epoch field when it is numeric, then the date/time strings
    (MLB) or 19:30 local on the game date (NBA). fallback_date stands in when
    the record's own date is missing or malformed.
    """
    if record.gameTime_epoch:
        try:
            return datetime.fromtimestamp(float(record.gameTime_epoch), tz)
        except (ValueError, OverflowError, OSError):
            logger.debug("Ignoring bad epoch %r for %s", record.gameTime_epoch, record.gameID)

    game_date = parse_api_date(record.gameDate) or fallback_date
    if league == League.NBA:
        return datetime.combine(game_date, NBA_DEFAULT_START, tzinfo=tz)

    hour, minute = parse_meridiem_time(record.gameTime)
    return datetime.combine(game_date, time(hour, minute), tzinfo=tz)


def normalize_game(
    record: GameRecord,
    league: League,
    tz: tzinfo,
    fallback_date: date,
) -> Game:
    return Game(
        id=synthesize_game_id(record.gameID, league),
        home_team=full_team_name(record.home, league),
        away_team=full_team_name(record.away, league),
        home_team_abbr=record.home,
        away_team_abbr=record.away,
        start_time=derive_start_time(record, league, tz, fallback_date),
        sport_type=league,
        status=GameStatus.SCHEDULED,
        game_key=record.gameID,
    )


def normalize_games(
    records: list[GameRecord],
    league: League,
    tz: tzinfo,
    fallback_date: date,
) -> list[Game]:
    """Normalize records into Games, keeping upstream order.

    Args:
        records: Decoded schedule records.
        league: League the records came from.
        tz: Zone kickoff times are expressed in.
        fallback_date: The requested date, used when a record lacks its own.

    Returns:
        One Game per record, all with status 'scheduled'.
    """
    games = [normalize_game(r, league, tz, fallback_date) for r in records]
    logger.info("Normalized %d %s games", len(games), league.value.upper())
    return games


def _score(value: str | None) -> int:
    try:
        return int(value) if value else 0
    except ValueError:
        return 0


def _quarters(line: NBAQuarterLine | None) -> dict[str, str]:
    if line is None:
        return {}
    return {
        "1": line.Q1 or "0",
        "2": line.Q2 or "0",
        "3": line.Q3 or "0",
        "4": line.Q4 or "0",
    }


def apply_live_score(game: Game, score: MLBLineScore | NBABoxScore) -> Game:
    """Copy live status and scores onto a game, keeping its id and start time."""
    if isinstance(score, MLBLineScore):
        return replace(
            game,
            status=GameStatus.from_upstream(score.gameStatus),
            home_score=_score(score.lineScore.home.R),
            away_score=_score(score.lineScore.away.R),
            current_period=score.currentInning,
            home_score_by_period=dict(score.lineScore.home.scoresByInning),
            away_score_by_period=dict(score.lineScore.away.scoresByInning),
        )

    return replace(
        game,
        status=GameStatus.from_upstream(score.gameStatus),
        home_score=_score(score.homePts),
        away_score=_score(score.awayPts),
        current_period=score.gameClock,
        home_score_by_period=_quarters(score.lineScore.get(score.home)),
        away_score_by_period=_quarters(score.lineScore.get(score.away)),
    )
