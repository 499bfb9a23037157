"""Upstream (Tank01) record shapes.

The schedule endpoints are inconsistent between leagues and sometimes between
days, so every field that is not needed to build a Game is optional. Numeric
values are accepted wherever the API usually sends strings.
"""

from pydantic import BaseModel, ConfigDict, Field


class UpstreamModel(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)


class GameRecord(UpstreamModel):
    """One entry of a getMLBGamesForDate / getNBAGamesForDate body."""

    gameID: str
    home: str
    away: str
    gameDate: str | None = None
    gameTime: str | None = None  # "7:10p", MLB only
    gameTime_epoch: str | None = None
    gameType: str | None = None
    teamIDHome: str | None = None
    teamIDAway: str | None = None


class ScheduleEnvelope(UpstreamModel):
    statusCode: int
    body: list[GameRecord]


class MLBTeamLine(UpstreamModel):
    R: str = "0"
    H: str | None = None
    E: str | None = None
    team: str | None = None
    scoresByInning: dict[str, str] = Field(default_factory=dict)


class MLBLineScoreTotals(UpstreamModel):
    home: MLBTeamLine
    away: MLBTeamLine


class MLBLineScore(UpstreamModel):
    """Body of getMLBLineScore."""

    gameID: str
    home: str
    away: str
    gameStatus: str = ""
    currentInning: str | None = None
    lineScore: MLBLineScoreTotals


class NBAQuarterLine(UpstreamModel):
    Q1: str | None = None
    Q2: str | None = None
    Q3: str | None = None
    Q4: str | None = None
    totalPts: str | None = None


class NBABoxScore(UpstreamModel):
    """Body of getNBABoxScore. lineScore is keyed by team abbreviation."""

    gameID: str
    home: str
    away: str
    gameStatus: str = ""
    gameClock: str | None = None
    homePts: str = "0"
    awayPts: str = "0"
    lineScore: dict[str, NBAQuarterLine] = Field(default_factory=dict)


class MLBLineScoreEnvelope(UpstreamModel):
    statusCode: int | None = None
    body: MLBLineScore


class NBABoxScoreEnvelope(UpstreamModel):
    statusCode: int | None = None
    body: NBABoxScore
