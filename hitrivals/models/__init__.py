from hitrivals.models.game import Game, GameStatus, League
from hitrivals.models.records import GameRecord, ScheduleEnvelope
from hitrivals.models.team import full_team_name

__all__ = ["Game", "GameRecord", "GameStatus", "League", "ScheduleEnvelope", "full_team_name"]
