"""Caller-facing schedule API: fetch, normalize, fall back to the mock slate.

Nothing here raises for a schedule load. When real data can't be produced
the caller gets the mock slate with used_fallback set, and decides whether
to show a "using sample data" notice.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import date, datetime, tzinfo

from hitrivals.config import Settings
from hitrivals.extract.mock import get_mock_games
from hitrivals.extract.tank01 import Tank01Client
from hitrivals.models.game import Game, GameStatus, League
from hitrivals.transform.normalize import normalize_games

logger = logging.getLogger(__name__)

REFRESHABLE_STATUSES = {GameStatus.SCHEDULED, GameStatus.LIVE}


@dataclass(frozen=True)
class ScheduleResult:
    """One league's slate for one date."""

    league: League
    game_date: date
    games: list[Game] = field(default_factory=list)
    used_fallback: bool = False


class ScheduleService:
    """Schedule retrieval for both leagues on top of a Tank01Client."""

    def __init__(
        self,
        client: Tank01Client,
        settings: Settings | None = None,
        tz: tzinfo | None = None,
    ) -> None:
        self.client = client
        self.settings = settings or Settings()
        self.tz = tz or self.settings.tz

    def today(self) -> date:
        return datetime.now(self.tz).date()

    def get_mock_games(self, league: League) -> list[Game]:
        return get_mock_games(league, today=self.today(), tz=self.tz)

    async def fetch_todays_schedule(self, league: League) -> list[Game] | None:
        return await self.fetch_schedule_for_date(self.today(), league)

    async def fetch_schedule_for_date(self, game_date: date, league: League) -> list[Game] | None:
        """Fetch and normalize a league's games for a date.

        Returns:
            The games in upstream order, or None when no data could be
            fetched. In mock-data mode the mock slate is returned without
            touching the network.
        """
        if self.settings.use_mock_data:
            logger.info("Mock data mode on, serving sample %s slate", league.value.upper())
            return self.get_mock_games(league)

        records = await self.client.fetch_schedule(game_date, league)
        if records is None:
            return None
        return normalize_games(records, league, self.tz, game_date)

    async def load_schedule(self, game_date: date, league: League) -> ScheduleResult:
        """Fetch a slate, substituting the mock slate when there is no data."""
        try:
            games = await self.fetch_schedule_for_date(game_date, league)
        except Exception:
            logger.exception("Unexpected error loading %s schedule for %s", league.value.upper(), game_date)
            games = None

        if games:
            return ScheduleResult(league=league, game_date=game_date, games=games)

        logger.warning(
            "No %s games for %s (%s), using sample data",
            league.value.upper(),
            game_date,
            "fetch failed" if games is None else "empty schedule",
        )
        return ScheduleResult(
            league=league,
            game_date=game_date,
            games=self.get_mock_games(league),
            used_fallback=True,
        )

    async def load_all(self, game_date: date) -> dict[League, ScheduleResult]:
        """Load every league concurrently. Each result stands on its own."""
        results = await asyncio.gather(*(self.load_schedule(game_date, league) for league in League))
        return {result.league: result for result in results}

    async def update_live_scores(self, games: list[Game]) -> list[Game]:
        """Refresh scores for scheduled and live games, keeping list order.

        Games that are final, or whose refresh fails, come back unchanged.
        """

        async def refresh(game: Game) -> Game:
            if game.status not in REFRESHABLE_STATUSES:
                return game
            try:
                updated = await self.client.fetch_live_score(game)
            except Exception:
                logger.exception("Unexpected error refreshing live score for %s", game.composite_key)
                return game
            return updated if updated is not None else game

        return list(await asyncio.gather(*(refresh(g) for g in games)))


class ScheduleLoader:
    """Tracks the in-flight load per league for a date picker.

    A new request for a league cancels the one still running, and the
    superseded call returns None instead of a result.
    """

    def __init__(self, service: ScheduleService) -> None:
        self.service = service
        self._pending: dict[League, asyncio.Task[ScheduleResult]] = {}

    async def request(self, game_date: date, league: League) -> ScheduleResult | None:
        previous = self._pending.get(league)
        if previous is not None and not previous.done():
            logger.info("Cancelling superseded %s schedule request", league.value.upper())
            previous.cancel()

        task = asyncio.create_task(self.service.load_schedule(game_date, league))
        self._pending[league] = task
        try:
            result = await task
        except asyncio.CancelledError:
            if task.cancelled() and self._pending.get(league) is not task:
                return None
            raise
        finally:
            if self._pending.get(league) is task:
                del self._pending[league]

        if self._pending.get(league, task) is not task:
            return None
        return result
