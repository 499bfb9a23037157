"""Tank01 (RapidAPI) client for MLB and NBA schedules and live scores.

Both leagues live on separate RapidAPI hosts. Every request carries the
x-rapidapi-key / x-rapidapi-host header pair.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import date
from urllib.parse import urlparse

import httpx

from hitrivals.config import DEFAULT_MAX_ATTEMPTS, DEFAULT_TIMEOUT_SECONDS, MLB_BASE_URL, NBA_BASE_URL, Settings
from hitrivals.extract.decode import decode_live_score, decode_schedule
from hitrivals.models.game import Game, League
from hitrivals.models.records import GameRecord
from hitrivals.transform.clean import format_api_date
from hitrivals.transform.normalize import apply_live_score

logger = logging.getLogger(__name__)

SCHEDULE_ENDPOINTS = {
    League.MLB: "/getMLBGamesForDate",
    League.NBA: "/getNBAGamesForDate",
}

LIVE_SCORE_ENDPOINTS = {
    League.MLB: "/getMLBLineScore",
    League.NBA: "/getNBABoxScore",
}

# Delay before the k-th retry is RETRY_BACKOFF_SECONDS * 2**k
RETRY_BACKOFF_SECONDS = 1.0

Sleep = Callable[[float], Awaitable[None]]


class Tank01Client:
    """Async client for the Tank01 MLB and NBA APIs."""

    def __init__(
        self,
        api_key: str = "",
        mlb_base_url: str = MLB_BASE_URL,
        nba_base_url: str = NBA_BASE_URL,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        backoff_seconds: float = RETRY_BACKOFF_SECONDS,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")
        self.api_key = api_key
        self.base_urls = {
            League.MLB: mlb_base_url.rstrip("/"),
            League.NBA: nba_base_url.rstrip("/"),
        }
        self.max_attempts = max_attempts
        self.backoff_seconds = backoff_seconds
        self._sleep = sleep
        self.client = httpx.AsyncClient(
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: object) -> "Tank01Client":
        return cls(
            api_key=settings.api_key,
            mlb_base_url=settings.mlb_base_url,
            nba_base_url=settings.nba_base_url,
            max_attempts=settings.max_attempts,
            timeout=settings.timeout,
            **kwargs,  # type: ignore[arg-type]
        )

    async def close(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> "Tank01Client":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()

    def _headers(self, league: League) -> dict[str, str]:
        return {
            "x-rapidapi-key": self.api_key,
            "x-rapidapi-host": urlparse(self.base_urls[league]).netloc,
        }

    async def _get(self, league: League, endpoint: str, params: dict[str, str]) -> bytes | None:
        """Make one GET request. Returns the body, or None on any failure."""
        url = self.base_urls[league] + endpoint
        try:
            response = await self.client.get(url, params=params, headers=self._headers(league))
            response.raise_for_status()
        except (httpx.HTTPStatusError, httpx.TransportError) as e:
            logger.warning("Request to %s failed: %s", endpoint, e)
            return None

        if not response.content:
            logger.warning("Empty response from %s", endpoint)
            return None
        return response.content

    async def fetch_schedule(self, game_date: date, league: League) -> list[GameRecord] | None:
        """Fetch and decode one league's schedule for a date.

        A bad status, a transport error, an empty body and an undecodable
        body all use up one attempt and back off 1s, 2s, 4s, ... before
        the next one.

        Returns:
            Records in upstream order, or None once every attempt has failed.
        """
        endpoint = SCHEDULE_ENDPOINTS[league]
        params = {"gameDate": format_api_date(game_date)}

        for attempt in range(self.max_attempts):
            logger.info(
                "Fetching %s games for %s (attempt %d/%d)",
                league.value.upper(),
                params["gameDate"],
                attempt + 1,
                self.max_attempts,
            )
            payload = await self._get(league, endpoint, params)
            if payload is not None:
                records = decode_schedule(payload)
                if records is not None:
                    return records

            wait = self.backoff_seconds * (2**attempt)
            logger.warning(
                "%s schedule attempt %d/%d failed. Backing off %.1fs.",
                league.value.upper(),
                attempt + 1,
                self.max_attempts,
                wait,
            )
            await self._sleep(wait)

        logger.warning("No attempts left for %s schedule on %s", league.value.upper(), game_date)
        return None

    async def fetch_live_score(self, game: Game) -> Game | None:
        """Fetch the current score for a game. One attempt, no backoff.

        Returns:
            A copy of the game with status and scores filled in, or None.
        """
        league = game.sport_type
        payload = await self._get(league, LIVE_SCORE_ENDPOINTS[league], {"gameID": game.composite_key})
        if payload is None:
            return None
        score = decode_live_score(payload, league)
        if score is None:
            return None
        return apply_live_score(game, score)
