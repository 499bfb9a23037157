"""Command-line runner: load the slate for one or more dates and write CSVs."""

from __future__ import annotations

import argparse
import asyncio
import logging
from dataclasses import asdict, replace
from datetime import date, datetime
from pathlib import Path

import pandas as pd
from dotenv import load_dotenv

from hitrivals.config import Settings
from hitrivals.extract.tank01 import Tank01Client
from hitrivals.extract.utils import date_range
from hitrivals.models.game import Game, League
from hitrivals.pipeline.schedule import ScheduleResult, ScheduleService

logger = logging.getLogger(__name__)

RAW_DIR = Path("data/raw")

GAME_COLUMNS = [
    "id", "sport_type", "start_time", "away_team_abbr", "away_team",
    "home_team_abbr", "home_team", "status", "away_score", "home_score",
    "current_period",
]


def games_to_frame(games: list[Game], used_fallback: bool = False) -> pd.DataFrame:
    """Flatten games into a DataFrame with one row per game."""
    rows = []
    for game in games:
        row = asdict(game)
        row["sport_type"] = game.sport_type.value
        row["status"] = game.status.value
        row["start_time"] = game.start_time.isoformat()
        rows.append(row)

    df = pd.DataFrame(rows, columns=GAME_COLUMNS)
    df["is_sample"] = used_fallback
    return df


async def load_slate(
    game_date: date,
    leagues: list[League],
    settings: Settings,
    live: bool = False,
) -> list[ScheduleResult]:
    async with Tank01Client.from_settings(settings) as client:
        service = ScheduleService(client, settings)
        results = list(await asyncio.gather(*(service.load_schedule(game_date, lg) for lg in leagues)))
        if live:
            # Sample games have nothing upstream to refresh
            results = [
                r if r.used_fallback else replace(r, games=await service.update_live_scores(r.games))
                for r in results
            ]
    return results


def run_export(
    game_date: date,
    leagues: list[League],
    settings: Settings,
    out_dir: Path = RAW_DIR,
    live: bool = False,
) -> int:
    """Load the slate for a date and write {date}_games.csv.

    Returns:
        Number of game rows written.
    """
    logger.info("Loading %s slate for %s", "/".join(lg.value for lg in leagues), game_date)
    out_dir.mkdir(parents=True, exist_ok=True)

    results = asyncio.run(load_slate(game_date, leagues, settings, live=live))
    for result in results:
        if result.used_fallback:
            logger.warning("Couldn't fetch %s games, wrote sample data instead", result.league.value.upper())

    frames = [games_to_frame(r.games, r.used_fallback) for r in results]
    df = pd.concat(frames, ignore_index=True) if frames else pd.DataFrame(columns=GAME_COLUMNS)
    path = out_dir / f"{game_date.isoformat()}_games.csv"
    df.to_csv(path, index=False)
    logger.info("Wrote %d games to %s", len(df), path)
    return len(df)


def main(argv: list[str] | None = None) -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    load_dotenv()

    parser = argparse.ArgumentParser(description="HitRivals schedule export")
    parser.add_argument(
        "--date",
        type=date.fromisoformat,
        default=None,
        help="Game date to load (YYYY-MM-DD). Defaults to today.",
    )
    parser.add_argument(
        "--end-date",
        type=date.fromisoformat,
        default=None,
        help="Load every date from --date through this one (inclusive).",
    )
    parser.add_argument(
        "--league",
        choices=["mlb", "nba", "all"],
        default="all",
        help="League to load (default: all).",
    )
    parser.add_argument("--mock", action="store_true", help="Skip the network and use sample data")
    parser.add_argument("--live", action="store_true", help="Refresh live scores before writing")
    parser.add_argument("--out", type=Path, default=RAW_DIR, help="Output directory (default: data/raw)")
    args = parser.parse_args(argv)

    settings = Settings.from_env()
    if args.mock:
        settings = replace(settings, use_mock_data=True)

    leagues = list(League) if args.league == "all" else [League(args.league)]
    start = args.date or datetime.now(settings.tz).date()
    dates = date_range(start, args.end_date) if args.end_date else [start]

    for game_date in dates:
        run_export(game_date, leagues, settings, out_dir=args.out, live=args.live)


if __name__ == "__main__":
    main()
