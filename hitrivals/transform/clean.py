"""Parsing helpers for the date and time strings the schedule API sends."""

from datetime import date, datetime


def parse_api_date(value: str | None) -> date | None:
    """Parse an upstream 'YYYYMMDD' date, or None if it isn't one.

    Examples:
        >>> parse_api_date("20250503")
        datetime.date(2025, 5, 3)
        >>> parse_api_date("May 3") is None
        True
    """
    if not value:
        return None
    try:
        return datetime.strptime(value.strip(), "%Y%m%d").date()
    except ValueError:
        return None


def format_api_date(game_date: date) -> str:
    """Format a date the way the API expects it in query strings ('YYYYMMDD')."""
    return game_date.strftime("%Y%m%d")


def parse_meridiem_time(value: str | None) -> tuple[int, int]:
    """Convert a 12-hour time like '7:10p' or '10:15a' to (hour, minute).

    Unparseable input yields (0, 0).

    Examples:
        >>> parse_meridiem_time("7:10p")
        (19, 10)
        >>> parse_meridiem_time("12:05a")
        (0, 5)
        >>> parse_meridiem_time("TBD")
        (0, 0)
    """
    if not value:
        return 0, 0
    text = value.strip().lower()
    is_pm = "p" in text
    is_am = "a" in text
    digits = text.replace("m", "").replace("p", "").replace("a", "").strip()
    try:
        hour_str, minute_str = digits.split(":")
        hour, minute = int(hour_str), int(minute_str)
    except ValueError:
        return 0, 0
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        return 0, 0

    if is_pm and hour < 12:
        hour += 12
    elif is_am and hour == 12:
        hour = 0
    return hour, minute
