"""Calendar helpers for multi-day slate exports."""

from datetime import date, timedelta


def date_range(start: date, end: date) -> list[date]:
    """Each game day from start through end, both included.

    Tank01 schedules are requested one day at a time, so a CLI range like
    --date 20250501 --end-date 20250503 becomes three requests. Empty when
    end is before start.
    """
    days = (end - start).days
    return [start + timedelta(days=offset) for offset in range(days + 1)]
