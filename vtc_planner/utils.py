"""Shared time and date helpers used across the planning engine."""

import math
from datetime import date, datetime, time, timedelta
from typing import Iterator, Union

TimeLike = Union[str, time]


def parse_time_of_day(value: TimeLike) -> time:
    """Parse an ``HH:MM`` (or ``HH:MM:SS``) wall-clock string into a ``time``.

    Seconds are dropped: the planning model works at minute precision.

    Examples:
        >>> parse_time_of_day("09:30")
        datetime.time(9, 30)
        >>> parse_time_of_day(" 8:05 ")
        datetime.time(8, 5)
    """
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0)
    value = value.strip()
    try:
        return datetime.strptime(value, "%H:%M").time()
    except ValueError:
        return datetime.strptime(value, "%H:%M:%S").time().replace(second=0)


def minutes_of_day(value: time) -> int:
    """Minutes elapsed since midnight."""
    return value.hour * 60 + value.minute


def time_from_minutes(minutes: int) -> time:
    return time(minutes // 60, minutes % 60)


def daterange(start: date, end: date) -> Iterator[date]:
    """Yield every date from ``start`` to ``end`` inclusive, ascending."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def is_weekend(day: date) -> bool:
    return day.weekday() >= 5


def percent(part: float, whole: float) -> int:
    """``part / whole`` as a whole percentage, halves rounded up; 0 when ``whole`` is not positive.

    Examples:
        >>> percent(1, 8)
        13
        >>> percent(3, 0)
        0
    """
    if whole <= 0:
        return 0
    return math.floor(part / whole * 100 + 0.5)
