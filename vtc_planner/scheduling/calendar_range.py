"""
Gap-free calendar projection over a date range.

Stitches stored DaySchedules together with synthesized defaults so that
a week or month view always has exactly one entry per day. Synthesized
days are never written back.
"""

import calendar
import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Callable, Iterator, Optional

from vtc_planner.config import VALID_VIEWS, settings
from vtc_planner.scheduling.day_schedule import DaySchedule
from vtc_planner.utils import daterange

logger = logging.getLogger(__name__)

Lookup = Callable[[date], Optional[DaySchedule]]


def week_bounds(today: date) -> tuple[date, date]:
    """Monday..Sunday week containing ``today``."""
    monday = today - timedelta(days=today.weekday())
    return monday, monday + timedelta(days=6)


def month_bounds(today: date) -> tuple[date, date]:
    """First..last day of ``today``'s calendar month."""
    last_day = calendar.monthrange(today.year, today.month)[1]
    return today.replace(day=1), today.replace(day=last_day)


def resolve_period(
    view: Optional[str] = None,
    start: Optional[date] = None,
    end: Optional[date] = None,
    today: Optional[date] = None,
) -> tuple[date, date]:
    """
    Pick the date range to display.

    An explicit ``start`` and ``end`` always win. Otherwise the week or
    month containing ``today`` is used.

    Raises:
        ValueError: If ``view`` is not ``week`` or ``month``.
    """
    if start is not None and end is not None:
        return start, end
    view = view or settings.planning.default_view
    if view not in VALID_VIEWS:
        raise ValueError(f"Unknown calendar view {view!r}, expected one of {VALID_VIEWS}")
    today = today or date.today()
    return week_bounds(today) if view == "week" else month_bounds(today)


@dataclass(frozen=True)
class CalendarRange:
    """Read-only, date-ordered sequence of DaySchedules covering ``[start, end]``."""

    driver_id: str
    start: date
    end: date
    days: tuple[DaySchedule, ...]

    def __len__(self) -> int:
        return len(self.days)

    def __iter__(self) -> Iterator[DaySchedule]:
        return iter(self.days)

    def __getitem__(self, index: int) -> DaySchedule:
        return self.days[index]

    @property
    def stored_days(self) -> list[DaySchedule]:
        return [d for d in self.days if not d.synthesized]

    @property
    def synthesized_days(self) -> list[DaySchedule]:
        return [d for d in self.days if d.synthesized]


def assemble(driver_id: str, start: date, end: date, lookup: Lookup) -> CalendarRange:
    """
    Build the calendar for ``[start, end]`` inclusive.

    Calls ``lookup`` once per date; missing days become transient defaults.
    An inverted range yields an empty calendar rather than an error.
    """
    if end < start:
        logger.warning("Inverted calendar range %s..%s, returning no days", start, end)
        return CalendarRange(driver_id=driver_id, start=start, end=end, days=())

    days = []
    for current in daterange(start, end):
        stored = lookup(current)
        days.append(stored if stored is not None else DaySchedule.default(driver_id, current))

    calendar_range = CalendarRange(driver_id=driver_id, start=start, end=end, days=tuple(days))
    logger.debug(
        "Assembled %d day(s) for %s..%s (%d stored)",
        len(calendar_range), start, end, len(calendar_range.stored_days),
    )
    return calendar_range
