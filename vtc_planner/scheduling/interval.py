"""Interval predicates used by the conflict checker and the day aggregate."""

from typing import Iterable

from vtc_planner.schemas.planning_schema import Interval


def overlaps(a: Interval, b: Interval) -> bool:
    """Half-open overlap test; ``[9:00,10:00)`` and ``[10:00,11:00)`` do not overlap."""
    return a.start < b.end and b.start < a.end


def duration_hours(interval: Interval) -> float:
    return interval.duration_hours


def total_hours(intervals: Iterable[Interval]) -> float:
    return sum(duration_hours(i) for i in intervals)


def any_mutual_overlap(intervals: Iterable[Interval]) -> bool:
    """True when any two of the given intervals overlap."""
    ordered = sorted(intervals, key=lambda i: (i.start, i.end))
    for previous, current in zip(ordered, ordered[1:]):
        if overlaps(previous, current):
            return True
    return False
