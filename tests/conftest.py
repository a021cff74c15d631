"""Shared test fixtures and helpers."""

from datetime import date
from typing import Optional

import pytest

from vtc_planner.schemas.planning_schema import AvailabilityStatus, BreakTime, Interval
from vtc_planner.scheduling.conflict_checker import ConflictChecker
from vtc_planner.scheduling.day_schedule import DaySchedule
from vtc_planner.scheduling.goal_tracker import GoalTracker
from vtc_planner.tools import planning_store

DRIVER = "driver-1"
MONDAY = date(2025, 3, 17)


@pytest.fixture(autouse=True)
def clean_store():
    planning_store.reset()
    yield
    planning_store.reset()


@pytest.fixture
def checker():
    return ConflictChecker()


@pytest.fixture
def tracker():
    return GoalTracker()


@pytest.fixture
def workday():
    """08:00-20:00 with a 12:00-13:00 lunch break and nothing booked."""
    return make_day()


def iv(start: str, end: str) -> Interval:
    """Shorthand for Interval.parse."""
    return Interval.parse(start, end)


def make_day(
    day: date = MONDAY,
    window: Optional[tuple[str, str]] = ("08:00", "20:00"),
    breaks: Optional[list[tuple[str, str]]] = None,
    status: AvailabilityStatus = AvailabilityStatus.AVAILABLE,
    driver_id: str = DRIVER,
) -> DaySchedule:
    """Helper to create a DaySchedule with sensible defaults."""
    if breaks is None:
        breaks = [("12:00", "13:00")]
    schedule = DaySchedule(driver_id=driver_id, day=day)
    schedule.set_availability(
        status,
        iv(*window) if window else None,
        [BreakTime(start=s, end=e, reason="Lunch break") for s, e in breaks],
    )
    return schedule
