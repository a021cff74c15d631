"""
In-memory planning store.

In production, this would be a document collection keyed by
``(driver_id, date)`` with a unique index and an optimistic version
field, so concurrent writers to the same day cannot both commit.
"""

import logging
import threading
from datetime import date
from typing import Optional

from vtc_planner.errors import ConcurrentModificationError
from vtc_planner.scheduling.day_schedule import DaySchedule

logger = logging.getLogger(__name__)

_schedules: dict[tuple[str, date], dict] = {}
_lock = threading.Lock()


def lookup(driver_id: str, day: date) -> Optional[DaySchedule]:
    """Return a fresh copy of the stored schedule, or None if the day was never written."""
    with _lock:
        record = _schedules.get((driver_id, day))
    if record is None:
        logger.debug("No stored schedule for %s on %s", driver_id, day)
        return None
    return DaySchedule.model_validate(record)


def persist(schedule: DaySchedule) -> DaySchedule:
    """
    Compare-and-swap write of one day.

    The schedule's ``version`` must match the stored version (0 for a
    day never written). The stored copy gets ``version + 1``.

    Returns:
        The schedule as stored, with its new version.

    Raises:
        ConcurrentModificationError: If another write landed first.
    """
    key = (schedule.driver_id, schedule.day)
    with _lock:
        current = _schedules.get(key)
        current_version = current["version"] if current else 0
        if schedule.version != current_version:
            raise ConcurrentModificationError(
                f"Schedule for {schedule.driver_id} on {schedule.day} changed "
                f"(expected version {schedule.version}, found {current_version})"
            )
        stored = schedule.model_copy(
            deep=True, update={"version": current_version + 1, "synthesized": False}
        )
        _schedules[key] = stored.model_dump(mode="json")
    logger.debug("Stored %s on %s at version %d", schedule.driver_id, schedule.day, stored.version)
    return stored


def stored_dates(driver_id: str) -> list[date]:
    with _lock:
        return sorted(d for (owner, d) in _schedules if owner == driver_id)


def load_records(records: list[dict]) -> int:
    """Bulk-load exported schedules, replacing any stored copy. Returns the count."""
    schedules = [DaySchedule.model_validate(r) for r in records]
    with _lock:
        for schedule in schedules:
            _schedules[(schedule.driver_id, schedule.day)] = schedule.model_dump(mode="json")
    logger.info("Loaded %d stored schedule(s)", len(schedules))
    return len(schedules)


def reset() -> None:
    """Clear all schedules. Used by test fixtures for isolation."""
    with _lock:
        _schedules.clear()
