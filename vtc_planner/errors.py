"""Typed failures raised by the planning engine and its storage collaborator."""

from typing import Any, Optional


class PlanningError(Exception):
    """Base class for every failure the planning engine surfaces."""

    kind = "planning_error"


class InvalidIntervalError(PlanningError):
    """Malformed or inverted time range, or a break that does not fit its window."""

    kind = "invalid_interval"


class SlotConflictError(PlanningError):
    """A candidate booking overlaps one or more existing bookings."""

    kind = "slot_conflict"

    def __init__(self, message: str, conflicts: Optional[list[Any]] = None) -> None:
        super().__init__(message)
        self.conflicts = conflicts or []


class IndexOutOfRangeError(PlanningError, IndexError):
    """Removal or update referencing a position that does not exist."""

    kind = "index_out_of_range"


class NoAvailableWindowError(PlanningError):
    """An operation needs a work window but the day has none."""

    kind = "no_available_window"


class UnsupportedPlatformError(PlanningError):
    """Platform name is not in the configured list of known platforms."""

    kind = "unsupported_platform"


class ConcurrentModificationError(PlanningError):
    """The stored schedule changed since it was read."""

    kind = "concurrent_modification"
