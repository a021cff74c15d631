"""
Booking conflict detection for a single day.

A candidate is acceptable iff it does not overlap any existing booking.
Bookings that merely touch at an endpoint are always accepted, which
allows back-to-back rides with zero gap. Availability status is not
consulted here.
"""

import logging
from typing import Sequence

from vtc_planner.schemas.planning_schema import Booking, Interval
from vtc_planner.scheduling.interval import overlaps

logger = logging.getLogger(__name__)


class ConflictChecker:
    """Stateless linear-scan overlap check over one day's bookings."""

    def find_conflicts(
        self, candidate: Interval, bookings: Sequence[Booking]
    ) -> list[Booking]:
        """Return every existing booking the candidate overlaps, in stored order."""
        return [b for b in bookings if overlaps(candidate, b.interval)]

    def can_accept(self, candidate: Interval, bookings: Sequence[Booking]) -> bool:
        conflicts = self.find_conflicts(candidate, bookings)
        if conflicts:
            logger.debug(
                "Candidate %s conflicts with %s",
                candidate, ", ".join(str(b.interval) for b in conflicts),
            )
        return not conflicts


default_checker = ConflictChecker()
