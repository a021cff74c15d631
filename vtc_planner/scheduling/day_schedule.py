"""
DaySchedule aggregate: one driver's availability and bookings for one date.

Every mutation validates before touching state, so a failed call leaves
the schedule exactly as it was. Booking insertion goes through
``add_booking`` only, which asks the ConflictChecker first.

Usage:
    day = DaySchedule.default("driver-1", date(2025, 3, 17))
    day.set_availability("available", Interval.parse("08:00", "20:00"),
                         [BreakTime(start="12:00", end="13:00", reason="Lunch")])
    day.add_booking(Interval.parse("09:00", "10:00"), platform="uber")
"""

import logging
from datetime import date, datetime, time
from typing import Iterable, Optional, Sequence, Union

from pydantic import BaseModel, Field, model_validator

from vtc_planner.config import settings
from vtc_planner.errors import (
    IndexOutOfRangeError,
    InvalidIntervalError,
    NoAvailableWindowError,
    SlotConflictError,
)
from vtc_planner.schemas.planning_schema import (
    ActualResults,
    AvailabilityStatus,
    Booking,
    BreakTime,
    CompletedBooking,
    DailyGoals,
    Interval,
    PlatformSyncState,
    Reminder,
    RideOutcome,
    RideStatus,
)
from vtc_planner.scheduling import platform_sync
from vtc_planner.scheduling.conflict_checker import default_checker
from vtc_planner.scheduling.interval import any_mutual_overlap, duration_hours, overlaps
from vtc_planner.utils import minutes_of_day, percent, time_from_minutes

logger = logging.getLogger(__name__)

ADVISORY_STATUSES = (AvailabilityStatus.OFF, AvailabilityStatus.MAINTENANCE)


def _validate_breaks(work_window: Optional[Interval], breaks: Sequence[BreakTime]) -> None:
    """Raise InvalidIntervalError unless every break fits the window and none overlap."""
    for brk in breaks:
        if work_window is None:
            raise InvalidIntervalError(f"Break {brk} given without a work window")
        if not work_window.contains(brk):
            raise InvalidIntervalError(
                f"Break {brk} lies outside work window {work_window}"
            )
    if any_mutual_overlap(breaks):
        raise InvalidIntervalError("Breaks must not overlap each other")


def _check_index(index: int, size: int, what: str) -> None:
    if not 0 <= index < size:
        raise IndexOutOfRangeError(
            f"No {what} at position {index} (have {size})"
        )


class DaySchedule(BaseModel):
    """Availability window, breaks, bookings, goals, and sync flags for one day."""

    driver_id: str
    day: date
    availability_status: AvailabilityStatus = AvailabilityStatus.AVAILABLE
    work_window: Optional[Interval] = None
    breaks: list[BreakTime] = Field(default_factory=list)
    bookings: list[Booking] = Field(default_factory=list)
    daily_goals: DailyGoals = Field(default_factory=DailyGoals)
    actual_results: ActualResults = Field(default_factory=ActualResults)
    platform_sync: dict[str, PlatformSyncState] = Field(default_factory=dict)
    reminders: list[Reminder] = Field(default_factory=list)
    notes: str = ""
    version: int = 0
    synthesized: bool = Field(default=False, exclude=True)

    @model_validator(mode="after")
    def _check_breaks(self) -> "DaySchedule":
        _validate_breaks(self.work_window, self.breaks)
        return self

    @classmethod
    def default(cls, driver_id: str, day: date, synthesized: bool = True) -> "DaySchedule":
        """Build the default day: available, default work window, nothing booked."""
        window = Interval.parse(
            settings.planning.default_work_start, settings.planning.default_work_end
        )
        return cls(driver_id=driver_id, day=day, work_window=window, synthesized=synthesized)

    # ------------------------------------------------------------------
    # Availability
    # ------------------------------------------------------------------

    def set_availability(
        self,
        status: Union[AvailabilityStatus, str],
        work_window: Optional[Interval] = None,
        breaks: Optional[Sequence[BreakTime]] = None,
    ) -> None:
        """
        Replace the day's status, work window, and break list.

        Existing bookings are left untouched even if they now fall outside
        the new window; bookings are only validated when inserted.

        Raises:
            InvalidIntervalError: If a break lies outside the window or
                two breaks overlap.
            ValueError: If ``status`` is not a known availability status.
        """
        new_status = AvailabilityStatus(status)
        new_breaks = list(breaks or [])
        _validate_breaks(work_window, new_breaks)

        self.availability_status = new_status
        self.work_window = work_window
        self.breaks = new_breaks
        logger.info(
            "Availability for %s set to %s, window %s, %d break(s)",
            self.day, new_status.value, work_window or "none", len(new_breaks),
        )

    def total_available_hours(self) -> float:
        """Work window length minus breaks, never below zero; 0 without a window."""
        if self.work_window is None:
            return 0.0
        hours = duration_hours(self.work_window) - sum(duration_hours(b) for b in self.breaks)
        return max(0.0, hours)

    def total_booked_hours(self) -> float:
        return sum(duration_hours(b.interval) for b in self.bookings)

    def available_hours(self) -> float:
        """Available minus booked hours. Negative means the day is overcommitted."""
        return self.total_available_hours() - self.total_booked_hours()

    def utilization_rate(self) -> int:
        """Booked hours as a rounded percentage of available hours, 0 without any."""
        return percent(self.total_booked_hours(), self.total_available_hours())

    # ------------------------------------------------------------------
    # Bookings
    # ------------------------------------------------------------------

    def can_accept(self, candidate: Interval) -> bool:
        return default_checker.can_accept(candidate, self.bookings)

    def add_booking(
        self,
        candidate: Interval,
        platform: str,
        estimated_earnings: float = 0.0,
        external_ref: Optional[str] = None,
    ) -> Booking:
        """
        Insert a booking if it overlaps none of the existing ones.

        Returns:
            The created booking.

        Raises:
            SlotConflictError: If the candidate overlaps an existing booking.
        """
        booking = Booking(
            interval=candidate,
            platform=platform,
            estimated_earnings=estimated_earnings,
            external_ref=external_ref,
        )
        conflicts = default_checker.find_conflicts(candidate, self.bookings)
        if conflicts:
            raise SlotConflictError(
                f"Slot {candidate} on {self.day} overlaps "
                + ", ".join(str(c.interval) for c in conflicts),
                conflicts=conflicts,
            )

        self._warn_if_unusual(candidate)
        self.bookings.append(booking)
        logger.info(
            "Booking %s on %s added for %s (%.2f estimated)",
            candidate, self.day, platform, estimated_earnings,
        )
        return booking

    def remove_booking(self, index: int) -> Booking:
        """Remove and return the booking at ``index``."""
        _check_index(index, len(self.bookings), "booking")
        removed = self.bookings.pop(index)
        logger.info("Booking %s on %s removed", removed.interval, self.day)
        return removed

    def _warn_if_unusual(self, candidate: Interval) -> None:
        if self.availability_status in ADVISORY_STATUSES:
            logger.warning(
                "Booking %s added on %s while status is %s",
                candidate, self.day, self.availability_status.value,
            )
        if self.work_window is None or not self.work_window.contains(candidate):
            logger.warning(
                "Booking %s on %s falls outside work window %s",
                candidate, self.day, self.work_window or "none",
            )
        for brk in self.breaks:
            if overlaps(candidate, brk):
                logger.warning("Booking %s on %s overlaps break %s", candidate, self.day, brk)

    # ------------------------------------------------------------------
    # Actual results
    # ------------------------------------------------------------------

    def completed_bookings(self, outcomes: Iterable[RideOutcome]) -> list[CompletedBooking]:
        """
        Pair bookings with completed ride outcomes.

        An outcome with a ``booking_index`` targets that position; otherwise
        it is matched on ``external_ref``. Results follow booking order and
        a booking reported twice counts once, with the last report winning.

        Raises:
            IndexOutOfRangeError: If a ``booking_index`` has no booking.
        """
        by_index: dict[int, RideOutcome] = {}
        by_ref: dict[str, RideOutcome] = {}
        for outcome in outcomes:
            if outcome.booking_index is not None:
                _check_index(outcome.booking_index, len(self.bookings), "booking")
            if outcome.status != RideStatus.COMPLETED:
                continue
            if outcome.booking_index is not None:
                by_index[outcome.booking_index] = outcome
            else:
                by_ref[outcome.external_ref] = outcome

        result = []
        for index, booking in enumerate(self.bookings):
            outcome = by_index.get(index)
            if outcome is None and booking.external_ref:
                outcome = by_ref.get(booking.external_ref)
            if outcome is not None:
                result.append(CompletedBooking(
                    booking=booking,
                    actual_earnings=outcome.actual_earnings,
                    rating=outcome.rating,
                ))
        return result

    def recompute_actual_results(self, completed: Iterable[CompletedBooking]) -> ActualResults:
        """Rebuild ``actual_results`` from the given completed bookings.

        Idempotent: the same input always yields the same results,
        whatever was cached before.
        """
        completed = list(completed)
        ratings = [c.rating for c in completed if c.rating is not None]
        results = ActualResults(
            total_rides=len(completed),
            total_earnings=sum(
                c.actual_earnings if c.actual_earnings is not None
                else c.booking.estimated_earnings
                for c in completed
            ),
            total_hours=sum(duration_hours(c.booking.interval) for c in completed),
            average_rating=sum(ratings) / len(ratings) if ratings else 0.0,
        )
        self.actual_results = results
        logger.debug("Actual results for %s recomputed: %s", self.day, results)
        return results

    # ------------------------------------------------------------------
    # Goals, notes, reminders, platform sync
    # ------------------------------------------------------------------

    def set_daily_goals(self, goals: Union[DailyGoals, dict]) -> DailyGoals:
        self.daily_goals = goals if isinstance(goals, DailyGoals) else DailyGoals(**goals)
        return self.daily_goals

    def set_notes(self, notes: str) -> None:
        self.notes = notes

    def add_reminder(self, at: Union[time, str], message: str) -> Reminder:
        reminder = Reminder(at=at, message=message)
        self.reminders.append(reminder)
        return reminder

    def complete_reminder(self, index: int) -> Reminder:
        _check_index(index, len(self.reminders), "reminder")
        self.reminders[index] = self.reminders[index].model_copy(update={"is_completed": True})
        return self.reminders[index]

    def set_platform_sync(
        self, platform: str, is_online: bool, at: Optional[datetime] = None
    ) -> PlatformSyncState:
        name, state = platform_sync.toggle(platform, is_online, at)
        self.platform_sync[name] = state
        logger.info(
            "Platform %s on %s marked %s", name, self.day, "online" if is_online else "offline"
        )
        return state

    def online_platforms(self) -> list[str]:
        return platform_sync.online_platforms(self.platform_sync)

    # ------------------------------------------------------------------
    # Free time
    # ------------------------------------------------------------------

    def free_intervals(self) -> list[Interval]:
        """Gaps in the work window not covered by a break or a booking."""
        if self.work_window is None:
            return []

        window_start = minutes_of_day(self.work_window.start)
        window_end = minutes_of_day(self.work_window.end)
        blocked = sorted(
            (minutes_of_day(i.start), minutes_of_day(i.end))
            for i in [*self.breaks, *(b.interval for b in self.bookings)]
        )

        gaps = []
        cursor = window_start
        for start, end in blocked:
            if end <= cursor:
                continue
            if start >= window_end:
                break
            if start > cursor:
                gaps.append((cursor, start))
            cursor = max(cursor, end)
        if cursor < window_end:
            gaps.append((cursor, window_end))

        return [
            Interval(start=time_from_minutes(s), end=time_from_minutes(e)) for s, e in gaps
        ]

    def first_free_slot(self, duration_minutes: int) -> Optional[Interval]:
        """
        Earliest free slot of ``duration_minutes`` inside the work window.

        Returns:
            The slot, or None when no gap is long enough.

        Raises:
            NoAvailableWindowError: If the day has no work window.
            InvalidIntervalError: If ``duration_minutes`` is not positive.
        """
        if self.work_window is None:
            raise NoAvailableWindowError(f"No work window set for {self.day}")
        if duration_minutes <= 0:
            raise InvalidIntervalError(f"Slot duration must be positive, got {duration_minutes}")
        for gap in self.free_intervals():
            if gap.duration_minutes >= duration_minutes:
                start = minutes_of_day(gap.start)
                return Interval(
                    start=gap.start, end=time_from_minutes(start + duration_minutes)
                )
        return None
