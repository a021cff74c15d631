"""
Planned-versus-actual tracking over one day or a range of days.

Range summaries count days by status, sum available and booked hours,
sum planned targets and cached actual results, and derive utilization
and goal progress percentages. Pure aggregation: no mutation, no I/O.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable

from vtc_planner.schemas.planning_schema import AvailabilityStatus
from vtc_planner.scheduling.day_schedule import DaySchedule
from vtc_planner.utils import percent

logger = logging.getLogger(__name__)


@dataclass
class GoalProgress:
    """Progress of one day's actual results against its goals."""

    rides_progress: int = 0
    earnings_progress: int = 0
    hours_progress: int = 0


@dataclass
class RangeSummary:
    """Aggregated availability, bookings, goals, and results for a range."""

    total_days: int = 0
    days_by_status: dict[str, int] = field(
        default_factory=lambda: {s.value: 0 for s in AvailabilityStatus}
    )

    # Capacity
    total_available_hours: float = 0.0
    total_booked_hours: float = 0.0
    utilization_rate: int = 0

    # Goals
    total_target_earnings: float = 0.0
    total_target_rides: int = 0
    total_target_hours: float = 0.0

    # Actuals
    total_actual_rides: int = 0
    total_actual_earnings: float = 0.0
    total_actual_hours: float = 0.0
    earnings_progress: int = 0
    rides_progress: int = 0

    @property
    def available_days(self) -> int:
        return self.days_by_status[AvailabilityStatus.AVAILABLE.value]

    @property
    def busy_days(self) -> int:
        return self.days_by_status[AvailabilityStatus.BUSY.value]

    @property
    def off_days(self) -> int:
        return self.days_by_status[AvailabilityStatus.OFF.value]

    @property
    def maintenance_days(self) -> int:
        return self.days_by_status[AvailabilityStatus.MAINTENANCE.value]


class GoalTracker:
    """Computes goal progress and range summaries from DaySchedules."""

    def day_progress(self, schedule: DaySchedule) -> GoalProgress:
        goals = schedule.daily_goals
        actual = schedule.actual_results
        return GoalProgress(
            rides_progress=percent(actual.total_rides, goals.target_rides),
            earnings_progress=percent(actual.total_earnings, goals.target_earnings),
            hours_progress=percent(actual.total_hours, goals.target_hours),
        )

    def summarize_range(self, schedules: Iterable[DaySchedule]) -> RangeSummary:
        """Aggregate a sequence of days. An empty sequence gives a zeroed summary."""
        summary = RangeSummary()

        for day in schedules:
            summary.total_days += 1
            summary.days_by_status[day.availability_status.value] += 1

            summary.total_available_hours += day.total_available_hours()
            summary.total_booked_hours += day.total_booked_hours()

            summary.total_target_earnings += day.daily_goals.target_earnings
            summary.total_target_rides += day.daily_goals.target_rides
            summary.total_target_hours += day.daily_goals.target_hours

            summary.total_actual_rides += day.actual_results.total_rides
            summary.total_actual_earnings += day.actual_results.total_earnings
            summary.total_actual_hours += day.actual_results.total_hours

        summary.utilization_rate = percent(
            summary.total_booked_hours, summary.total_available_hours
        )
        summary.earnings_progress = percent(
            summary.total_actual_earnings, summary.total_target_earnings
        )
        summary.rides_progress = percent(summary.total_actual_rides, summary.total_target_rides)

        logger.debug(
            "Summarized %d day(s): %.1fh available, %.1fh booked",
            summary.total_days, summary.total_available_hours, summary.total_booked_hours,
        )
        return summary

    def format_report(self, summary: RangeSummary) -> str:
        """Format a range summary into a human-readable report."""
        lines = [
            "=" * 60,
            "DRIVER PLANNING SUMMARY",
            "=" * 60,
            "",
            "DAYS",
            f"  Total days:             {summary.total_days}",
            f"  Available:              {summary.available_days}",
            f"  Busy:                   {summary.busy_days}",
            f"  Off:                    {summary.off_days}",
            f"  Maintenance:            {summary.maintenance_days}",
            "",
            "CAPACITY",
            f"  Available hours:        {summary.total_available_hours:.1f}",
            f"  Booked hours:           {summary.total_booked_hours:.1f}",
            f"  Utilization rate:       {summary.utilization_rate}%",
            "",
            "GOALS",
            f"  Target rides:           {summary.total_target_rides}",
            f"  Target earnings:        {summary.total_target_earnings:.2f}",
            f"  Target hours:           {summary.total_target_hours:.1f}",
            "",
            "RESULTS",
            f"  Rides completed:        {summary.total_actual_rides}  ({summary.rides_progress}% of target)",
            f"  Earnings:               {summary.total_actual_earnings:.2f}  ({summary.earnings_progress}% of target)",
            f"  Hours driven:           {summary.total_actual_hours:.1f}",
            "=" * 60,
        ]
        return "\n".join(lines)
