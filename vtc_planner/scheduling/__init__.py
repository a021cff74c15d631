from vtc_planner.scheduling.interval import duration_hours, overlaps
from vtc_planner.scheduling.conflict_checker import ConflictChecker
from vtc_planner.scheduling.day_schedule import DaySchedule
from vtc_planner.scheduling.calendar_range import CalendarRange, assemble, resolve_period
from vtc_planner.scheduling.goal_tracker import GoalProgress, GoalTracker, RangeSummary

__all__ = [
    "overlaps", "duration_hours",
    "ConflictChecker", "DaySchedule",
    "CalendarRange", "assemble", "resolve_period",
    "GoalTracker", "GoalProgress", "RangeSummary",
]
