"""
Planning operations exposed to request handlers.

Each function loads the driver's day from the store, applies one engine
operation to that copy, and persists it. Engine failures come back as a
``success: False`` result with an ``error`` kind instead of an exception.
"""

import logging
from datetime import date, datetime
from typing import Any, Callable, Optional, TypedDict, TypeVar, Union

from vtc_planner.config import settings
from vtc_planner.errors import InvalidIntervalError, PlanningError
from vtc_planner.logging_context import set_driver_id
from vtc_planner.schemas.planning_schema import BreakTime, Interval, RideOutcome
from vtc_planner.scheduling.calendar_range import CalendarRange, assemble, resolve_period
from vtc_planner.scheduling.day_schedule import DaySchedule
from vtc_planner.scheduling.goal_tracker import GoalTracker
from vtc_planner.scheduling.templates import get_template, list_templates as _list_templates
from vtc_planner.tools import planning_store

logger = logging.getLogger(__name__)

DateLike = Union[date, str]
T = TypeVar("T")

_tracker = GoalTracker()


class PlanningResult(TypedDict, total=False):
    """Result returned by every planning operation."""

    success: bool
    message: str
    error: str
    data: Any


def _to_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(value.strip(), "%Y-%m-%d").date()


def _failure(exc: Exception) -> PlanningResult:
    kind = exc.kind if isinstance(exc, PlanningError) else "invalid_input"
    logger.warning("Planning operation failed (%s): %s", kind, exc)
    return {"success": False, "error": kind, "message": str(exc)}


def _day_view(schedule: DaySchedule) -> dict:
    """Serialized schedule plus the derived numbers a calendar view shows."""
    progress = _tracker.day_progress(schedule)
    return {
        **schedule.model_dump(mode="json"),
        "synthesized": schedule.synthesized,
        "total_available_hours": schedule.total_available_hours(),
        "total_booked_hours": schedule.total_booked_hours(),
        "available_hours": schedule.available_hours(),
        "utilization_rate": schedule.utilization_rate(),
        "online_platforms": schedule.online_platforms(),
        "goal_progress": vars(progress),
    }


def _load_or_default(driver_id: str, day: date) -> DaySchedule:
    return planning_store.lookup(driver_id, day) or DaySchedule.default(
        driver_id, day, synthesized=False
    )


def _mutate(
    driver_id: str,
    day: DateLike,
    operation: Callable[[DaySchedule], T],
    message: str,
    create: bool = True,
) -> PlanningResult:
    """Load one day, apply ``operation`` to the copy, then persist it."""
    set_driver_id(driver_id)
    try:
        target = _to_date(day)
        if create:
            schedule = _load_or_default(driver_id, target)
        else:
            schedule = planning_store.lookup(driver_id, target)
            if schedule is None:
                return {
                    "success": False,
                    "error": "not_found",
                    "message": f"No planning stored for {target}.",
                }
        value = operation(schedule)
        stored = planning_store.persist(schedule)
    except (PlanningError, ValueError) as exc:
        return _failure(exc)

    data = _day_view(stored)
    if value is not None and hasattr(value, "model_dump"):
        data["result"] = value.model_dump(mode="json")
    return {"success": True, "message": message, "data": data}


def _breaks_from(raw: Optional[list[dict]]) -> list[BreakTime]:
    return [BreakTime(**b) for b in raw or []]


# ----------------------------------------------------------------------
# Reads
# ----------------------------------------------------------------------

def get_day(driver_id: str, day: DateLike) -> PlanningResult:
    """Return the stored day, or a transient default that is not saved."""
    set_driver_id(driver_id)
    try:
        target = _to_date(day)
    except ValueError as exc:
        return _failure(exc)
    schedule = planning_store.lookup(driver_id, target) or DaySchedule.default(driver_id, target)
    return {"success": True, "message": f"Planning for {target}.", "data": _day_view(schedule)}


def _calendar(
    driver_id: str,
    start: Optional[DateLike],
    end: Optional[DateLike],
    view: Optional[str],
    today: Optional[date],
) -> CalendarRange:
    first, last = resolve_period(
        view,
        _to_date(start) if start else None,
        _to_date(end) if end else None,
        today,
    )
    span = (last - first).days + 1
    if span > settings.planning.max_range_days:
        raise ValueError(
            f"Range of {span} days exceeds the limit of {settings.planning.max_range_days}"
        )
    return assemble(driver_id, first, last, lambda d: planning_store.lookup(driver_id, d))


def get_calendar(
    driver_id: str,
    start: Optional[DateLike] = None,
    end: Optional[DateLike] = None,
    view: Optional[str] = None,
    today: Optional[date] = None,
) -> PlanningResult:
    """Week or month calendar with one entry per day, gaps filled with defaults."""
    set_driver_id(driver_id)
    try:
        calendar_range = _calendar(driver_id, start, end, view, today)
    except ValueError as exc:
        return _failure(exc)
    return {
        "success": True,
        "message": f"{len(calendar_range)} day(s) of planning.",
        "data": {
            "planning": [_day_view(d) for d in calendar_range],
            "period": {
                "start_date": calendar_range.start.isoformat(),
                "end_date": calendar_range.end.isoformat(),
                "view": view or settings.planning.default_view,
            },
        },
    }


def availability_summary(
    driver_id: str,
    start: Optional[DateLike] = None,
    end: Optional[DateLike] = None,
    today: Optional[date] = None,
) -> PlanningResult:
    """Summarize availability, bookings, and goals over a range.

    Without an explicit end, the range spans ``SUMMARY_DEFAULT_DAYS``
    days from ``start`` (or today).
    """
    set_driver_id(driver_id)
    try:
        first = _to_date(start) if start else (today or date.today())
        if end:
            last = _to_date(end)
        else:
            last = date.fromordinal(
                first.toordinal() + settings.planning.summary_default_days - 1
            )
        calendar_range = _calendar(driver_id, first, last, None, today)
    except ValueError as exc:
        return _failure(exc)

    summary = _tracker.summarize_range(calendar_range)
    return {
        "success": True,
        "message": f"Summary over {summary.total_days} day(s).",
        "data": {
            "summary": {
                **vars(summary),
                "days_by_status": dict(summary.days_by_status),
            },
            "report": _tracker.format_report(summary),
            "period": {"start_date": first.isoformat(), "end_date": last.isoformat()},
        },
    }


def find_free_slot(driver_id: str, day: DateLike, duration_minutes: int) -> PlanningResult:
    """Earliest gap of ``duration_minutes`` in the day's work window."""
    set_driver_id(driver_id)
    try:
        target = _to_date(day)
        schedule = planning_store.lookup(driver_id, target) or DaySchedule.default(
            driver_id, target
        )
        slot = schedule.first_free_slot(duration_minutes)
    except (PlanningError, ValueError) as exc:
        return _failure(exc)
    if slot is None:
        return {
            "success": False,
            "error": "no_free_slot",
            "message": f"No free {duration_minutes}-minute slot on {target}.",
        }
    return {
        "success": True,
        "message": f"Free slot {slot} on {target}.",
        "data": slot.model_dump(mode="json"),
    }


def list_templates() -> PlanningResult:
    return {
        "success": True,
        "message": "Available planning templates.",
        "data": [t.model_dump(mode="json") for t in _list_templates()],
    }


# ----------------------------------------------------------------------
# Mutations
# ----------------------------------------------------------------------

def set_availability(
    driver_id: str,
    day: DateLike,
    status: str,
    start_time: Optional[str] = None,
    end_time: Optional[str] = None,
    breaks: Optional[list[dict]] = None,
) -> PlanningResult:
    """Replace the day's status, work window, and breaks."""

    def operation(schedule: DaySchedule) -> None:
        if bool(start_time) != bool(end_time):
            raise InvalidIntervalError("Work window needs both a start and an end time")
        window = Interval.parse(start_time, end_time) if start_time else None
        schedule.set_availability(status, window, _breaks_from(breaks))

    return _mutate(driver_id, day, operation, "Planning updated.")


def add_booking(
    driver_id: str,
    day: DateLike,
    start_time: str,
    end_time: str,
    platform: str,
    estimated_earnings: float = 0.0,
    external_ref: Optional[str] = None,
) -> PlanningResult:
    """Add a booking to the day if the slot is free."""
    return _mutate(
        driver_id,
        day,
        lambda s: s.add_booking(
            Interval.parse(start_time, end_time), platform, estimated_earnings, external_ref
        ),
        "Booking added to planning.",
    )


def remove_booking(driver_id: str, day: DateLike, index: int) -> PlanningResult:
    """Remove the booking at ``index``. The day must already be stored."""
    return _mutate(
        driver_id, day, lambda s: s.remove_booking(int(index)), "Booking removed.", create=False
    )


def sync_platform(
    driver_id: str,
    day: DateLike,
    platform: str,
    is_online: bool,
    at: Optional[datetime] = None,
) -> PlanningResult:
    """Flag a platform online or offline for the day."""
    return _mutate(
        driver_id,
        day,
        lambda s: s.set_platform_sync(platform, is_online, at),
        f"Platform {platform.strip().lower()} sync updated.",
    )


def set_daily_goals(driver_id: str, day: DateLike, **goals: Any) -> PlanningResult:
    return _mutate(driver_id, day, lambda s: s.set_daily_goals(goals), "Daily goals updated.")


def set_notes(driver_id: str, day: DateLike, notes: str) -> PlanningResult:
    return _mutate(driver_id, day, lambda s: s.set_notes(notes), "Notes updated.")


def add_reminder(driver_id: str, day: DateLike, at: str, message: str) -> PlanningResult:
    return _mutate(driver_id, day, lambda s: s.add_reminder(at, message), "Reminder added.")


def complete_reminder(driver_id: str, day: DateLike, index: int) -> PlanningResult:
    return _mutate(
        driver_id,
        day,
        lambda s: s.complete_reminder(int(index)),
        "Reminder completed.",
        create=False,
    )


def record_ride_outcomes(
    driver_id: str, day: DateLike, outcomes: list[dict]
) -> PlanningResult:
    """Recompute actual results from externally reported ride outcomes.

    Each outcome names its booking by ``external_ref`` or ``booking_index``.
    """

    def operation(schedule: DaySchedule):
        parsed = [RideOutcome(**o) for o in outcomes]
        return schedule.recompute_actual_results(schedule.completed_bookings(parsed))

    return _mutate(driver_id, day, operation, "Actual results recomputed.", create=False)


def apply_template(
    driver_id: str, template_id: str, start: DateLike, end: DateLike
) -> PlanningResult:
    """Set availability on every day of ``[start, end]`` from a template.

    Days are written one at a time; on failure the days already written
    stay written and are listed in the result.
    """
    set_driver_id(driver_id)
    template = get_template(template_id)
    if template is None:
        return {
            "success": False,
            "error": "not_found",
            "message": f"Unknown template {template_id!r}.",
        }
    try:
        first, last = _to_date(start), _to_date(end)
        calendar_range = _calendar(driver_id, first, last, None, None)
    except ValueError as exc:
        return _failure(exc)

    applied: list[str] = []
    for day in calendar_range:
        plan = template.for_date(day.day)
        result = _mutate(
            driver_id,
            day.day,
            lambda s: s.set_availability(s.availability_status, plan.work_window, plan.breaks),
            "Template applied.",
        )
        if not result["success"]:
            return {**result, "data": {"applied": applied}}
        applied.append(day.day.isoformat())

    logger.info("Template %s applied to %d day(s)", template.id, len(applied))
    return {
        "success": True,
        "message": f"Template '{template.name}' applied to {len(applied)} day(s).",
        "data": {"applied": applied},
    }
