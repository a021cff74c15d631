"""Tests for import chains and module integrity.

Ensures all public modules can be imported without errors and
that re-exports from __init__.py files work correctly.
"""


class TestSchemaImports:
    def test_import_planning_schema(self):
        from vtc_planner.schemas.planning_schema import (
            AvailabilityStatus, Booking, Interval, RideStatus,
        )
        assert AvailabilityStatus.OFF == "off"
        assert RideStatus.COMPLETED == "completed"
        assert Booking is not None
        assert Interval is not None


class TestSchedulingImports:
    def test_package_reexports(self):
        from vtc_planner.scheduling import (
            CalendarRange, ConflictChecker, DaySchedule, GoalTracker,
            RangeSummary, assemble, overlaps,
        )
        assert callable(assemble)
        assert callable(overlaps)
        assert GoalTracker().summarize_range([]) == RangeSummary()
        assert ConflictChecker is not None
        assert DaySchedule is not None
        assert CalendarRange is not None

    def test_import_templates(self):
        from vtc_planner.scheduling.templates import TEMPLATES
        assert len(TEMPLATES) == 3


class TestToolImports:
    def test_import_planning_tools(self):
        from vtc_planner.tools.planning import add_booking, get_calendar
        assert callable(add_booking)
        assert callable(get_calendar)

    def test_import_store(self):
        from vtc_planner.tools.planning_store import lookup, persist, reset
        assert callable(lookup) and callable(persist) and callable(reset)


class TestErrorHierarchy:
    def test_all_errors_share_a_base(self):
        from vtc_planner.errors import (
            ConcurrentModificationError, IndexOutOfRangeError, InvalidIntervalError,
            NoAvailableWindowError, PlanningError, SlotConflictError,
            UnsupportedPlatformError,
        )
        for error in (
            ConcurrentModificationError, IndexOutOfRangeError, InvalidIntervalError,
            NoAvailableWindowError, SlotConflictError, UnsupportedPlatformError,
        ):
            assert issubclass(error, PlanningError)
            assert error.kind != PlanningError.kind
