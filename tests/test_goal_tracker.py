"""Tests for range summaries and goal progress."""

from datetime import timedelta

import pytest

from vtc_planner.schemas.planning_schema import AvailabilityStatus, RideOutcome, RideStatus
from vtc_planner.scheduling.day_schedule import DaySchedule
from tests.conftest import DRIVER, MONDAY, iv, make_day


class TestSummarizeRange:
    def test_empty_range(self, tracker):
        summary = tracker.summarize_range([])
        assert summary.total_days == 0
        assert summary.utilization_rate == 0

    def test_counts_and_totals(self, tracker):
        available = make_day()
        available.add_booking(iv("09:00", "12:00"), platform="uber")
        available.set_daily_goals({"target_rides": 10, "target_earnings": 200})
        off = make_day(day=MONDAY + timedelta(days=1), status=AvailabilityStatus.OFF)
        maintenance = make_day(
            day=MONDAY + timedelta(days=2), window=None, breaks=[],
            status=AvailabilityStatus.MAINTENANCE,
        )

        summary = tracker.summarize_range([available, off, maintenance])

        assert summary.total_days == 3
        assert summary.available_days == 1
        assert summary.off_days == 1
        assert summary.maintenance_days == 1
        assert summary.busy_days == 0
        assert summary.total_available_hours == 22
        assert summary.total_booked_hours == 3
        assert summary.total_target_rides == 10
        assert summary.total_target_earnings == 200
        assert summary.utilization_rate == 14

    def test_utilization_on_default_days(self, tracker):
        days = [DaySchedule.default(DRIVER, MONDAY + timedelta(days=i)) for i in range(2)]
        days[0].add_booking(iv("08:00", "14:00"), platform="uber")
        assert tracker.summarize_range(days).utilization_rate == 25

    def test_zero_available_hours_gives_zero_utilization(self, tracker):
        day = DaySchedule(driver_id=DRIVER, day=MONDAY)
        day.add_booking(iv("09:00", "17:00"), platform="uber")
        summary = tracker.summarize_range([day])
        assert summary.total_booked_hours == 8
        assert summary.utilization_rate == 0

    def test_utilization_rounds_half_up(self, tracker):
        day = make_day(window=("08:00", "16:00"), breaks=[])
        day.add_booking(iv("09:00", "10:00"), platform="uber")
        assert tracker.summarize_range([day]).utilization_rate == 13

    def test_utilization_can_exceed_hundred(self, tracker):
        day = make_day(window=("09:00", "10:00"), breaks=[])
        day.add_booking(iv("09:00", "11:00"), platform="uber")
        assert tracker.summarize_range([day]).utilization_rate == 200

    def test_accepts_any_iterable(self, tracker):
        summary = tracker.summarize_range(make_day(day=MONDAY + timedelta(days=i)) for i in range(3))
        assert summary.total_days == 3

    def test_actuals_and_progress(self, tracker):
        day = make_day()
        day.add_booking(iv("09:00", "10:00"), "uber", 40.0, external_ref="r1")
        day.set_daily_goals({"target_rides": 4, "target_earnings": 160})
        day.recompute_actual_results(day.completed_bookings([
            RideOutcome(external_ref="r1", status=RideStatus.COMPLETED),
        ]))

        summary = tracker.summarize_range([day])

        assert summary.total_actual_rides == 1
        assert summary.total_actual_earnings == 40
        assert summary.rides_progress == 25
        assert summary.earnings_progress == 25


class TestDayProgress:
    def test_no_goals_gives_zero_progress(self, tracker):
        progress = tracker.day_progress(make_day())
        assert progress.rides_progress == 0
        assert progress.earnings_progress == 0
        assert progress.hours_progress == 0

    def test_hours_progress(self, tracker):
        day = make_day()
        day.add_booking(iv("09:00", "12:00"), "uber", external_ref="r1")
        day.set_daily_goals({"target_hours": 6})
        day.recompute_actual_results(day.completed_bookings([
            RideOutcome(external_ref="r1", status=RideStatus.COMPLETED),
        ]))
        assert tracker.day_progress(day).hours_progress == 50

    def test_progress_rounds_half_up(self, tracker):
        day = make_day()
        day.add_booking(iv("09:00", "10:00"), "uber", external_ref="r1")
        day.set_daily_goals({"target_hours": 8})
        day.recompute_actual_results(day.completed_bookings([
            RideOutcome(external_ref="r1", status=RideStatus.COMPLETED),
        ]))
        assert tracker.day_progress(day).hours_progress == 13


class TestFormatReport:
    def test_report_contains_sections(self, tracker):
        report = tracker.format_report(tracker.summarize_range([make_day()]))
        assert "DRIVER PLANNING SUMMARY" in report
        assert "Utilization rate:       0%" in report
        assert "Available hours:        11.0" in report

    @pytest.mark.parametrize("section", ["DAYS", "CAPACITY", "GOALS", "RESULTS"])
    def test_report_sections(self, tracker, section):
        assert section in tracker.format_report(tracker.summarize_range([]))
