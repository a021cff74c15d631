"""Tests for the booking conflict check."""

from vtc_planner.schemas.planning_schema import Booking
from tests.conftest import iv


def _bookings(*ranges: tuple[str, str]) -> list[Booking]:
    return [Booking(interval=iv(s, e), platform="uber") for s, e in ranges]


class TestConflictChecker:
    def test_empty_day_accepts(self, checker):
        assert checker.can_accept(iv("09:00", "10:00"), [])

    def test_back_to_back_accepted(self, checker):
        existing = _bookings(("09:00", "10:00"), ("11:00", "12:00"))
        assert checker.can_accept(iv("10:00", "11:00"), existing)

    def test_partial_overlap_rejected(self, checker):
        assert not checker.can_accept(iv("09:30", "10:30"), _bookings(("09:00", "10:00")))

    def test_containing_candidate_rejected(self, checker):
        assert not checker.can_accept(iv("08:00", "12:00"), _bookings(("09:00", "10:00")))

    def test_contained_candidate_rejected(self, checker):
        assert not checker.can_accept(iv("09:15", "09:45"), _bookings(("09:00", "10:00")))

    def test_find_conflicts_lists_every_overlap_in_order(self, checker):
        existing = _bookings(("09:00", "10:00"), ("10:00", "11:00"), ("13:00", "14:00"))
        conflicts = checker.find_conflicts(iv("09:30", "10:30"), existing)
        assert [str(c.interval) for c in conflicts] == ["09:00-10:00", "10:00-11:00"]
