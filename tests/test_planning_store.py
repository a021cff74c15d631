"""Tests for the in-memory planning store."""

import pytest

from vtc_planner.errors import ConcurrentModificationError
from vtc_planner.tools import planning_store
from tests.conftest import DRIVER, MONDAY, iv, make_day


class TestPlanningStore:
    def test_lookup_missing_day(self):
        assert planning_store.lookup(DRIVER, MONDAY) is None

    def test_persist_then_lookup(self):
        day = make_day()
        day.add_booking(iv("09:00", "10:00"), "uber", 25.0, external_ref="r1")
        stored = planning_store.persist(day)

        loaded = planning_store.lookup(DRIVER, MONDAY)

        assert stored.version == 1
        assert loaded == stored
        assert loaded.bookings[0].external_ref == "r1"
        assert not loaded.synthesized

    def test_lookup_returns_independent_copies(self):
        planning_store.persist(make_day())
        copy = planning_store.lookup(DRIVER, MONDAY)
        copy.add_booking(iv("09:00", "10:00"), platform="uber")
        assert planning_store.lookup(DRIVER, MONDAY).bookings == []

    def test_version_increments(self):
        planning_store.persist(make_day())
        day = planning_store.lookup(DRIVER, MONDAY)
        assert planning_store.persist(day).version == 2

    def test_stale_write_rejected(self):
        planning_store.persist(make_day())
        first = planning_store.lookup(DRIVER, MONDAY)
        second = planning_store.lookup(DRIVER, MONDAY)

        first.add_booking(iv("09:00", "10:00"), platform="uber")
        planning_store.persist(first)

        second.add_booking(iv("09:30", "10:30"), platform="bolt")
        with pytest.raises(ConcurrentModificationError):
            planning_store.persist(second)

        stored = planning_store.lookup(DRIVER, MONDAY)
        assert [str(b.interval) for b in stored.bookings] == ["09:00-10:00"]

    def test_second_create_of_same_day_rejected(self):
        planning_store.persist(make_day())
        with pytest.raises(ConcurrentModificationError):
            planning_store.persist(make_day())

    def test_days_are_keyed_by_driver(self):
        planning_store.persist(make_day(driver_id="driver-2"))
        assert planning_store.lookup(DRIVER, MONDAY) is None
        assert planning_store.stored_dates("driver-2") == [MONDAY]

    def test_load_records(self):
        count = planning_store.load_records([
            {
                "driver_id": DRIVER,
                "day": "2025-03-17",
                "availability_status": "busy",
                "work_window": {"start": "08:00", "end": "18:00"},
                "bookings": [
                    {"interval": {"start": "09:00", "end": "10:00"}, "platform": "uber"},
                ],
            },
        ])
        assert count == 1
        day = planning_store.lookup(DRIVER, MONDAY)
        assert day.availability_status == "busy"
        assert day.total_booked_hours() == 1
