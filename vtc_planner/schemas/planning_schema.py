"""Planning data models: intervals, bookings, goals, results, and sync flags."""

from datetime import datetime, time
from enum import Enum
from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)

from vtc_planner.errors import InvalidIntervalError
from vtc_planner.utils import minutes_of_day, parse_time_of_day


class AvailabilityStatus(str, Enum):
    """Advisory status of a driver's day. Any status may follow any other."""

    AVAILABLE = "available"
    BUSY = "busy"
    OFF = "off"
    MAINTENANCE = "maintenance"


class RideStatus(str, Enum):
    """External lifecycle status of a ride, supplied by the caller."""

    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no_show"


class Interval(BaseModel):
    """Half-open wall-clock range ``[start, end)`` within a single day."""

    model_config = ConfigDict(frozen=True)

    start: time
    end: time

    @field_validator("start", "end", mode="before")
    @classmethod
    def _parse_time(cls, value):
        if isinstance(value, (str, time)):
            try:
                return parse_time_of_day(value)
            except ValueError:
                raise InvalidIntervalError(f"Not a HH:MM time: {value!r}") from None
        return value

    @model_validator(mode="after")
    def _check_order(self) -> "Interval":
        if self.start >= self.end:
            raise InvalidIntervalError(
                f"Interval start must be before end, got "
                f"{self.start:%H:%M}-{self.end:%H:%M}"
            )
        return self

    @field_serializer("start", "end", when_used="json")
    def _dump_time(self, value: time) -> str:
        return value.strftime("%H:%M")

    @classmethod
    def parse(cls, start: str, end: str) -> "Interval":
        """Build an interval from ``HH:MM`` strings."""
        return cls(start=start, end=end)

    @property
    def duration_minutes(self) -> int:
        return minutes_of_day(self.end) - minutes_of_day(self.start)

    @property
    def duration_hours(self) -> float:
        return self.duration_minutes / 60

    def overlaps(self, other: "Interval") -> bool:
        """True when the two ranges share interior time. Touching is not overlap."""
        return self.start < other.end and other.start < self.end

    def contains(self, other: "Interval") -> bool:
        """True when ``other`` lies entirely inside this range."""
        return self.start <= other.start and other.end <= self.end

    def __str__(self) -> str:
        return f"{self.start:%H:%M}-{self.end:%H:%M}"


class BreakTime(Interval):
    """A break inside the work window."""

    reason: str = ""


class Booking(BaseModel):
    """A booked ride slot owned by one DaySchedule."""

    interval: Interval
    platform: str
    estimated_earnings: float = Field(default=0.0, ge=0)
    external_ref: Optional[str] = None


class DailyGoals(BaseModel):
    """Planned targets for the day."""

    target_rides: int = Field(default=0, ge=0)
    target_earnings: float = Field(default=0.0, ge=0)
    target_hours: float = Field(default=0.0, ge=0)
    preferred_zones: set[str] = Field(default_factory=set)


class ActualResults(BaseModel):
    """Cached results derived from completed bookings."""

    total_rides: int = 0
    total_earnings: float = 0.0
    total_hours: float = 0.0
    average_rating: float = 0.0


class PlatformSyncState(BaseModel):
    """Online/offline flag for one external platform on one day."""

    is_online: bool = False
    last_sync: Optional[datetime] = None


class Reminder(BaseModel):
    """Informational reminder; carries no scheduling invariant."""

    at: time
    message: str
    is_completed: bool = False

    @field_validator("at", mode="before")
    @classmethod
    def _parse_time(cls, value):
        if isinstance(value, str):
            return parse_time_of_day(value)
        return value


class RideOutcome(BaseModel):
    """External status report for the ride behind a booking.

    The booking is identified by its ``external_ref`` or, for bookings
    entered without one, by its position in the day's booking list.
    """

    external_ref: Optional[str] = None
    booking_index: Optional[int] = Field(default=None, ge=0)
    status: RideStatus
    actual_earnings: Optional[float] = Field(default=None, ge=0)
    rating: Optional[float] = Field(default=None, ge=0, le=5)

    @model_validator(mode="after")
    def _check_target(self) -> "RideOutcome":
        if self.external_ref is None and self.booking_index is None:
            raise ValueError("Ride outcome needs an external_ref or a booking_index")
        return self


class CompletedBooking(BaseModel):
    """A booking paired with what actually happened on the ride."""

    booking: Booking
    actual_earnings: Optional[float] = Field(default=None, ge=0)
    rating: Optional[float] = Field(default=None, ge=0, le=5)
