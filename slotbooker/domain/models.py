"""
Domain models for time-of-day values, intervals and bookable slots.

All times live on one implicit reference day and are stored as integer
minutes since midnight. Parsing and formatting of the wire representation
("09:00 am") happens only at the boundary.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

import pendulum

from .exceptions import InputValidationError

MINUTES_PER_DAY = 24 * 60

# Fixed calendar day the wire times are anchored to
REFERENCE_DAY = "2023-08-05"
WIRE_FORMAT = "hh:mm A"

_WIRE_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})\s*([AP]M)$")


def _require_int(name: str, value: object, minimum: int) -> int:
    """Reject non-integers (including bools) and values below ``minimum``."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InputValidationError(f"{name} must be an integer, got {value!r}")
    if value < minimum:
        raise InputValidationError(f"{name} must be at least {minimum}, got {value}")
    return value


@dataclass(frozen=True, order=True)
class TimeOfDay:
    """
    A minute-precision time on the reference day.

    Invariant: 0 <= minutes <= 1440. The value 1440 (24:00) is only
    meaningful as the end of an interval.
    """
    minutes: int

    def __post_init__(self):
        if isinstance(self.minutes, bool) or not isinstance(self.minutes, int):
            raise InputValidationError(f"Minutes must be an integer, got {self.minutes!r}")
        if not 0 <= self.minutes <= MINUTES_PER_DAY:
            raise InputValidationError(
                f"Time of day must be between 00:00 and 24:00, got {self.minutes} minutes"
            )

    @classmethod
    def from_hm(cls, hour: int, minute: int = 0) -> "TimeOfDay":
        """Build a time from a 24-hour clock hour and minute."""
        return cls(hour * 60 + minute)

    @classmethod
    def parse(cls, value: str, *, as_end: bool = False) -> "TimeOfDay":
        """
        Parse a wire time such as ``"09:00 am"`` or ``"1:30PM"``.

        With ``as_end`` set, midnight (``"12:00 am"``) is read as 24:00 so
        that a window may close at the end of the day.

        Raises:
            InputValidationError: If the value is not a valid wire time
        """
        if not isinstance(value, str):
            raise InputValidationError(f"Time must be a string, got {value!r}")

        match = _WIRE_PATTERN.match(value.strip().upper())
        if not match:
            raise InputValidationError(
                f"Invalid time '{value}'. Expected format like '09:00 am'."
            )

        hour, minute, meridiem = int(match.group(1)), int(match.group(2)), match.group(3)
        if not 1 <= hour <= 12 or minute > 59:
            raise InputValidationError(f"Invalid time '{value}': hour or minute out of range")

        # 12 am is midnight, 12 pm is noon
        hour %= 12
        if meridiem == "PM":
            hour += 12

        minutes = hour * 60 + minute
        if as_end and minutes == 0:
            minutes = MINUTES_PER_DAY
        return cls(minutes)

    def format(self) -> str:
        """Render in the wire format, e.g. ``"09:00 am"``."""
        moment = pendulum.parse(REFERENCE_DAY).add(minutes=self.minutes)
        return moment.format(WIRE_FORMAT).lower()

    def add(self, minutes: int) -> "TimeOfDay":
        """Return a new time ``minutes`` later."""
        return TimeOfDay(self.minutes + minutes)

    def __str__(self) -> str:
        return self.format()


@dataclass(frozen=True)
class Interval:
    """
    Half-open time window ``[start, end)`` on the reference day.

    Invariant: start must be before end.
    """
    start: TimeOfDay
    end: TimeOfDay

    def __post_init__(self):
        for name in ("start", "end"):
            if not isinstance(getattr(self, name), TimeOfDay):
                raise InputValidationError(
                    f"{type(self).__name__}.{name} must be a TimeOfDay, "
                    f"got {getattr(self, name)!r}"
                )
        if self.start >= self.end:
            raise InputValidationError(
                f"Start time {self.start} must be before end time {self.end}"
            )

    def duration_minutes(self) -> int:
        """Return the duration in minutes."""
        return self.end.minutes - self.start.minutes

    def contains(self, moment: TimeOfDay) -> bool:
        """Check if ``moment`` lies in ``[start, end)``."""
        return self.start <= moment < self.end

    def overlaps(self, other: "Interval") -> bool:
        """Check if this window shares any minute with another."""
        return self.start < other.end and self.end > other.start

    def __str__(self) -> str:
        return f"{self.start} - {self.end}"


@dataclass(frozen=True)
class BusinessHourInterval(Interval):
    """An open window together with the number of bookings it can hold at once."""
    capacity: int = 1

    def __post_init__(self):
        super().__post_init__()
        _require_int("capacity", self.capacity, 0)


@dataclass(frozen=True)
class BlockingInterval(Interval):
    """A blackout window (holiday, break) in which no booking may start."""


@dataclass(frozen=True)
class AppointmentInterval(Interval):
    """An existing booking."""


@dataclass(frozen=True)
class SlotRequest:
    """Desired slot length in minutes and number of concurrent resources."""
    duration: int
    quantity: int = 1

    def __post_init__(self):
        _require_int("duration", self.duration, 1)
        _require_int("quantity", self.quantity, 1)


@dataclass(frozen=True)
class AvailableSlot(Interval):
    """
    A bookable slot found by the engine.

    Always built fresh from the candidate's start and end.
    """

    def to_record(self) -> dict:
        """Render as a ``{start_time, end_time}`` wire record."""
        return {"start_time": self.start.format(), "end_time": self.end.format()}


class OverlapPolicy(str, Enum):
    """
    How blocking hours and appointments reject a candidate.

    POINT checks whether the candidate's start (and, for appointments, its
    end) falls inside the other window. INTERVAL rejects any candidate that
    shares a minute with the other window.
    """
    POINT = "point"
    INTERVAL = "interval"
