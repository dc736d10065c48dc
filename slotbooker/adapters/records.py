"""
Conversion between wire records and domain intervals.

The booking API serves each collection as a JSON array of
``{"start_time": "09:00 am", "end_time": "11:00 am"[, "quantity": 2]}``
records. ``quantity`` on a business-hour record is the window's capacity;
without it the window has capacity 0.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, List, Sequence, TypeVar

from pydantic import BaseModel, Field, StrictInt, ValidationError

from ..domain.exceptions import InputValidationError
from ..domain.models import (
    AppointmentInterval,
    AvailableSlot,
    BlockingInterval,
    BusinessHourInterval,
    TimeOfDay,
)

_T = TypeVar("_T")
_R = TypeVar("_R", bound="IntervalRecord")


class IntervalRecord(BaseModel):
    """Common shape of every interval record."""
    start_time: str
    end_time: str

    def bounds(self) -> tuple[TimeOfDay, TimeOfDay]:
        """Parse both ends; a closing "12:00 am" means end of day."""
        return TimeOfDay.parse(self.start_time), TimeOfDay.parse(self.end_time, as_end=True)


class BusinessHourRecord(IntervalRecord):
    """
    Business-hour record; ``quantity`` is how many bookings fit at once.

    A record without ``quantity`` has no capacity and never yields slots.
    """
    quantity: StrictInt = Field(default=0, ge=0)


def _parse_collection(
    name: str,
    records: Any,
    record_model: type[_R],
    build: Callable[[_R], _T],
) -> List[_T]:
    if records is None:
        return []
    if not isinstance(records, Sequence) or isinstance(records, (str, bytes)):
        raise InputValidationError(f"{name} must be a list of records, got {type(records).__name__}")

    intervals: List[_T] = []
    for index, raw in enumerate(records):
        try:
            record = record_model.model_validate(raw)
            intervals.append(build(record))
        except ValidationError as exc:
            raise InputValidationError(f"{name}[{index}] is malformed: {exc}") from exc
        except InputValidationError as exc:
            raise InputValidationError(f"{name}[{index}] is malformed: {exc}") from exc
    return intervals


def parse_business_hours(records: Any) -> List[BusinessHourInterval]:
    """Parse business-hour records into intervals carrying their capacity."""
    def build(record: BusinessHourRecord) -> BusinessHourInterval:
        start, end = record.bounds()
        return BusinessHourInterval(start=start, end=end, capacity=record.quantity)

    return _parse_collection("business_hours", records, BusinessHourRecord, build)


def parse_blocking_hours(records: Any) -> List[BlockingInterval]:
    """Parse blocking-hour records."""
    def build(record: IntervalRecord) -> BlockingInterval:
        start, end = record.bounds()
        return BlockingInterval(start=start, end=end)

    return _parse_collection("blocking_hours", records, IntervalRecord, build)


def parse_appointments(records: Any) -> List[AppointmentInterval]:
    """Parse appointment records."""
    def build(record: IntervalRecord) -> AppointmentInterval:
        start, end = record.bounds()
        return AppointmentInterval(start=start, end=end)

    return _parse_collection("appointments", records, IntervalRecord, build)


def slots_to_records(slots: Iterable[AvailableSlot]) -> List[Dict[str, str]]:
    """Render slots as ``{start_time, end_time}`` records."""
    return [slot.to_record() for slot in slots]
