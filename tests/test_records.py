"""
Tests for wire record conversion.
"""

import pytest

from slotbooker.adapters.records import (
    parse_appointments,
    parse_blocking_hours,
    parse_business_hours,
    slots_to_records,
)
from slotbooker.domain.availability_engine import compute_available_slots
from slotbooker.domain.exceptions import InputValidationError
from slotbooker.domain.models import (
    AppointmentInterval,
    AvailableSlot,
    BlockingInterval,
    BusinessHourInterval,
    TimeOfDay,
)


def test_parse_business_hours_uses_quantity_as_capacity():
    """Business-hour quantity becomes the window's capacity."""
    windows = parse_business_hours([
        {"start_time": "09:00 am", "end_time": "12:00 pm", "quantity": 3},
        {"start_time": "01:00 pm", "end_time": "05:00 pm"},
    ])

    assert windows == [
        BusinessHourInterval(start=TimeOfDay(540), end=TimeOfDay(720), capacity=3),
        BusinessHourInterval(start=TimeOfDay(780), end=TimeOfDay(1020), capacity=0),
    ]


def test_business_hours_without_quantity_offer_no_slots():
    """A window that does not state its quantity cannot be booked."""
    windows = parse_business_hours([{"start_time": "09:00 am", "end_time": "11:00 am"}])

    assert compute_available_slots(60, 1, windows) == []


def test_parse_ignores_extra_fields():
    """Records may carry fields the engine does not use."""
    blocks = parse_blocking_hours([
        {"id": 7, "start_time": "10:15 am", "end_time": "10:45 am", "reason": "break"},
    ])

    assert blocks == [BlockingInterval(start=TimeOfDay(615), end=TimeOfDay(645))]


def test_parse_appointments_closing_at_midnight():
    """An end time of 12:00 am closes at the end of the day."""
    appointments = parse_appointments([{"start_time": "11:00 pm", "end_time": "12:00 am"}])

    assert appointments == [AppointmentInterval(start=TimeOfDay(1380), end=TimeOfDay(1440))]


def test_parse_empty_and_missing_collections():
    assert parse_business_hours([]) == []
    assert parse_appointments(None) == []


@pytest.mark.parametrize(
    "records, match",
    [
        ([{"start_time": "09:00 am"}], r"business_hours\[0\]"),
        ([{"start_time": "09:00 am", "end_time": "10:00 am"}, {"start_time": "11:00 am", "end_time": "10:00 am"}], r"business_hours\[1\]"),
        ([{"start_time": "9 o'clock", "end_time": "10:00 am"}], r"business_hours\[0\]"),
        ([{"start_time": "09:00 am", "end_time": "10:00 am", "quantity": -1}], r"business_hours\[0\]"),
        ([{"start_time": "09:00 am", "end_time": "10:00 am", "quantity": True}], r"business_hours\[0\]"),
        ([{"start_time": "09:00 am", "end_time": "10:00 am", "quantity": "2"}], r"business_hours\[0\]"),
        ([{"start_time": 900, "end_time": "10:00 am"}], r"business_hours\[0\]"),
        (["09:00 am - 10:00 am"], r"business_hours\[0\]"),
    ],
)
def test_malformed_records_raise_input_validation_error(records, match):
    """Malformed records are reported with their collection and index."""
    with pytest.raises(InputValidationError, match=match):
        parse_business_hours(records)


def test_collection_must_be_a_list():
    with pytest.raises(InputValidationError):
        parse_blocking_hours({"start_time": "09:00 am", "end_time": "10:00 am"})
    with pytest.raises(InputValidationError):
        parse_appointments("09:00 am")


def test_slots_to_records():
    slots = [
        AvailableSlot(start=TimeOfDay(540), end=TimeOfDay(600)),
        AvailableSlot(start=TimeOfDay(750), end=TimeOfDay(810)),
    ]

    assert slots_to_records(slots) == [
        {"start_time": "09:00 am", "end_time": "10:00 am"},
        {"start_time": "12:30 pm", "end_time": "01:30 pm"},
    ]
