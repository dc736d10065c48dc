"""
Domain layer - Pure business logic without external dependencies.
"""

from .availability_engine import AvailabilityEngine, compute_available_slots, sort_slots
from .exceptions import ConfigError, InputValidationError, SlotbookerError, UpstreamDataError
from .models import (
    AppointmentInterval,
    AvailableSlot,
    BlockingInterval,
    BusinessHourInterval,
    Interval,
    OverlapPolicy,
    SlotRequest,
    TimeOfDay,
)

__all__ = [
    "AppointmentInterval",
    "AvailabilityEngine",
    "AvailableSlot",
    "BlockingInterval",
    "BusinessHourInterval",
    "ConfigError",
    "InputValidationError",
    "Interval",
    "OverlapPolicy",
    "SlotRequest",
    "SlotbookerError",
    "TimeOfDay",
    "UpstreamDataError",
    "compute_available_slots",
    "sort_slots",
]
