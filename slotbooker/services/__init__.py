"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .availability_service import (
    AvailabilityService,
    BookingClientProtocol,
    DaySchedule,
    UpstreamErrorPolicy,
)

__all__ = ["AvailabilityService", "BookingClientProtocol", "DaySchedule", "UpstreamErrorPolicy"]
