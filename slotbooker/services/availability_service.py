"""
Application service for finding bookable slots.

The service fetches the three day-schedule collections through a booking
client adapter, reconciles partial failures, and only then hands complete
data to the domain-level ``AvailabilityEngine``. The engine is never called
with partially fetched state.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Protocol, Sequence, Tuple

from ..domain.availability_engine import AvailabilityEngine
from ..domain.exceptions import UpstreamDataError
from ..domain.models import (
    AppointmentInterval,
    AvailableSlot,
    BlockingInterval,
    BusinessHourInterval,
    SlotRequest,
)

logger = logging.getLogger(__name__)


class BookingClientProtocol(Protocol):
    """Protocol describing the client behaviour needed by the service."""

    def get_business_hours(self) -> List[BusinessHourInterval]:
        """Return the open windows with their capacity."""

    def get_blocking_hours(self) -> List[BlockingInterval]:
        """Return the blackout windows."""

    def get_appointments(self) -> List[AppointmentInterval]:
        """Return the existing bookings."""


class UpstreamErrorPolicy(str, Enum):
    """What to do when a collection cannot be fetched."""
    ABORT = "abort"
    EMPTY = "empty"


@dataclass(frozen=True)
class DaySchedule:
    """Fully materialized inputs for one engine call."""
    business_hours: Sequence[BusinessHourInterval] = field(default_factory=tuple)
    blocking_hours: Sequence[BlockingInterval] = field(default_factory=tuple)
    appointments: Sequence[AppointmentInterval] = field(default_factory=tuple)


class AvailabilityService:
    """
    Orchestrates schedule retrieval and slot calculation.

    Dependency inversion toward a protocol makes it easy to plug in the real
    HTTP adapter or the mock implementation in tests.
    """

    def __init__(
        self,
        booking_client: BookingClientProtocol,
        engine: AvailabilityEngine,
        on_upstream_error: UpstreamErrorPolicy = UpstreamErrorPolicy.ABORT,
    ) -> None:
        self._booking_client = booking_client
        self._engine = engine
        self._on_upstream_error = UpstreamErrorPolicy(on_upstream_error)

    async def find_slots(self, *, duration: int, quantity: int) -> List[AvailableSlot]:
        """
        Validate the request, fetch the schedule and compute available slots.

        Raises:
            InputValidationError: If the request or a fetched interval is malformed
            UpstreamDataError: If a collection could not be fetched and the
                policy does not allow substituting it
        """
        request = SlotRequest(duration=duration, quantity=quantity)
        schedule = await self.fetch_schedule()
        return self.calculate_slots(request=request, schedule=schedule)

    async def fetch_schedule(self) -> DaySchedule:
        """Fetch the three collections concurrently and reconcile failures."""
        results = await asyncio.gather(
            asyncio.to_thread(self._booking_client.get_business_hours),
            asyncio.to_thread(self._booking_client.get_blocking_hours),
            asyncio.to_thread(self._booking_client.get_appointments),
            return_exceptions=True,
        )

        business_hours, blocking_hours, appointments = self._reconcile(
            ("business_hours", "blocking_hours", "appointments"),
            results,
        )
        return DaySchedule(
            business_hours=tuple(business_hours),
            blocking_hours=tuple(blocking_hours),
            appointments=tuple(appointments),
        )

    def calculate_slots(self, *, request: SlotRequest, schedule: DaySchedule) -> List[AvailableSlot]:
        """Calculate available slots from a complete schedule."""
        return self._engine.find_available_slots(
            request,
            schedule.business_hours,
            schedule.blocking_hours,
            schedule.appointments,
        )

    def _reconcile(self, names: Tuple[str, ...], results: Sequence[object]) -> List[list]:
        """
        Turn gathered results into collections or raise.

        Business hours are never substituted: an empty stand-in would look
        like a closed day instead of a failure.
        """
        collections: List[list] = []

        for name, result in zip(names, results):
            if not isinstance(result, BaseException):
                collections.append(list(result))
                continue

            if (
                isinstance(result, UpstreamDataError)
                and self._on_upstream_error is UpstreamErrorPolicy.EMPTY
                and name != "business_hours"
            ):
                logger.warning("Using an empty %s collection: %s", name, result)
                collections.append([])
                continue

            raise result

        return collections
