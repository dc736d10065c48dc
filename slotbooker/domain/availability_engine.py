"""
Core business logic for calculating bookable appointment slots.

Pure domain logic: no I/O, no shared state. Every call reads only its own
inputs and builds fresh AvailableSlot values.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Sequence, Tuple, Type, TypeVar

from .exceptions import InputValidationError
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

logger = logging.getLogger(__name__)

DEFAULT_STEP_MINUTES = 30

_IntervalT = TypeVar("_IntervalT", bound=Interval)


class AvailabilityEngine:
    """
    Enumerates candidate slots per business-hour window and filters them.

    Algorithm, for each business-hour window in input order:
    1. Start a cursor at the window's start
    2. While the candidate [cursor, cursor + duration) fits in the window:
       reject it if a block, an appointment or the window's capacity says so,
       otherwise emit it
    3. Advance the cursor by the fixed step (not by the duration)
    4. Concatenate the per-window results without sorting or deduplication
    """

    def __init__(
        self,
        step_minutes: int = DEFAULT_STEP_MINUTES,
        policy: OverlapPolicy = OverlapPolicy.POINT,
    ):
        if isinstance(step_minutes, bool) or not isinstance(step_minutes, int) or step_minutes <= 0:
            raise InputValidationError(f"step_minutes must be a positive integer, got {step_minutes!r}")
        self.step_minutes = step_minutes
        self.policy = OverlapPolicy(policy)

    def find_available_slots(
        self,
        request: SlotRequest,
        business_hours: Iterable[BusinessHourInterval],
        blocking_hours: Iterable[BlockingInterval] = (),
        appointments: Iterable[AppointmentInterval] = (),
    ) -> List[AvailableSlot]:
        """
        Find every bookable slot for the request.

        Args:
            request: Desired duration and quantity
            business_hours: Open windows with their capacity, any order
            blocking_hours: Blackout windows, any order
            appointments: Existing bookings, any order

        Returns:
            Slots in discovery order. An empty list means nothing fits.

        Raises:
            InputValidationError: If any collection holds a value of the wrong type
        """
        windows = self._check_collection("business_hours", business_hours, BusinessHourInterval)
        blocks = self._check_collection("blocking_hours", blocking_hours, BlockingInterval)
        booked = self._check_collection("appointments", appointments, AppointmentInterval)

        slots: List[AvailableSlot] = []
        for window in windows:
            slots.extend(self._slots_for_window(window, request, blocks, booked))

        logger.debug(
            "Found %d slot(s) for duration=%d quantity=%d across %d window(s)",
            len(slots), request.duration, request.quantity, len(windows),
        )
        return slots

    def _slots_for_window(
        self,
        window: BusinessHourInterval,
        request: SlotRequest,
        blocks: Sequence[BlockingInterval],
        booked: Sequence[AppointmentInterval],
    ) -> List[AvailableSlot]:
        """Generate and filter the candidates of one business-hour window."""
        slots: List[AvailableSlot] = []

        if window.capacity < request.quantity:
            logger.debug(
                "Window %s has capacity %d, below requested quantity %d",
                window, window.capacity, request.quantity,
            )
            return slots

        cursor = window.start.minutes
        last_start = window.end.minutes - request.duration

        while cursor <= last_start:
            candidate = AvailableSlot(
                start=TimeOfDay(cursor),
                end=TimeOfDay(cursor + request.duration),
            )

            if self._is_blocked(candidate, blocks):
                logger.debug("Rejected %s: blocked", candidate)
            elif self._is_overlapping(candidate, booked):
                logger.debug("Rejected %s: overlaps an appointment", candidate)
            else:
                slots.append(candidate)

            cursor += self.step_minutes

        return slots

    def _is_blocked(self, candidate: AvailableSlot, blocks: Sequence[BlockingInterval]) -> bool:
        if self.policy is OverlapPolicy.INTERVAL:
            return any(candidate.overlaps(block) for block in blocks)
        return any(block.contains(candidate.start) for block in blocks)

    def _is_overlapping(
        self,
        candidate: AvailableSlot,
        booked: Sequence[AppointmentInterval],
    ) -> bool:
        if self.policy is OverlapPolicy.INTERVAL:
            return any(candidate.overlaps(appointment) for appointment in booked)
        return any(
            appointment.contains(candidate.start) or appointment.contains(candidate.end)
            for appointment in booked
        )

    @staticmethod
    def _check_collection(
        name: str,
        items: Iterable[_IntervalT],
        kind: Type[_IntervalT],
    ) -> Tuple[_IntervalT, ...]:
        """Materialize a collection, failing fast on foreign values."""
        if items is None:
            return ()

        materialized = tuple(items)
        for index, item in enumerate(materialized):
            if not isinstance(item, kind):
                raise InputValidationError(
                    f"{name}[{index}] must be a {kind.__name__}, got {type(item).__name__}"
                )
        return materialized


def compute_available_slots(
    duration: int,
    quantity: int,
    business_hours: Iterable[BusinessHourInterval],
    blocking_hours: Iterable[BlockingInterval] = (),
    appointments: Iterable[AppointmentInterval] = (),
    *,
    step_minutes: int = DEFAULT_STEP_MINUTES,
    policy: OverlapPolicy = OverlapPolicy.POINT,
) -> List[AvailableSlot]:
    """Convenience wrapper building a request and a one-off engine."""
    request = SlotRequest(duration=duration, quantity=quantity)
    engine = AvailabilityEngine(step_minutes=step_minutes, policy=policy)
    return engine.find_available_slots(request, business_hours, blocking_hours, appointments)


def sort_slots(slots: Iterable[AvailableSlot]) -> List[AvailableSlot]:
    """Chronological order by start, then end. Ties keep their order."""
    return sorted(slots, key=lambda slot: (slot.start, slot.end))
