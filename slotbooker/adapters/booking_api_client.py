"""
HTTP client for the booking API serving business hours, blocking hours and
appointments.
"""

from __future__ import annotations

import logging
from typing import Any, List

import requests

from ..domain.exceptions import UpstreamDataError
from ..domain.models import AppointmentInterval, BlockingInterval, BusinessHourInterval
from .records import parse_appointments, parse_blocking_hours, parse_business_hours

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://api.internship.appointy.com:8000"


class BookingApiClient:
    """
    Client for the booking API's day-schedule collections.

    Each collection is a JSON array of ``{start_time, end_time[, quantity]}``
    records for the reference day.
    """

    BUSINESS_HOURS_PATH = "/v1/business-hours"
    BLOCKING_HOURS_PATH = "/v1/block-hours"
    APPOINTMENTS_PATH = "/v1/appointments"

    def __init__(self, base_url: str = DEFAULT_BASE_URL, timeout: float = 10.0):
        """
        Initialize the API client.

        Args:
            base_url: Scheme, host and port of the booking API
            timeout: Per-request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.headers = {"Accept": "application/json"}

    def get_business_hours(self) -> List[BusinessHourInterval]:
        """Fetch the open windows with their capacity."""
        return parse_business_hours(self._get_collection("business_hours", self.BUSINESS_HOURS_PATH))

    def get_blocking_hours(self) -> List[BlockingInterval]:
        """Fetch the blackout windows."""
        return parse_blocking_hours(self._get_collection("blocking_hours", self.BLOCKING_HOURS_PATH))

    def get_appointments(self) -> List[AppointmentInterval]:
        """Fetch the existing bookings."""
        return parse_appointments(self._get_collection("appointments", self.APPOINTMENTS_PATH))

    def _get_collection(self, collection: str, path: str) -> List[Any]:
        """
        GET one collection and return its raw records.

        Raises:
            UpstreamDataError: On transport errors, HTTP errors or a payload
                that is not a JSON array
        """
        url = f"{self.base_url}{path}"
        logger.debug("Fetching %s from %s", collection, url)

        try:
            response = requests.get(url, headers=self.headers, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as e:
            raise UpstreamDataError(collection, str(e)) from e
        except ValueError as e:
            raise UpstreamDataError(collection, f"response is not valid JSON: {e}") from e

        if not isinstance(data, list):
            raise UpstreamDataError(
                collection,
                f"expected a JSON array, got {type(data).__name__}",
            )

        logger.debug("Fetched %d %s record(s)", len(data), collection)
        return data
