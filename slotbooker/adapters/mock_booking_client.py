"""
Mock booking API client for running without network access.
"""

import json
import logging
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..domain.exceptions import UpstreamDataError
from ..domain.models import AppointmentInterval, BlockingInterval, BusinessHourInterval
from .records import parse_appointments, parse_blocking_hours, parse_business_hours

logger = logging.getLogger(__name__)

BUNDLED_DATA_FILE = Path(__file__).parent / "mock_schedule_data.json"


class MockBookingClient:
    """
    Mock client that serves the three day-schedule collections from JSON.

    The document looks like::

        {"business_hours": [...], "blocking_hours": [...], "appointments": [...]}

    A missing key is served as an empty collection.
    """

    def __init__(self, data_file: Optional[Path] = None):
        """
        Initialize the mock client.

        Args:
            data_file: JSON document to serve. Defaults to the bundled sample day.
        """
        self.data_file = Path(data_file) if data_file else BUNDLED_DATA_FILE
        self._document: Optional[Dict[str, Any]] = None
        self._lock = threading.Lock()

    def get_business_hours(self) -> List[BusinessHourInterval]:
        return parse_business_hours(self._get_collection("business_hours"))

    def get_blocking_hours(self) -> List[BlockingInterval]:
        return parse_blocking_hours(self._get_collection("blocking_hours"))

    def get_appointments(self) -> List[AppointmentInterval]:
        return parse_appointments(self._get_collection("appointments"))

    def _get_collection(self, collection: str) -> List[Any]:
        document = self._load(collection)
        records = document.get(collection, [])
        if not isinstance(records, list):
            raise UpstreamDataError(
                collection,
                f"expected a JSON array in {self.data_file}, got {type(records).__name__}",
            )
        return records

    def _load(self, collection: str) -> Dict[str, Any]:
        # Service fetches run in worker threads; read the file once
        with self._lock:
            if self._document is not None:
                return self._document

            try:
                with open(self.data_file, "r", encoding="utf-8") as f:
                    document = json.load(f)
            except OSError as e:
                raise UpstreamDataError(collection, f"cannot read {self.data_file}: {e}") from e
            except json.JSONDecodeError as e:
                raise UpstreamDataError(collection, f"invalid JSON in {self.data_file}: {e}") from e

            if not isinstance(document, dict):
                raise UpstreamDataError(collection, f"{self.data_file} must contain a JSON object")

            logger.debug("Loaded mock schedule from %s", self.data_file)
            self._document = document
            return document
