"""
Adapters layer - External integrations (booking API, mock data).
"""

from .booking_api_client import BookingApiClient
from .mock_booking_client import MockBookingClient

__all__ = ["BookingApiClient", "MockBookingClient"]
