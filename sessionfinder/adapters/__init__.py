"""
Adapters layer - Offering data source and booking submission.
"""

from .booking_client import BookingClient
from .mock_offering_client import InMemoryBookingClient, MockOfferingClient
from .offering_client import OfferingClient

__all__ = ["BookingClient", "InMemoryBookingClient", "MockOfferingClient", "OfferingClient"]
