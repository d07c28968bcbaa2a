"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .session_finder import (
    BookingClientProtocol,
    OfferingClientProtocol,
    OfferingSchedule,
    SessionFinderService,
)

__all__ = [
    "BookingClientProtocol",
    "OfferingClientProtocol",
    "OfferingSchedule",
    "SessionFinderService",
]
