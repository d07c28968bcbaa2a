"""
Domain-specific exception hierarchy for the session finder application.
"""


class SessionFinderError(Exception):
    """Base class for all application-level errors."""


class OfferingDataError(SessionFinderError):
    """Raised when offering data cannot be fetched or parsed."""


class OfferingNotFoundError(OfferingDataError):
    """Raised when an offering does not exist or is not live."""


class SelectionError(SessionFinderError):
    """Raised when a day or slot selection does not match the available sessions."""


class BookingError(SessionFinderError):
    """Raised when a booking request cannot be assembled."""


class NoSessionSelectedError(BookingError):
    """Raised when booking is attempted without a selected session."""


class PastSessionError(BookingError):
    """Raised when booking is attempted for a session that has already started."""


class BookingSubmissionError(SessionFinderError):
    """Raised when the booking collaborator rejects or cannot receive a request."""
