"""
HTTP client for the booking submission collaborator.
"""

import asyncio
import logging

import requests

from ..domain.exceptions import BookingSubmissionError
from ..domain.models import BookingRequest

logger = logging.getLogger(__name__)


class BookingClient:
    """Posts booking requests as JSON to the configured endpoint."""

    def __init__(self, endpoint: str, timeout_seconds: int = 30):
        self.endpoint = endpoint
        self.timeout_seconds = timeout_seconds
        self.headers = {"Content-Type": "application/json"}

    async def submit(self, request: BookingRequest) -> None:
        """
        Submit a booking request.

        Raises:
            BookingSubmissionError: If the endpoint cannot be reached or rejects the request
        """
        await asyncio.to_thread(self._submit, request)

    def _submit(self, request: BookingRequest) -> None:
        try:
            response = requests.post(
                self.endpoint,
                headers=self.headers,
                json=request.to_dict(),
                timeout=self.timeout_seconds,
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise BookingSubmissionError(f"Failed to submit booking: {e}") from e

        logger.debug("Booking %s accepted with status %s", request.occurrence_id, response.status_code)
