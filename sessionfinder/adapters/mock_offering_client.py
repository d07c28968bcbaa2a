"""
Mock offering client and booking collector for running without a backend.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..domain.exceptions import OfferingDataError
from ..domain.models import BookingRequest

logger = logging.getLogger(__name__)

DEFAULT_DATA_FILE = Path(__file__).parent / "mock_offerings.json"


class MockOfferingClient:
    """
    Mock client that serves offering records from a JSON file.

    The bundled ``mock_offerings.json`` holds a repeating cut-flower session,
    a one-off workshop and a draft offering.
    """

    def __init__(self, data_file: Optional[Path] = None):
        """
        Initialize the mock client.

        Args:
            data_file: JSON file with a list of offering records
        """
        self.data_file = data_file or DEFAULT_DATA_FILE
        self.records = self._load_records()

    def _load_records(self) -> List[Dict[str, Any]]:
        """Load offering records from the JSON file."""
        if not self.data_file.exists():
            logger.warning("Mock data file %s not found; serving no offerings", self.data_file)
            return []

        try:
            with open(self.data_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as exc:
            raise OfferingDataError(f"Invalid JSON in {self.data_file}: {exc}") from exc

        if not isinstance(data, list):
            raise OfferingDataError(f"{self.data_file} must contain a list of offerings.")

        return [record for record in data if isinstance(record, dict)]

    async def get_offering(self, offering_id: str) -> Optional[Dict[str, Any]]:
        for record in self.records:
            if record.get("id") == offering_id:
                return record
        return None

    async def list_offerings(self) -> List[Dict[str, Any]]:
        return list(self.records)


class InMemoryBookingClient:
    """Booking collaborator that keeps submitted requests in memory."""

    def __init__(self):
        self.submitted: List[BookingRequest] = []

    async def submit(self, request: BookingRequest) -> None:
        self.submitted.append(request)
