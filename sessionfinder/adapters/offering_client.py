"""
HTTP client for the offering data collaborator.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

import requests

from ..domain.exceptions import OfferingDataError

logger = logging.getLogger(__name__)


class OfferingClient:
    """
    Client for the storefront's offering API.

    Expects ``GET {base_url}/offerings`` to return a list of offering records
    (or ``{"items": [...]}``) and ``GET {base_url}/offerings/{id}`` to return
    a single record.
    """

    def __init__(self, base_url: str, timeout_seconds: int = 30):
        """
        Initialize the offering client.

        Args:
            base_url: Root URL of the offering API
            timeout_seconds: Per-request timeout
        """
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.headers = {"Accept": "application/json"}

    async def get_offering(self, offering_id: str) -> Optional[Dict[str, Any]]:
        """
        Fetch one offering record.

        Returns:
            The raw record with its ``id`` filled in, or None if it does not exist

        Raises:
            OfferingDataError: If the API call fails or returns malformed data
        """
        return await asyncio.to_thread(self._get_offering, offering_id)

    async def list_offerings(self) -> List[Dict[str, Any]]:
        """
        Fetch all offering records.

        Raises:
            OfferingDataError: If the API call fails or returns malformed data
        """
        return await asyncio.to_thread(self._list_offerings)

    def _get_offering(self, offering_id: str) -> Optional[Dict[str, Any]]:
        url = f"{self.base_url}/offerings/{offering_id}"

        try:
            response = requests.get(url, headers=self.headers, timeout=self.timeout_seconds)
            if response.status_code == 404:
                return None
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as e:
            raise OfferingDataError(f"Failed to fetch offering '{offering_id}': {e}") from e
        except ValueError as e:
            raise OfferingDataError(f"Offering '{offering_id}' response is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise OfferingDataError(f"Offering '{offering_id}' response must be an object.")

        return {**data, "id": data.get("id") or offering_id}

    def _list_offerings(self) -> List[Dict[str, Any]]:
        url = f"{self.base_url}/offerings"

        try:
            response = requests.get(url, headers=self.headers, timeout=self.timeout_seconds)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as e:
            raise OfferingDataError(f"Failed to fetch offerings: {e}") from e
        except ValueError as e:
            raise OfferingDataError(f"Offerings response is not valid JSON: {e}") from e

        return self._parse_list_response(data)

    def _parse_list_response(self, data: Any) -> List[Dict[str, Any]]:
        """
        Accept either a bare list or an ``{"items": [...]}`` envelope.
        Entries that are not objects are skipped.
        """
        items = data.get("items", []) if isinstance(data, dict) else data
        if not isinstance(items, list):
            raise OfferingDataError("Offerings response must be a list.")

        records: List[Dict[str, Any]] = []
        for item in items:
            if not isinstance(item, dict):
                logger.warning("Skipping malformed offering entry: %r", item)
                continue
            records.append(item)

        return records
