"""
Application services for listing and booking offering sessions.

The service coordinates fetching offering records via a client adapter,
delegates session generation and grouping to the domain layer, and hands
finished booking requests to a submission adapter. Both collaborators are
plain protocols so the HTTP adapters and the mock implementations are
interchangeable in tests and in the CLI.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol, Sequence

import pendulum
from pendulum import DateTime

from ..domain.booking import PAST_SESSION_MESSAGE, assemble_booking_request
from ..domain.exceptions import OfferingNotFoundError, PastSessionError, SelectionError
from ..domain.models import BookingRequest, DayGroup, Occurrence, Offering, SelectionState
from ..domain.occurrence_generator import OccurrenceGenerator
from ..domain.offerings import offering_from_record
from ..domain.selection import SessionSelector, group_by_day
from ..domain.slot_builder import build_slot_rules
from ..domain.summary import ScheduleSummary, summarize_offering

logger = logging.getLogger(__name__)


class OfferingClientProtocol(Protocol):
    """Protocol describing the offering data source needed by the service."""

    async def get_offering(self, offering_id: str) -> Optional[Dict[str, Any]]:
        """Return the raw offering record, or None if it does not exist."""

    async def list_offerings(self) -> List[Dict[str, Any]]:
        """Return all raw offering records."""


class BookingClientProtocol(Protocol):
    """Protocol describing the booking submission collaborator."""

    async def submit(self, request: BookingRequest) -> None:
        """Deliver a booking request."""


@dataclass
class OfferingSchedule:
    """Everything a detail page needs to render an offering's sessions."""
    offering: Offering
    occurrences: List[Occurrence]
    days: List[DayGroup]
    selection: SelectionState
    summary: ScheduleSummary

    @property
    def is_empty(self) -> bool:
        return not self.occurrences

    @property
    def has_active_sessions(self) -> bool:
        return any(not occurrence.is_past for occurrence in self.occurrences)


class SessionFinderService:
    """
    Orchestrates offering retrieval, session generation and booking.

    One generator serves every offering type; workshops and cut-flower
    sessions differ only in their records.
    """

    def __init__(
        self,
        offering_client: OfferingClientProtocol,
        generator: OccurrenceGenerator,
        booking_client: Optional[BookingClientProtocol] = None,
        locale: str = "en",
    ) -> None:
        self._offering_client = offering_client
        self._generator = generator
        self._booking_client = booking_client
        self._locale = locale

    @property
    def timezone(self) -> str:
        return self._generator.timezone

    async def fetch_offering(self, offering_id: str) -> Offering:
        """
        Fetch and parse a live offering.

        Raises:
            OfferingNotFoundError: If the offering is missing or not live
        """
        record = await self._offering_client.get_offering(offering_id)
        if record is None:
            raise OfferingNotFoundError(f"Offering '{offering_id}' not found.")

        offering = offering_from_record(record, timezone=self.timezone, offering_id=offering_id)
        if not offering.is_live:
            raise OfferingNotFoundError(f"Offering '{offering_id}' is not available ({offering.status}).")

        return offering

    async def list_offerings(self) -> List[Offering]:
        """Fetch all live offerings."""
        records = await self._offering_client.list_offerings()
        offerings = [offering_from_record(record, timezone=self.timezone) for record in records]
        return [offering for offering in offerings if offering.id and offering.is_live]

    async def get_schedule(self, offering_id: str, now: Optional[DateTime] = None) -> OfferingSchedule:
        """
        Fetch an offering and build its grouped sessions and initial selection.
        """
        offering = await self.fetch_offering(offering_id)
        return self.build_schedule(offering, now=now)

    def build_schedule(self, offering: Offering, now: Optional[DateTime] = None) -> OfferingSchedule:
        """Generate, group and pre-select sessions for an already fetched offering."""
        now = now or pendulum.now(self.timezone)

        occurrences = self.generate_occurrences(offering, now)
        days = group_by_day(occurrences, locale=self._locale)

        selector = SessionSelector(days)
        selection = selector.initial(offering.primary_occurrence_id)

        logger.debug(
            "Offering %s: %d session(s) over %d day(s)", offering.id, len(occurrences), len(days)
        )

        return OfferingSchedule(
            offering=offering,
            occurrences=occurrences,
            days=days,
            selection=selection,
            summary=self.summarize(offering),
        )

    def summarize(self, offering: Offering) -> ScheduleSummary:
        """Listing text for an offering without expanding its sessions."""
        return summarize_offering(offering, timezone=self.timezone, locale=self._locale)

    def generate_occurrences(self, offering: Offering, now: DateTime) -> List[Occurrence]:
        """Normalize slots and expand the offering's rule."""
        slots = build_slot_rules(offering.raw_slots, offering.rule.anchor_date)
        return self._generator.generate(offering.id, offering.rule, slots, now)

    async def book(
        self,
        offering_id: str,
        occurrence_id: str,
        attendee_count: int = 1,
        now: Optional[DateTime] = None,
        option_values: Optional[Sequence[str]] = None,
    ) -> BookingRequest:
        """
        Select a session, assemble the booking request and submit it.

        Raises:
            OfferingNotFoundError: If the offering is missing or not live
            SelectionError: If the session is not part of the current schedule
            PastSessionError: If the session has already started
            BookingError: If the request cannot be assembled (seats, options)
            BookingSubmissionError: If the submission collaborator fails
        """
        schedule = await self.get_schedule(offering_id, now=now)
        selector = SessionSelector(schedule.days)

        occurrence = selector.find_occurrence(occurrence_id)
        if occurrence is None:
            raise SelectionError(f"Session '{occurrence_id}' is not available for '{offering_id}'.")
        if occurrence.is_past:
            raise PastSessionError(PAST_SESSION_MESSAGE)

        selector.select_day(occurrence.date)
        selector.select_slot(occurrence.id)

        request = assemble_booking_request(
            selector.state,
            selector.selected_occurrence,
            schedule.offering,
            attendee_count=attendee_count,
            day_label=selector.selected_day.label,
            option_values=option_values,
        )

        if self._booking_client is None:
            logger.warning("No booking client configured; request for %s was not submitted", occurrence_id)
            return request

        await self._booking_client.submit(request)
        logger.info("Submitted booking for %s (%d attendee(s))", occurrence_id, attendee_count)
        return request
