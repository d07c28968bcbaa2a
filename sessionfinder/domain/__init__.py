"""
Domain layer - Pure scheduling logic without external dependencies.
"""

from .booking import assemble_booking_request
from .models import (
    AttendeeSelection,
    BookingOption,
    BookingRequest,
    DayGroup,
    Occurrence,
    Offering,
    RecurrenceRule,
    SelectionPhase,
    SelectionState,
    SlotRule,
)
from .occurrence_generator import OccurrenceGenerator
from .offerings import offering_from_record
from .pricing import PricingSummary, price_booking
from .selection import SessionSelector, group_by_day
from .slot_builder import build_slot_rules
from .summary import ScheduleSummary, summarize_offering

__all__ = [
    "AttendeeSelection",
    "BookingOption",
    "BookingRequest",
    "DayGroup",
    "Occurrence",
    "Offering",
    "RecurrenceRule",
    "SelectionPhase",
    "SelectionState",
    "SlotRule",
    "OccurrenceGenerator",
    "SessionSelector",
    "ScheduleSummary",
    "PricingSummary",
    "assemble_booking_request",
    "build_slot_rules",
    "group_by_day",
    "offering_from_record",
    "price_booking",
    "summarize_offering",
]
