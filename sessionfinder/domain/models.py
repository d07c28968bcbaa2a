"""
Domain models for recurrence rules, time slots and generated sessions.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional, Tuple

from pendulum import Date, DateTime


@dataclass(frozen=True)
class SlotRule:
    """
    A time-of-day option applied to a date to produce a session.

    ``time`` and ``end_time`` are local ``HH:MM`` strings. A missing capacity
    means open booking.
    """
    time: str
    end_time: Optional[str] = None
    label: Optional[str] = None
    capacity: Optional[int] = None


@dataclass(frozen=True)
class RecurrenceRule:
    """
    Compact description of when an offering runs.

    ``repeat_days`` uses 0=Sunday .. 6=Saturday and only matters when
    ``repeat_weekly`` is set. A weekly rule without days produces nothing.
    """
    anchor_date: Optional[DateTime] = None
    repeat_weekly: bool = False
    repeat_days: FrozenSet[int] = frozenset()

    @property
    def is_repeating(self) -> bool:
        return self.repeat_weekly and bool(self.repeat_days)


@dataclass(frozen=True)
class Occurrence:
    """
    One concrete, dated and timed instance of a bookable offering.

    The id is derived from the offering id, the calendar date and the slot
    index, so regenerating from the same rules yields the same ids.
    """
    id: str
    offering_id: str
    start: DateTime
    label: str
    time_range_label: str
    capacity: Optional[int] = None
    is_past: bool = False
    end: Optional[DateTime] = None

    @property
    def date(self) -> Date:
        """Calendar date component of the start instant."""
        return self.start.date()

    def __str__(self) -> str:
        return f"{self.start.format('DD.MM.YYYY HH:mm')} {self.label}"


@dataclass(frozen=True)
class DayGroup:
    """
    Sessions sharing a calendar day, in chronological order.

    Invariant: a day group always holds at least one occurrence.
    """
    date: Date
    label: str
    occurrences: Tuple[Occurrence, ...]

    def __post_init__(self):
        if not self.occurrences:
            raise ValueError(f"Day group for {self.date} must contain at least one occurrence")
        mismatched = [o.id for o in self.occurrences if o.date != self.date]
        if mismatched:
            raise ValueError(f"Occurrences {mismatched} do not fall on {self.date}")

    @property
    def has_active(self) -> bool:
        """True if at least one session on this day has not started yet."""
        return any(not occurrence.is_past for occurrence in self.occurrences)

    def find(self, occurrence_id: str) -> Optional[Occurrence]:
        for occurrence in self.occurrences:
            if occurrence.id == occurrence_id:
                return occurrence
        return None


class SelectionPhase(Enum):
    """Phases of the two-step (day, then slot) selection."""
    NO_SELECTION = "no_selection"
    DAY_SELECTED = "day_selected"
    DAY_AND_SLOT_SELECTED = "day_and_slot_selected"


@dataclass(frozen=True)
class SelectionState:
    """Currently chosen day and session."""
    selected_date: Optional[Date] = None
    selected_occurrence_id: Optional[str] = None

    @property
    def phase(self) -> SelectionPhase:
        if self.selected_date is None:
            return SelectionPhase.NO_SELECTION
        if self.selected_occurrence_id is None:
            return SelectionPhase.DAY_SELECTED
        return SelectionPhase.DAY_AND_SLOT_SELECTED


@dataclass(frozen=True)
class BookingOption:
    """
    A priced choice offered at booking time (picking bundle, frame size).

    ``min_attendees`` hides the option from smaller groups; extras are
    add-ons listed after the base options.
    """
    value: str
    label: str
    price: Optional[float] = None
    min_attendees: Optional[int] = None
    is_extra: bool = False

    def is_available_for(self, attendee_count: int) -> bool:
        return self.min_attendees is None or self.min_attendees <= attendee_count


@dataclass(frozen=True)
class AttendeeSelection:
    """The option chosen for one attendee and its estimated price."""
    attendee: int
    option_value: str
    option_label: str
    estimated_price: Optional[float]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "attendee": self.attendee,
            "optionLabel": self.option_label,
            "optionValue": self.option_value,
            "estimatedPrice": self.estimated_price,
        }


@dataclass
class Offering:
    """
    A bookable offering (workshop or cut-flower session) and its schedule rules.

    ``raw_slots`` holds the slot records as authored; they are normalized by
    the slot builder right before generation.
    """
    id: str
    title: str
    kind: str = "workshop"
    unit_price: Optional[float] = None
    location: str = ""
    status: str = "live"
    rule: RecurrenceRule = field(default_factory=RecurrenceRule)
    raw_slots: List[Any] = field(default_factory=list)
    primary_occurrence_id: Optional[str] = None
    options: List[BookingOption] = field(default_factory=list)

    @property
    def is_live(self) -> bool:
        return self.status == "live"

    @property
    def prices_per_attendee(self) -> bool:
        """Cut-flower bookings choose an option per attendee; workshops pick one for the group."""
        return self.kind == "cut-flower"


@dataclass(frozen=True)
class BookingRequest:
    """
    Immutable payload handed to the booking submission collaborator.
    """
    offering_id: str
    occurrence_id: str
    start: str  # ISO-8601
    label: str
    capacity: Optional[int]
    title: str
    kind: str
    location: str
    unit_price: Optional[float]
    attendee_count: int
    estimated_total: Optional[float]
    day_label: Optional[str] = None
    option_value: Optional[str] = None
    option_label: Optional[str] = None
    attendee_selections: Tuple[AttendeeSelection, ...] = ()
    estimated_per_attendee: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the record shape expected by the submission endpoint."""
        return {
            "offeringId": self.offering_id,
            "sessionId": self.occurrence_id,
            "sessionStart": self.start,
            "sessionLabel": self.label,
            "sessionCapacity": self.capacity,
            "sessionDayLabel": self.day_label,
            "title": self.title,
            "type": self.kind,
            "location": self.location,
            "unitPrice": self.unit_price,
            "attendeeCount": self.attendee_count,
            "optionLabel": self.option_label,
            "optionValue": self.option_value,
            "attendeeSelections": [selection.to_dict() for selection in self.attendee_selections],
            "estimatedTotal": self.estimated_total,
            "estimatedPerAttendee": self.estimated_per_attendee,
        }
