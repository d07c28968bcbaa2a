"""
Assembly of booking requests from the selected session.
"""

from typing import Optional, Sequence

from .exceptions import BookingError, NoSessionSelectedError, PastSessionError
from .models import BookingRequest, Occurrence, Offering, SelectionState
from .pricing import price_booking

PAST_SESSION_MESSAGE = "This session has already passed. Please choose another available date."


def assemble_booking_request(
    selection: SelectionState,
    occurrence: Optional[Occurrence],
    offering: Offering,
    attendee_count: int = 1,
    day_label: Optional[str] = None,
    option_values: Optional[Sequence[str]] = None,
) -> BookingRequest:
    """
    Package the selected session and offering details for submission.

    Args:
        selection: Current selection state
        occurrence: The occurrence resolved from the selection
        offering: Owning offering (id, title, price, location, options)
        attendee_count: Number of seats requested
        day_label: Display label of the selected day
        option_values: Option choices, one per attendee for cut-flower
            sessions or a single one for workshops

    Returns:
        BookingRequest ready for the submission collaborator

    Raises:
        NoSessionSelectedError: If nothing (or something else) is selected
        PastSessionError: If the selected session has already started
        BookingError: If the attendee count is not positive, exceeds capacity,
            or an option choice is invalid
    """
    if occurrence is None or selection.selected_occurrence_id is None:
        raise NoSessionSelectedError("Please choose a day and time slot before continuing.")

    if occurrence.id != selection.selected_occurrence_id or occurrence.date != selection.selected_date:
        raise NoSessionSelectedError(
            f"Session '{occurrence.id}' does not match the current selection."
        )

    if occurrence.offering_id != offering.id:
        raise BookingError(
            f"Session '{occurrence.id}' does not belong to offering '{offering.id}'."
        )

    if occurrence.is_past:
        raise PastSessionError(PAST_SESSION_MESSAGE)

    if attendee_count < 1:
        raise BookingError(f"At least one attendee is required, got {attendee_count}.")

    if occurrence.capacity is not None and attendee_count > occurrence.capacity:
        raise BookingError(
            f"Only {occurrence.capacity} seat(s) available for this session, requested {attendee_count}."
        )

    pricing = price_booking(offering, attendee_count, option_values)

    return BookingRequest(
        offering_id=offering.id,
        occurrence_id=occurrence.id,
        start=occurrence.start.to_iso8601_string(),
        label=occurrence.label,
        capacity=occurrence.capacity,
        title=offering.title,
        kind=offering.kind,
        location=offering.location,
        unit_price=offering.unit_price,
        attendee_count=attendee_count,
        estimated_total=pricing.total,
        day_label=day_label,
        option_value=pricing.option_value,
        option_label=pricing.option_label,
        attendee_selections=pricing.attendee_selections,
        estimated_per_attendee=pricing.per_attendee,
    )
