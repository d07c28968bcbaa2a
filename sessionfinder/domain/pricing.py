"""
Booking estimates from an offering's options.

Cut-flower bookings choose one option per attendee and the estimate is the
sum of those choices. Workshops choose a single option (a frame size) for
the whole group. Options without a price fall back to the offering's unit
price, and an estimate is only given when every price is known.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .exceptions import BookingError
from .models import AttendeeSelection, BookingOption, Offering

MULTIPLE_OPTIONS_VALUE = "multiple"
MULTIPLE_OPTIONS_LABEL = "Multiple options"


@dataclass(frozen=True)
class PricingSummary:
    """Chosen options and the resulting estimate."""
    option_value: Optional[str]
    option_label: Optional[str]
    attendee_selections: Tuple[AttendeeSelection, ...]
    per_attendee: Optional[float]
    total: Optional[float]


def price_booking(
    offering: Offering,
    attendee_count: int,
    option_values: Optional[Sequence[str]] = None,
) -> PricingSummary:
    """
    Resolve option choices and estimate the booking total.

    Args:
        offering: Offering being booked
        attendee_count: Number of attendees (already validated as >= 1)
        option_values: Per-attendee choices for cut-flower bookings, or a
            single choice for workshops. Missing choices use the default.

    Raises:
        BookingError: If a choice is unknown, not open to a group this size,
            or more choices are given than the booking allows
    """
    requested = list(option_values or ())

    if offering.prices_per_attendee:
        return _price_per_attendee(offering, attendee_count, requested)
    return _price_for_group(offering, attendee_count, requested)


def _price_per_attendee(offering: Offering, attendee_count: int, requested: List[str]) -> PricingSummary:
    options = offering.options or [
        BookingOption(value="standard", label="Standard", price=offering.unit_price)
    ]
    if len(requested) > attendee_count:
        raise BookingError(
            f"{len(requested)} option choices given for {attendee_count} attendee(s)."
        )

    available = [option for option in options if option.is_available_for(attendee_count)]
    default = available[0] if available else options[0]

    selections = []
    for index in range(attendee_count):
        if index < len(requested):
            option = _lookup(options, requested[index])
            if not option.is_available_for(attendee_count):
                raise BookingError(
                    f"Option '{option.label}' requires at least {option.min_attendees} attendees."
                )
        else:
            option = default

        selections.append(AttendeeSelection(
            attendee=index + 1,
            option_value=option.value,
            option_label=option.label,
            estimated_price=_unit_price(option, offering),
        ))

    prices = [selection.estimated_price for selection in selections]
    total = round(sum(prices), 2) if None not in prices else None

    if len(selections) == 1:
        option_value, option_label = selections[0].option_value, selections[0].option_label
    else:
        option_value, option_label = MULTIPLE_OPTIONS_VALUE, MULTIPLE_OPTIONS_LABEL

    return PricingSummary(
        option_value=option_value,
        option_label=option_label,
        attendee_selections=tuple(selections),
        per_attendee=round(total / attendee_count, 2) if total is not None else None,
        total=total,
    )


def _price_for_group(offering: Offering, attendee_count: int, requested: List[str]) -> PricingSummary:
    if len(requested) > 1:
        raise BookingError("Workshops take a single option for the whole booking.")

    option = None
    if requested:
        option = _lookup(offering.options, requested[0])
    elif offering.options:
        option = offering.options[0]

    per_attendee = _unit_price(option, offering) if option else offering.unit_price

    return PricingSummary(
        option_value=option.value if option else None,
        option_label=option.label if option else None,
        attendee_selections=(),
        per_attendee=per_attendee,
        total=round(per_attendee * attendee_count, 2) if per_attendee is not None else None,
    )


def _lookup(options: Sequence[BookingOption], value: str) -> BookingOption:
    for option in options:
        if option.value == value:
            return option
    known = ", ".join(option.value for option in options) or "none"
    raise BookingError(f"Unknown option '{value}' (available: {known}).")


def _unit_price(option: BookingOption, offering: Offering) -> Optional[float]:
    return option.price if option.price is not None else offering.unit_price
