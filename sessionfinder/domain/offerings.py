"""
Conversion of raw offering records into Offering objects.

Records come from the document store with loosely typed fields. Parsing is
lenient: missing or malformed fields fall back to defaults and never raise,
so a bad record contributes no sessions instead of breaking the page.
"""

import logging
import math
import re
from collections.abc import Mapping
from typing import Any, FrozenSet, List, Optional

from .dates import DEFAULT_TIMEZONE, parse_date_value
from .models import BookingOption, Offering, RecurrenceRule
from .slot_builder import coerce_capacity

logger = logging.getLogger(__name__)

# Field names used by workshop, cut-flower and event documents respectively
ANCHOR_DATE_FIELDS = ("eventDate", "scheduledFor", "date")
SLOT_FIELDS = ("timeSlots", "slots")

MIN_ATTENDEE_FIELDS = ("minAttendees", "minimumAttendees", "minPeople", "minGuests")
EXTRA_FLAG_FIELDS = ("isExtra", "extra", "isAddOn")

# "4+", "6 or more", "minimum 2"
_MIN_ATTENDEES_IN_LABEL = re.compile(r"(\d+)\s*\+|(\d+)\s*(?:or|and)\s*more|minimum\s*(\d+)")
_EXTRA_IN_LABEL = re.compile(r"extra|add[- ]?on|addon")


def offering_from_record(
    record: Mapping,
    timezone: str = DEFAULT_TIMEZONE,
    offering_id: Optional[str] = None,
) -> Offering:
    """
    Build an Offering from a raw document record.

    Args:
        record: Raw document fields
        timezone: IANA timezone used to interpret naive dates
        offering_id: Document id when it is not stored inside the record

    Returns:
        Offering instance
    """
    identifier = offering_id or str(record.get("id") or "")

    anchor_date = None
    for field_name in ANCHOR_DATE_FIELDS:
        if record.get(field_name) is not None:
            anchor_date = parse_date_value(record.get(field_name), timezone)
            if anchor_date is None:
                logger.warning("Offering %s has an unparseable %s: %r",
                               identifier, field_name, record.get(field_name))
            break

    rule = RecurrenceRule(
        anchor_date=anchor_date,
        repeat_weekly=record.get("repeatWeekly") is True,
        repeat_days=parse_repeat_days(record.get("repeatDays")),
    )

    raw_slots = []
    for field_name in SLOT_FIELDS:
        if isinstance(record.get(field_name), list):
            raw_slots = list(record[field_name])
            break

    primary = record.get("primarySessionId")
    kind = _text(record.get("type") or record.get("kind")) or "workshop"

    return Offering(
        id=identifier,
        title=_text(record.get("title")) or "Untitled offering",
        kind=kind,
        unit_price=_price(record.get("price", record.get("unitPrice"))),
        location=_text(record.get("location")),
        status=_text(record.get("status")) or "live",
        rule=rule,
        raw_slots=raw_slots,
        primary_occurrence_id=primary if isinstance(primary, str) and primary else None,
        options=parse_booking_options(record, kind),
    )


def parse_repeat_days(value: Any) -> FrozenSet[int]:
    """Weekday integers (0=Sunday .. 6=Saturday); anything else is dropped."""
    if not isinstance(value, (list, tuple, set, frozenset)):
        return frozenset()

    days = set()
    for item in value:
        if isinstance(item, bool):
            continue
        try:
            day = int(item)
        except (TypeError, ValueError, OverflowError):
            continue
        if isinstance(item, float) and not item.is_integer():
            continue
        if 0 <= day <= 6:
            days.add(day)

    return frozenset(days)


def parse_booking_options(record: Mapping, kind: str) -> List[BookingOption]:
    """
    Booking options authored on the record.

    Cut-flower sessions list per-attendee ``options`` which may carry a
    minimum group size and an extra (add-on) flag. Workshops list
    ``frameOptions`` chosen once for the whole booking. Entries that are not
    mappings are skipped.
    """
    if kind == "cut-flower":
        raw_options = record.get("options")
        value_fields = ("value", "id", "label")
        default_value = "option"
    else:
        raw_options = record.get("frameOptions")
        value_fields = ("value", "size", "label")
        default_value = "frame"

    if not isinstance(raw_options, list):
        return []

    options = []
    for index, item in enumerate(raw_options):
        if not isinstance(item, Mapping):
            continue

        value = _first_text(item, value_fields) or f"{default_value}-{index}"
        if kind == "cut-flower":
            label = _first_text(item, ("label", "name", "value")) or f"Option {index + 1}"
            min_attendees = _min_attendees(item, label)
            is_extra = any(item.get(name) for name in EXTRA_FLAG_FIELDS) or bool(
                _EXTRA_IN_LABEL.search(label.lower())
            )
        else:
            label = _first_text(item, ("label", "name")) or value
            min_attendees = None
            is_extra = False

        options.append(BookingOption(
            value=value,
            label=label,
            price=_price(item.get("price")),
            min_attendees=min_attendees,
            is_extra=is_extra,
        ))

    return options


def _min_attendees(item: Mapping, label: str) -> Optional[int]:
    for name in MIN_ATTENDEE_FIELDS:
        if item.get(name) is not None:
            minimum = coerce_capacity(item.get(name))
            if minimum is not None:
                return minimum
            break

    match = _MIN_ATTENDEES_IN_LABEL.search(label.lower())
    if match is None:
        return None
    return coerce_capacity(next(group for group in match.groups() if group))


def _first_text(item: Mapping, names) -> str:
    for name in names:
        value = item.get(name)
        if isinstance(value, bool) or value is None:
            continue
        if isinstance(value, (str, int, float)) and str(value).strip():
            return str(value).strip()
    return ""


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _price(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        cleaned = value.strip().lstrip("R").replace(",", "").strip()
        try:
            value = float(cleaned)
        except ValueError:
            return None
    if isinstance(value, (int, float)):
        try:
            value = float(value)
        except OverflowError:
            return None
        return value if math.isfinite(value) and value >= 0 else None
    return None
