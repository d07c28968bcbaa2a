"""
Short schedule descriptions for offering listings.
"""

from dataclasses import dataclass

from .dates import DEFAULT_TIMEZONE, format_datetime_label, format_day_label, format_time_range
from .models import Offering
from .slot_builder import build_slot_rules

WEEKDAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")

NO_DATE_LABEL = "Date coming soon"


@dataclass(frozen=True)
class ScheduleSummary:
    """Listing text for an offering's schedule."""
    display_date: str
    time_text: str
    is_repeating: bool
    show_times: bool


def format_repeat_label(repeat_days) -> str:
    """E.g. ``Every Monday, Wednesday``; empty when there are no valid days."""
    labels = [WEEKDAY_NAMES[day] for day in sorted(repeat_days) if 0 <= day <= 6]
    if not labels:
        return ""
    return f"Every {', '.join(labels)}"


def summarize_offering(
    offering: Offering,
    timezone: str = DEFAULT_TIMEZONE,
    locale: str = "en",
) -> ScheduleSummary:
    """
    Describe when an offering runs without expanding its sessions.

    Times are listed separately when there are several slots, any slot is
    labelled, or the offering repeats. Otherwise the single time is folded
    into the display date.
    """
    rule = offering.rule
    repeat_label = format_repeat_label(rule.repeat_days) if rule.repeat_weekly else ""
    is_repeating = bool(repeat_label)

    # Authored slots only; a time embedded in the anchor is shown with the date
    slots = build_slot_rules(offering.raw_slots)

    time_labels = []
    for slot in slots:
        time_range = format_time_range(slot.time, slot.end_time)
        if not time_range:
            continue
        time_labels.append(f"{slot.label} ({time_range})" if slot.label else time_range)

    has_labelled_slot = any(slot.label for slot in slots)
    show_times = bool(time_labels) and (len(time_labels) > 1 or has_labelled_slot or is_repeating)

    if repeat_label:
        display_date = repeat_label
    elif rule.anchor_date is not None:
        anchor = rule.anchor_date.in_timezone(timezone)
        display_date = format_day_label(anchor, locale) if show_times else format_datetime_label(anchor, locale)
    else:
        display_date = NO_DATE_LABEL

    return ScheduleSummary(
        display_date=display_date,
        time_text=" · ".join(time_labels),
        is_repeating=is_repeating,
        show_times=show_times,
    )
