"""
Core scheduling logic: expanding recurrence rules into concrete sessions.

Pure domain logic. The generator never reads the clock; ``now`` is always
passed in, so the same inputs always produce the same sessions.
"""

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from pendulum import DateTime

from .dates import DEFAULT_TIMEZONE, combine, format_time_range, weekday_index
from .models import Occurrence, RecurrenceRule, SlotRule

logger = logging.getLogger(__name__)


class OccurrenceGenerator:
    """
    Expands a recurrence rule and its slots into bookable occurrences.

    Algorithm:
    1. Determine the candidate days (the anchor day, or the weekly window)
    2. Place every slot on every candidate day
    3. Mark occurrences that start before ``now`` as past
    4. Drop duplicate ids and sort by start
    """

    def __init__(self, timezone: str = DEFAULT_TIMEZONE):
        self.timezone = timezone

    def generate(
        self,
        offering_id: str,
        rule: RecurrenceRule,
        slots: Sequence[SlotRule],
        now: DateTime,
    ) -> List[Occurrence]:
        """
        Generate all occurrences for one offering.

        Args:
            offering_id: Identifier of the owning offering, part of every id
            rule: Anchor date and optional weekly pattern
            slots: Normalized slot list (see ``build_slot_rules``)
            now: Generation instant used for the past/future flag and the window

        Returns:
            Occurrences sorted ascending by start. Empty when nothing falls
            inside the window, which is not an error.
        """
        now = now.in_timezone(self.timezone)

        if not slots:
            return []

        if rule.repeat_weekly:
            days = self._get_weekly_days(rule, now)
        elif rule.anchor_date is not None:
            days = [rule.anchor_date.in_timezone(self.timezone).start_of("day")]
        else:
            logger.debug("Offering %s has no anchor date and does not repeat", offering_id)
            days = []

        occurrences: Dict[str, Occurrence] = {}

        for day in days:
            for index, slot in enumerate(slots):
                occurrence = self._build_occurrence(offering_id, day, index, slot, now)
                if occurrence is None:
                    continue
                # First occurrence wins on id collisions
                occurrences.setdefault(occurrence.id, occurrence)

        return sorted(occurrences.values(), key=lambda o: (o.start, o.id))

    def get_window(self, rule: RecurrenceRule, now: DateTime) -> Optional[Tuple[DateTime, DateTime]]:
        """
        Return the (start, end) days of the weekly expansion window.

        The window runs from the later of the anchor day and today through the
        last day of the current month. Returns None if it is empty.
        """
        now = now.in_timezone(self.timezone)
        window_start = now.start_of("day")

        if rule.anchor_date is not None:
            anchor_day = rule.anchor_date.in_timezone(self.timezone).start_of("day")
            window_start = max(window_start, anchor_day)

        window_end = now.end_of("month")

        if window_start > window_end:
            return None

        return window_start, window_end

    def _get_weekly_days(self, rule: RecurrenceRule, now: DateTime) -> List[DateTime]:
        """
        Collect the days inside the window whose weekday is a repeat day.
        """
        if not rule.repeat_days:
            return []

        window = self.get_window(rule, now)
        if window is None:
            logger.debug("Weekly window is empty for anchor %s", rule.anchor_date)
            return []

        window_start, window_end = window
        days: List[DateTime] = []

        current = window_start
        while current <= window_end:
            if weekday_index(current) in rule.repeat_days:
                days.append(current)
            current = current.add(days=1)

        return days

    def _build_occurrence(
        self,
        offering_id: str,
        day: DateTime,
        index: int,
        slot: SlotRule,
        now: DateTime,
    ) -> Optional[Occurrence]:
        start = combine(day, slot.time)
        if start is None:
            logger.debug("Skipping slot %d of %s: unusable time %r", index, offering_id, slot.time)
            return None

        end = combine(day, slot.end_time) if slot.end_time else None
        time_range_label = format_time_range(slot.time, slot.end_time)

        return Occurrence(
            id=build_occurrence_id(offering_id, day, index),
            offering_id=offering_id,
            start=start,
            end=end,
            label=slot.label or time_range_label,
            time_range_label=time_range_label,
            capacity=slot.capacity,
            is_past=start < now,
        )


def build_occurrence_id(offering_id: str, day: DateTime, slot_index: int) -> str:
    """Stable id: offering id, ISO calendar date and slot index."""
    return f"{offering_id}-{day.to_date_string()}-{slot_index}"
