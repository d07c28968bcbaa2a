"""
Normalization of authored time slots into SlotRules.

Slot order is authoring intent ("Morning" before "Afternoon") and is kept as
given; nothing here sorts.
"""

import logging
from collections.abc import Mapping
from typing import Any, Iterable, List, Optional

from pendulum import DateTime

from .dates import format_time_value, has_time_component, parse_time_of_day
from .models import SlotRule

logger = logging.getLogger(__name__)


def build_slot_rules(
    raw_slots: Optional[Iterable[Any]],
    anchor_date: Optional[DateTime] = None,
) -> List[SlotRule]:
    """
    Build the canonical slot list for an offering.

    Records without a usable ``time`` are dropped. If nothing usable remains
    and the anchor date carries a non-midnight time, a single unlabelled slot
    is synthesized from that embedded time.

    Args:
        raw_slots: Slot records (mappings or SlotRule instances) as authored
        anchor_date: The offering's anchor date, if any

    Returns:
        Order-preserving list of SlotRule objects
    """
    slots: List[SlotRule] = []

    for index, raw in enumerate(raw_slots or []):
        slot = _normalize_slot(raw)
        if slot is None:
            logger.debug("Dropping slot %d without a usable time: %r", index, raw)
            continue
        slots.append(slot)

    if not slots and anchor_date is not None and has_time_component(anchor_date):
        slots.append(SlotRule(time=anchor_date.format("HH:mm")))

    return slots


def _normalize_slot(raw: Any) -> Optional[SlotRule]:
    if isinstance(raw, SlotRule):
        return raw if parse_time_of_day(raw.time) else None

    if not isinstance(raw, Mapping):
        return None

    time_value = format_time_value(raw.get("time"))
    if not time_value:
        return None

    end_time = format_time_value(raw.get("endTime", raw.get("end_time"))) or None

    label = raw.get("label")
    label = label.strip() if isinstance(label, str) else ""

    return SlotRule(
        time=time_value,
        end_time=end_time,
        label=label or None,
        capacity=coerce_capacity(raw.get("capacity")),
    )


def coerce_capacity(value: Any) -> Optional[int]:
    """Positive integer capacity, or None for open booking."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value.isdigit():
            return None
        value = int(value)
    if isinstance(value, float):
        if not value.is_integer():
            return None
        value = int(value)
    if isinstance(value, int) and value > 0:
        return value
    return None
