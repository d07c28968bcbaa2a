"""
Tests for slot normalization.
"""

import pendulum

from sessionfinder.domain.models import SlotRule
from sessionfinder.domain.slot_builder import build_slot_rules, coerce_capacity

TZ = "Africa/Johannesburg"


class TestBuildSlotRules:
    """Tests for build_slot_rules."""

    def test_keeps_authored_order(self):
        """Slots stay in authoring order, not chronological order."""
        raw = [
            {"time": "14:00", "label": "Afternoon"},
            {"time": "09:00", "endTime": "11:00", "label": "Morning", "capacity": 12},
        ]

        slots = build_slot_rules(raw)

        assert slots == [
            SlotRule(time="14:00", label="Afternoon"),
            SlotRule(time="09:00", end_time="11:00", label="Morning", capacity=12),
        ]

    def test_drops_slots_without_time(self):
        raw = [{"label": "TBC"}, {"time": ""}, {"time": "25:00"}, "10:00", {"time": "10:00"}]

        slots = build_slot_rules(raw)

        assert slots == [SlotRule(time="10:00")]

    def test_blank_label_and_bad_end_time_are_cleared(self):
        slots = build_slot_rules([{"time": "10:00", "endTime": "later", "label": "   "}])

        assert slots == [SlotRule(time="10:00", end_time=None, label=None)]

    def test_synthesizes_slot_from_anchor_time(self):
        """A bare anchor with a time of day produces exactly one slot."""
        anchor = pendulum.parse("2026-11-04 09:30", tz=TZ)

        slots = build_slot_rules([], anchor)

        assert slots == [SlotRule(time="09:30")]

    def test_no_synthesis_for_midnight_anchor(self):
        anchor = pendulum.parse("2026-11-04", tz=TZ)

        assert build_slot_rules(None, anchor) == []

    def test_explicit_slots_win_over_anchor_time(self):
        anchor = pendulum.parse("2026-11-04 09:30", tz=TZ)

        slots = build_slot_rules([{"time": "13:00"}], anchor)

        assert slots == [SlotRule(time="13:00")]


class TestCoerceCapacity:
    """Tests for capacity coercion."""

    def test_positive_integers_are_kept(self):
        assert coerce_capacity(8) == 8
        assert coerce_capacity("12") == 12
        assert coerce_capacity(6.0) == 6

    def test_everything_else_is_open_booking(self):
        for value in (None, 0, -3, 2.5, "a few", "", True):
            assert coerce_capacity(value) is None, value
