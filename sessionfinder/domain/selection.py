"""
Day grouping and the two-step (day, then slot) session selection.
"""

from typing import Dict, Iterable, List, Optional, Sequence

from pendulum import Date

from .dates import format_day_label
from .exceptions import SelectionError
from .models import DayGroup, Occurrence, SelectionState


def group_by_day(occurrences: Iterable[Occurrence], locale: str = "en") -> List[DayGroup]:
    """
    Partition occurrences into day groups.

    Days and the sessions within each day come out in chronological order,
    whatever the input order.
    """
    buckets: Dict[Date, List[Occurrence]] = {}

    for occurrence in sorted(occurrences, key=lambda o: (o.start, o.id)):
        buckets.setdefault(occurrence.date, []).append(occurrence)

    return [
        DayGroup(
            date=day,
            label=format_day_label(day_occurrences[0].start, locale),
            occurrences=tuple(day_occurrences),
        )
        for day, day_occurrences in sorted(buckets.items(), key=lambda item: item[0])
    ]


class SessionSelector:
    """
    Selection state machine over a list of day groups.

    NO_SELECTION -> DAY_SELECTED -> DAY_AND_SLOT_SELECTED. Selecting a day
    picks its first upcoming session (or its first session when the whole day
    is past), so in practice a selected day always has a selected slot.
    Invalid transitions raise ``SelectionError`` and leave the state as it was.
    """

    def __init__(self, days: Sequence[DayGroup]):
        self.days = list(days)
        self._state = SelectionState()

    @property
    def state(self) -> SelectionState:
        return self._state

    @property
    def has_active_sessions(self) -> bool:
        return any(day.has_active for day in self.days)

    @property
    def selected_day(self) -> Optional[DayGroup]:
        if self._state.selected_date is None:
            return None
        return self.find_day(self._state.selected_date)

    @property
    def selected_occurrence(self) -> Optional[Occurrence]:
        day = self.selected_day
        if day is None or self._state.selected_occurrence_id is None:
            return None
        return day.find(self._state.selected_occurrence_id)

    def find_day(self, day: Date) -> Optional[DayGroup]:
        for group in self.days:
            if group.date == day:
                return group
        return None

    def find_occurrence(self, occurrence_id: str) -> Optional[Occurrence]:
        for group in self.days:
            occurrence = group.find(occurrence_id)
            if occurrence is not None:
                return occurrence
        return None

    def initial(self, primary_occurrence_id: Optional[str] = None) -> SelectionState:
        """
        Choose the starting selection when the schedule is first shown.

        Preference order: the primary session if it is still listed (a past
        one only when nothing is upcoming), then the first day with an upcoming
        session, then the first day overall.
        """
        if not self.days:
            self._state = SelectionState()
            return self._state

        if primary_occurrence_id:
            primary = self.find_occurrence(primary_occurrence_id)
            if primary is not None and (not primary.is_past or not self.has_active_sessions):
                self._state = SelectionState(
                    selected_date=primary.date,
                    selected_occurrence_id=primary.id,
                )
                return self._state

        target = next((day for day in self.days if day.has_active), self.days[0])
        return self.select_day(target.date)

    def select_day(self, day: Date) -> SelectionState:
        """
        Select a day and auto-select its first upcoming session.

        Raises:
            SelectionError: If the day is not part of the schedule
        """
        group = self.find_day(day)
        if group is None:
            raise SelectionError(f"No sessions are scheduled on {day}")

        slot = next((o for o in group.occurrences if not o.is_past), group.occurrences[0])

        self._state = SelectionState(selected_date=group.date, selected_occurrence_id=slot.id)
        return self._state

    def select_slot(self, occurrence_id: str) -> SelectionState:
        """
        Select a session within the currently selected day.

        A past session can only be chosen when every session of its day is past.

        Raises:
            SelectionError: If no day is selected, the session belongs to another
                day, or it is past while the day still has upcoming sessions
        """
        group = self.selected_day
        if group is None:
            raise SelectionError("Select a day before choosing a time slot")

        occurrence = group.find(occurrence_id)
        if occurrence is None:
            raise SelectionError(
                f"Session '{occurrence_id}' is not scheduled on {group.label}"
            )

        if occurrence.is_past and group.has_active:
            raise SelectionError(
                f"Session '{occurrence_id}' has passed; choose an upcoming time on {group.label}"
            )

        self._state = SelectionState(selected_date=group.date, selected_occurrence_id=occurrence_id)
        return self._state
