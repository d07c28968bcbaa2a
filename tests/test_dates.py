"""
Tests for date and time normalization.
"""

from datetime import date, datetime, time, timezone

import pendulum

from sessionfinder.domain.dates import (
    combine,
    format_day_label,
    format_time_range,
    has_time_component,
    parse_date_value,
    parse_time_of_day,
    weekday_index,
)

TZ = "Africa/Johannesburg"


class FakeTimestamp:
    """Stand-in for an SDK timestamp exposing epoch seconds."""

    def __init__(self, seconds, nanoseconds=0):
        self.seconds = seconds
        self.nanoseconds = nanoseconds


class Convertible:
    """Stand-in for an SDK timestamp exposing a conversion method."""

    def __init__(self, value):
        self._value = value

    def toDate(self):
        if isinstance(self._value, Exception):
            raise self._value
        return self._value


class TestParseDateValue:
    """Tests for parse_date_value."""

    def test_iso_datetime_string_is_local(self):
        """Naive ISO strings are read in the configured timezone."""
        parsed = parse_date_value("2026-11-04T09:30:00", TZ)

        assert parsed == pendulum.datetime(2026, 11, 4, 9, 30, tz=TZ)
        assert parsed.timezone_name == TZ

    def test_iso_string_with_offset_is_converted(self):
        """Offsets are honoured and converted into the configured timezone."""
        parsed = parse_date_value("2026-11-04T07:30:00Z", TZ)

        assert parsed.hour == 9
        assert parsed.minute == 30

    def test_date_only_string_is_local_midnight(self):
        parsed = parse_date_value("2026-11-04", TZ)

        assert parsed == pendulum.datetime(2026, 11, 4, tz=TZ)
        assert not has_time_component(parsed)

    def test_native_datetime_and_date(self):
        """Native datetime and date objects are accepted."""
        naive = parse_date_value(datetime(2026, 11, 4, 9, 30), TZ)
        aware = parse_date_value(datetime(2026, 11, 4, 7, 30, tzinfo=timezone.utc), TZ)
        plain_date = parse_date_value(date(2026, 11, 4), TZ)

        assert naive == pendulum.datetime(2026, 11, 4, 9, 30, tz=TZ)
        assert aware == naive
        assert plain_date == pendulum.datetime(2026, 11, 4, tz=TZ)

    def test_epoch_seconds_mapping_and_object(self):
        """Exported timestamps with (_)seconds resolve to the same instant."""
        expected = pendulum.datetime(2027, 1, 1, 2, 0, tz=TZ)

        assert parse_date_value({"_seconds": 1798761600, "_nanoseconds": 0}, TZ) == expected
        assert parse_date_value({"seconds": 1798761600}, TZ) == expected
        assert parse_date_value(FakeTimestamp(1798761600), TZ) == expected

    def test_conversion_method(self):
        """Objects with a toDate() method are converted."""
        parsed = parse_date_value(Convertible(datetime(2026, 11, 4, 9, 30)), TZ)

        assert parsed == pendulum.datetime(2026, 11, 4, 9, 30, tz=TZ)

    def test_failing_conversion_method_is_unparseable(self):
        assert parse_date_value(Convertible(RuntimeError("boom")), TZ) is None
        assert parse_date_value(Convertible("not a date"), TZ) is None

    def test_unparseable_inputs(self):
        """Bad input resolves to None and never to the current time."""
        for value in (None, "", "   ", "not a date", "2026-13-45", "now", 42, 3.5, True, [], object()):
            assert parse_date_value(value, TZ) is None, value

    def test_mapping_without_seconds(self):
        assert parse_date_value({"seconds": "soon"}, TZ) is None
        assert parse_date_value({}, TZ) is None

    def test_out_of_range_epoch_seconds(self):
        """Seconds too large for a float or a calendar date are unparseable."""
        assert parse_date_value({"seconds": 10**400}, TZ) is None
        assert parse_date_value({"_seconds": 10**400, "_nanoseconds": 5}, TZ) is None
        assert parse_date_value(FakeTimestamp(10**400), TZ) is None
        assert parse_date_value({"seconds": 10**300}, TZ) is None


class TestTimeOfDay:
    """Tests for time-of-day helpers."""

    def test_parse_time_of_day(self):
        assert parse_time_of_day("09:30") == (9, 30, 0)
        assert parse_time_of_day("14:00:15") == (14, 0, 15)
        assert parse_time_of_day("9") == (9, 0, 0)
        assert parse_time_of_day(time(7, 45)) == (7, 45, 0)

    def test_parse_time_of_day_rejects_invalid(self):
        for value in ("", "24:00", "10:60", "ten", "10-30", None, 1030):
            assert parse_time_of_day(value) is None, value

    def test_combine(self):
        day = pendulum.datetime(2026, 10, 21, tz=TZ)

        assert combine(day, "14:00") == pendulum.datetime(2026, 10, 21, 14, 0, tz=TZ)
        assert combine(day, "later") is None

    def test_format_time_range(self):
        assert format_time_range("10:00", "12:00") == "10:00 – 12:00"
        assert format_time_range("9:5") == ""
        assert format_time_range("9", "bogus") == "09:00"
        assert format_time_range(None, "12:00") == ""


class TestCalendarHelpers:
    """Tests for weekday and label helpers."""

    def test_weekday_index_starts_on_sunday(self):
        assert weekday_index(pendulum.datetime(2026, 10, 18, tz=TZ)) == 0  # Sunday
        assert weekday_index(pendulum.datetime(2026, 10, 21, tz=TZ)) == 3  # Wednesday
        assert weekday_index(pendulum.datetime(2026, 10, 24, tz=TZ)) == 6  # Saturday

    def test_format_day_label(self):
        assert format_day_label(pendulum.datetime(2026, 10, 21, 14, 0, tz=TZ)) == "21 October 2026"
