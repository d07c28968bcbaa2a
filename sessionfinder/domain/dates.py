"""
Normalization of the heterogeneous date and time values found in offering data.

Offering records arrive with dates in several shapes (ISO strings, native
datetimes, exported timestamp objects with epoch seconds, SDK objects with a
conversion method). Everything here resolves to a pendulum ``DateTime`` in the
configured timezone or to ``None``. Nothing in this module raises on bad input
and nothing falls back to the current time.
"""

import logging
import re
from collections.abc import Mapping
from datetime import date, datetime, time, timedelta
from typing import Any, Optional, Tuple

import pendulum
from pendulum import Date, DateTime

logger = logging.getLogger(__name__)

DEFAULT_TIMEZONE = "Africa/Johannesburg"

# Conversion hooks exposed by timestamp types of common document-store SDKs
_CONVERSION_METHODS = ("to_datetime", "ToDatetime", "toDate")

_TIME_PATTERN = re.compile(r"^\s*(\d{1,2})(?::(\d{2}))?(?::(\d{2}))?\s*$")


def parse_date_value(value: Any, timezone: str = DEFAULT_TIMEZONE) -> Optional[DateTime]:
    """
    Resolve a date-like value to a DateTime in ``timezone``.

    Accepted shapes, in order of precedence:
    - native ``datetime`` / ``date`` objects (naive values are local to ``timezone``)
    - objects exposing ``to_datetime()``, ``ToDatetime()`` or ``toDate()``
    - mappings or objects exposing epoch ``seconds`` (optionally ``nanoseconds``)
    - ISO-8601 strings

    Returns:
        DateTime, or None if the value cannot be interpreted as a date.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (datetime, date)):
        return _from_native(value, timezone)

    if isinstance(value, str):
        return _from_string(value, timezone)

    if isinstance(value, (int, float, timedelta)):
        return None

    for method_name in _CONVERSION_METHODS:
        method = getattr(value, method_name, None)
        if callable(method):
            try:
                converted = method()
            except Exception as exc:
                logger.debug("Date conversion via %s() failed: %s", method_name, exc)
                return None
            if isinstance(converted, (datetime, date)):
                return _from_native(converted, timezone)
            return None

    seconds = _epoch_seconds(value)
    if seconds is not None:
        try:
            return pendulum.from_timestamp(seconds, tz=timezone)
        except (ValueError, OverflowError, OSError):
            return None

    return None


def _from_native(value: date, timezone: str) -> Optional[DateTime]:
    try:
        if isinstance(value, datetime):
            return pendulum.instance(value, tz=timezone).in_timezone(timezone)
        return pendulum.datetime(value.year, value.month, value.day, tz=timezone)
    except (ValueError, OverflowError):
        return None


def _from_string(value: str, timezone: str) -> Optional[DateTime]:
    text = value.strip()
    # pendulum treats "now" as a keyword; a stored date must never mean "now"
    if not text or text.lower() == "now":
        return None

    try:
        parsed = pendulum.parse(text, tz=timezone, exact=True)
    except (ValueError, TypeError, OverflowError):
        return None

    if isinstance(parsed, DateTime):
        return parsed.in_timezone(timezone)
    if isinstance(parsed, Date):
        return pendulum.datetime(parsed.year, parsed.month, parsed.day, tz=timezone)

    # Bare times, durations and intervals carry no calendar date
    return None


def _epoch_seconds(value: Any) -> Optional[float]:
    if isinstance(value, Mapping):
        seconds = value.get("seconds", value.get("_seconds"))
        nanos = value.get("nanoseconds", value.get("_nanoseconds", 0))
    else:
        seconds = getattr(value, "seconds", None)
        nanos = getattr(value, "nanoseconds", getattr(value, "nanos", 0))

    if not _is_number(seconds):
        return None
    if not _is_number(nanos):
        nanos = 0
    try:
        return seconds + nanos / 1_000_000_000
    except OverflowError:
        return None


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def parse_time_of_day(value: Any) -> Optional[Tuple[int, int, int]]:
    """
    Parse a local time-of-day such as ``"09:30"`` or ``"14:00:00"``.

    A bare hour (``"9"``) is read as ``09:00``.

    Returns:
        (hour, minute, second) or None if the value is not a valid time.
    """
    if isinstance(value, time):
        return value.hour, value.minute, value.second

    if not isinstance(value, str):
        return None

    match = _TIME_PATTERN.match(value)
    if not match:
        return None

    hour = int(match.group(1))
    minute = int(match.group(2) or 0)
    second = int(match.group(3) or 0)

    if hour > 23 or minute > 59 or second > 59:
        return None

    return hour, minute, second


def combine(day: DateTime, time_value: Any) -> Optional[DateTime]:
    """Place a time-of-day on a calendar day. Returns None if the time is unusable."""
    parsed = parse_time_of_day(time_value)
    if parsed is None:
        return None

    hour, minute, second = parsed
    return day.set(hour=hour, minute=minute, second=second, microsecond=0)


def has_time_component(value: DateTime) -> bool:
    """Check whether a DateTime carries anything other than midnight."""
    return bool(value.hour or value.minute or value.second or value.microsecond)


def weekday_index(value: date) -> int:
    """Weekday as 0=Sunday .. 6=Saturday."""
    return value.isoweekday() % 7


def format_time_value(value: Any) -> str:
    """Format a time-of-day as ``HH:mm``; empty string if unusable."""
    parsed = parse_time_of_day(value)
    if parsed is None:
        return ""
    hour, minute, _ = parsed
    return f"{hour:02d}:{minute:02d}"


def format_time_range(start_time: Any, end_time: Any = None) -> str:
    """
    Format a slot's time range.

    Examples: ``"10:00 – 12:00"``, or ``"10:00"`` when no end time is usable.
    """
    start_label = format_time_value(start_time)
    if not start_label:
        return ""
    end_label = format_time_value(end_time)
    if not end_label:
        return start_label
    return f"{start_label} – {end_label}"


def format_day_label(value: Date, locale: str = "en") -> str:
    """Long-form date, e.g. ``21 October 2026``."""
    return value.format("D MMMM YYYY", locale=locale)


def format_datetime_label(value: DateTime, locale: str = "en") -> str:
    """Long-form date with time, e.g. ``21 October 2026 at 09:30``."""
    return f"{format_day_label(value, locale)} at {value.format('HH:mm')}"
