"""
Parse displayed metadata values into timestamps.

Dates are read in the fixed layout ``YYYY-MM-DD HH:MM:SS`` and treated as UTC
wall-clock readings. Any time zone offset stored next to the value is ignored.
"""

import re

import arrow

from .exceptions import DateParseError

DISPLAY_DATE_FORMAT = "YYYY-MM-DD HH:mm:ss"

# arrow matches formats anywhere in the string; this pins the whole value.
_DISPLAY_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}")


def parse_display_datetime(display: str) -> int:
    """
    Convert a displayed date value into seconds since the Unix epoch.

    Args:
        display: Rendered metadata value, e.g. ``"2008-05-30 15:56:01"``

    Returns:
        Whole seconds since the epoch, reading the value as UTC

    Raises:
        DateParseError: If the value does not match the layout, names an
            impossible calendar instant or lies before the epoch
    """
    if not isinstance(display, str):
        raise DateParseError(f"Expected a string, got {type(display).__name__}")

    if not _DISPLAY_DATE_RE.fullmatch(display):
        raise DateParseError(f"Unexpected date layout: {display!r}")

    try:
        parsed = arrow.get(display, DISPLAY_DATE_FORMAT)
    except (arrow.ParserError, ValueError) as e:
        raise DateParseError(f"Invalid date {display!r}: {e}") from e

    timestamp = parsed.int_timestamp
    if timestamp < 0:
        raise DateParseError(f"Date {display!r} is before the Unix epoch")
    return timestamp
