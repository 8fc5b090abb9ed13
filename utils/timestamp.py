"""
Timestamp utilities for schedule windows and cache entries.

Everything is compared as integer milliseconds since the Unix epoch.
"""

import time
import datetime
from typing import Union

Instant = Union[datetime.datetime, int, float, str]

_EPOCH = datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc)


def now_ms() -> int:
    """Get the current wall-clock time in epoch milliseconds"""
    return int(time.time() * 1000)


def parse_iso_instant(value: str) -> datetime.datetime:
    """Parse an ISO-8601 instant such as ``2024-01-01T00:00:00Z``

    Naive values are read as UTC.

    Raises:
        ValueError: if the string is not an ISO-8601 instant
    """
    if not isinstance(value, str) or not value:
        raise ValueError(f"not an ISO-8601 instant: {value!r}")
    text = value.strip()
    if text.endswith(('Z', 'z')):
        text = text[:-1] + '+00:00'
    parsed = datetime.datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=datetime.timezone.utc)
    return parsed


def to_epoch_ms(value: Instant) -> int:
    """Convert a datetime, ISO string or epoch-millisecond number to epoch milliseconds

    Args:
        value: Aware datetime (naive is read as UTC), ISO-8601 string,
            or a number already expressed in epoch milliseconds

    Returns:
        Milliseconds since the Unix epoch

    Raises:
        ValueError: if the value cannot be interpreted as an instant
    """
    if isinstance(value, bool):
        raise ValueError(f"not an instant: {value!r}")
    if isinstance(value, datetime.datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=datetime.timezone.utc)
        return (value - _EPOCH) // datetime.timedelta(milliseconds=1)
    if isinstance(value, (int, float)):
        try:
            return int(value)
        except (OverflowError, ValueError):
            # inf and nan
            raise ValueError(f"not an instant: {value!r}") from None
    if isinstance(value, str):
        return to_epoch_ms(parse_iso_instant(value))
    raise ValueError(f"not an instant: {value!r}")
