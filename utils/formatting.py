"""
Text formatting utilities for schedule messages.

Provides functions for rendering rotation windows in a display timezone and
aligning localized names that may contain double-width characters.
"""

from typing import List, Optional

import pytz
from wcwidth import wcswidth

from models.schedule import ScheduleInfo
from utils.timestamp import parse_iso_instant

MATCH_TYPE_LABELS = {
    "regular": "Regular Battle",
    "bankara_open": "Anarchy Battle (Open)",
    "bankara_challenge": "Anarchy Battle (Series)",
    "xmatch": "X Battle",
    "event": "Challenge",
    "fest": "Splatfest Battle",
}


def display_width(text: str) -> int:
    """Terminal display width, counting CJK characters as two columns"""
    width = wcswidth(text)
    return width if width != -1 else len(text)


def pad_display(text: str, width: int) -> str:
    """Left-align text to a display width, accounting for wide characters

    Args:
        text: Text to pad
        width: Target display width

    Returns:
        Text followed by enough spaces to fill ``width`` columns
    """
    return text + ' ' * max(0, width - display_width(text))


def format_time_window(start_time: str, end_time: str, tz_name: str = 'UTC') -> str:
    """Format a rotation window in a display timezone

    Examples:
        format_time_window("2024-01-01T00:00:00Z", "2024-01-01T02:00:00Z", "Asia/Tokyo")
            -> "2024-01-01 09:00 - 11:00 JST"

    Args:
        start_time: ISO-8601 window start
        end_time: ISO-8601 window end
        tz_name: pytz timezone name (unknown names fall back to UTC)

    Returns:
        Human-readable window; the end date is repeated only when it differs
    """
    try:
        tz = pytz.timezone(tz_name)
    except pytz.UnknownTimeZoneError:
        tz = pytz.utc

    try:
        start = parse_iso_instant(start_time).astimezone(tz)
        end = parse_iso_instant(end_time).astimezone(tz)
    except ValueError:
        return f"{start_time} - {end_time}"

    if start.date() == end.date():
        return f"{start:%Y-%m-%d %H:%M} - {end:%H:%M} {end.tzname()}"
    return f"{start:%Y-%m-%d %H:%M} - {end:%Y-%m-%d %H:%M} {end.tzname()}"


def format_schedule_info(info: ScheduleInfo, match_type: Optional[str] = None,
                         tz_name: str = 'UTC', label_width: int = 8) -> str:
    """Render a resolved schedule as an aligned text block

    Example output:
        Regular Battle
        Rule:   Splat Zones
        Stages: Stage A / Stage B
        Time:   2024-01-01 00:00 - 02:00 UTC
    """
    lines: List[str] = []
    if match_type:
        lines.append(MATCH_TYPE_LABELS.get(match_type, match_type))
    lines.append(pad_display("Rule:", label_width) + info.rule)
    lines.append(pad_display("Stages:", label_width) + " / ".join(info.stages))
    lines.append(pad_display("Time:", label_width) + format_time_window(info.start_time, info.end_time, tz_name))
    return "\n".join(lines)
