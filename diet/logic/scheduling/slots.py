"""Bookable time-slot generation and slot lookup.

Times are handled as minutes from midnight internally and rendered "HH:MM".
"""
from __future__ import annotations
import logging
import re
from typing import List, Optional, Sequence, Union

from diet.utilities.config import (
    DEFAULT_SESSION_DURATION, DEFAULT_WORK_END_HOUR, DEFAULT_WORK_START_HOUR,
)

logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 24 * 60
_TIME_RE = re.compile(r"^\s*(\d{1,2})(?::(\d{2}))?(?::\d{2})?\s*$")

Bound = Union[int, str, None]


def parse_time(value: Bound) -> Optional[int]:
    """Minutes from midnight for an hour number (0-24) or "HH:MM" text; None if invalid."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        minutes = value * 60
    elif isinstance(value, float) and value.is_integer():
        minutes = int(value) * 60
    elif isinstance(value, str):
        m = _TIME_RE.match(value)
        if not m:
            return None
        hours, mins = int(m.group(1)), int(m.group(2) or 0)
        if mins >= 60:
            return None
        minutes = hours * 60 + mins
    else:
        return None
    if not 0 <= minutes <= MINUTES_PER_DAY:
        return None
    return minutes


def format_minutes(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def hour_to_time_string(hour: int) -> str:
    """Clamp an hour to 0-23 and render it as "HH:00"."""
    return format_minutes(max(0, min(23, int(hour))) * 60)


def generate_slots(start: Bound, end: Bound, duration_minutes) -> List[str]:
    """Enumerate slot start times in [start, end) whose full session fits before end.

    Invalid bounds or a non-positive duration fall back to the default
    window (09:00-17:00, 45 minutes). ``start >= end`` is not invalid, it
    simply has no slots.
    """
    start_min = parse_time(start)
    end_min = parse_time(end)
    try:
        duration = int(duration_minutes)
    except (TypeError, ValueError):
        duration = 0
    if start_min is None or end_min is None or duration <= 0:
        logger.warning(
            "Invalid time slot parameters (start=%r, end=%r, duration=%r), using defaults",
            start, end, duration_minutes,
        )
        start_min = DEFAULT_WORK_START_HOUR * 60
        end_min = DEFAULT_WORK_END_HOUR * 60
        duration = DEFAULT_SESSION_DURATION

    slots = []
    current = start_min
    while current + duration <= end_min:
        slots.append(format_minutes(current))
        current += duration
    return slots


def generate_slots_from_hours(work_start_hour, work_end_hour, session_duration) -> List[str]:
    """Slots for a profile's stored work hours; missing hours use the defaults."""
    start = work_start_hour if work_start_hour not in (None, "") else DEFAULT_WORK_START_HOUR
    end = work_end_hour if work_end_hour not in (None, "") else DEFAULT_WORK_END_HOUR
    return generate_slots(start, end, session_duration or DEFAULT_SESSION_DURATION)


def find_slot_index(time_string: str, slots: Sequence[str]) -> int:
    """Index of the exact slot, or -1."""
    for index, slot in enumerate(slots):
        if slot == time_string:
            return index
    return -1


def find_closest_slot_index(time_string: str, slots: Sequence[str]) -> int:
    """Exact slot if present, else the nearest one (earliest wins ties); -1 if nothing to compare."""
    exact = find_slot_index(time_string, slots)
    if exact != -1:
        return exact
    target = parse_time(time_string)
    if target is None:
        return -1
    closest, min_diff = -1, None
    for index, slot in enumerate(slots):
        minutes = parse_time(slot)
        if minutes is None:
            continue
        diff = abs(target - minutes)
        if min_diff is None or diff < min_diff:
            closest, min_diff = index, diff
    return closest


__all__ = [
    'parse_time', 'format_minutes', 'hour_to_time_string', 'generate_slots',
    'generate_slots_from_hours', 'find_slot_index', 'find_closest_slot_index',
]
