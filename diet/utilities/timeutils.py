"""Timestamp helpers shared by the booking code.

Appointment rows store ``start_time`` as an ISO-8601 instant (UTC). Slots and
calendar days are wall-clock values in the practice's time zone
(BOOKING_TIMEZONE).
"""
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Tuple
from zoneinfo import ZoneInfo

from diet.utilities.config import BOOKING_TIMEZONE
from diet.utilities.constants import TIME_FORMAT, TR_MONTHS


def local_zone() -> ZoneInfo:
    return ZoneInfo(BOOKING_TIMEZONE)


def parse_timestamp(value: str) -> datetime:
    """Parse a stored ISO timestamp into an aware datetime.

    Raises ValueError for anything that is not a timestamp. Naive values are
    taken as wall-clock time in the practice's zone.
    """
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Not a timestamp: {value!r}")
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=local_zone())
    return parsed


def to_local(value: str) -> datetime:
    return parse_timestamp(value).astimezone(local_zone())


def local_time_of_day(value: str) -> str:
    """"HH:MM" wall-clock time of a stored timestamp."""
    return to_local(value).strftime(TIME_FORMAT)


def local_day(value: str) -> date:
    return to_local(value).date()


def day_bounds(day: date) -> Tuple[datetime, datetime]:
    """[start, end) of a local calendar day as aware datetimes."""
    zone = local_zone()
    start = datetime.combine(day, time.min, tzinfo=zone)
    end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=zone)
    return start, end


def build_start_time(day: date, time_string: str) -> str:
    """Combine a local day and "HH:MM" into the stored UTC ISO form."""
    wall = datetime.strptime(time_string, TIME_FORMAT).time()
    local = datetime.combine(day, wall, tzinfo=local_zone())
    return local.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def format_turkish_date(value: Optional[date] = None) -> str:
    """"19 Ekim 2026" style date used for default titles and messages."""
    value = value or datetime.now(local_zone()).date()
    return f"{value.day} {TR_MONTHS[value.month - 1]} {value.year}"


def today() -> date:
    return datetime.now(local_zone()).date()
