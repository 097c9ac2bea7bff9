"""Slot occupancy and booking conflict detection.

Occupancy is the set of "HH:MM" times on one local calendar day already
claimed by an owner's appointments in a blocking status (pending, approved;
confirmed is the legacy spelling of approved). It is computed per query and
never stored.
"""
from __future__ import annotations
import logging
from datetime import date
from typing import Iterable, Optional, Set

from diet.domain.Appointment import Appointment
from diet.utilities.constants import BLOCKING_STATUSES
from diet.utilities.timeutils import day_bounds, local_day, local_time_of_day

logger = logging.getLogger(__name__)


def occupied_times(appointments: Iterable[Appointment], owner_id: str, day: date,
                   exclude_id: Optional[str] = None) -> Set[str]:
    """Times of day taken on ``day`` for ``owner_id``; unparseable rows are ignored."""
    taken = set()
    for appointment in appointments:
        if appointment.dietitian_id != owner_id or appointment.status not in BLOCKING_STATUSES:
            continue
        if exclude_id is not None and appointment.id == exclude_id:
            continue
        try:
            if local_day(appointment.start_time) != day:
                continue
            taken.add(local_time_of_day(appointment.start_time))
        except ValueError:
            logger.warning("Ignoring appointment %s with bad start_time %r", appointment.id, appointment.start_time)
    return taken


def day_occupancy(repository, owner_id: str, day: date, exclude_id: Optional[str] = None) -> Set[str]:
    """Query the repository for one owner/day and fold it into occupancy.

    Storage errors propagate; callers that must not guess use has_conflict.
    """
    start, end = day_bounds(day)
    rows = repository.list_for_owner(owner_id, start=start, end=end, statuses=BLOCKING_STATUSES)
    return occupied_times(rows, owner_id, day, exclude_id=exclude_id)


def has_conflict(repository, owner_id: str, start_time: str, exclude_id: Optional[str] = None) -> bool:
    """True when the candidate start collides with a blocking appointment.

    Fails closed: if the lookup itself fails the answer is True, so a
    storage hiccup can block a booking but never double-book a slot.
    """
    try:
        day = local_day(start_time)
        wanted = local_time_of_day(start_time)
        return wanted in day_occupancy(repository, owner_id, day, exclude_id=exclude_id)
    except Exception as e:
        logger.error("Conflict check failed for owner %s at %r, treating slot as taken: %s",
                     owner_id, start_time, e)
        return True


__all__ = ['occupied_times', 'day_occupancy', 'has_conflict']
