"""Booking write path: public requests, owner edits and the owner day calendar.

The occupancy check runs at write time, inside the same lock as the insert,
and the repository refuses a second blocking row for the same owner and
instant. The second guard is the one that holds across processes.
"""
from __future__ import annotations
import logging
from datetime import date, timedelta
from threading import Lock
from typing import Dict, List, Optional

from diet.domain.Appointment import Appointment
from diet.domain.Profile import Profile
from diet.events.Event_Bus import (
    APPOINTMENT_CONFLICT, APPOINTMENT_REQUESTED, APPOINTMENT_STATUS_CHANGED, publish,
)
from diet.infra.Appointment_Repository import SlotAlreadyBookedError
from diet.logic.scheduling.occupancy import day_occupancy, has_conflict, occupied_times
from diet.logic.scheduling.slots import find_closest_slot_index
from diet.utilities.config import BOOKING_HORIZON_DAYS
from diet.utilities.constants import APPOINTMENT_STATUSES, BLOCKING_STATUSES, STATUS_PENDING
from diet.utilities.timeutils import build_start_time, day_bounds, local_time_of_day, today as local_today

logger = logging.getLogger(__name__)

_booking_lock = Lock()

SOURCE_PUBLIC = "public"
SOURCE_OWNER = "owner"


class BookingRejectedError(ValueError):
    """The request can never succeed as sent (past date, time outside the owner's slots...)."""


class SlotUnavailableError(ValueError):
    """The slot is taken, or could not be verified free. Re-fetch occupancy and pick another slot."""

    def __init__(self, owner_id: str, start_time: str):
        super().__init__("This time was just taken or could not be verified; "
                         "refresh the available times and choose another slot.")
        self.owner_id = owner_id
        self.start_time = start_time


def available_dates(today: Optional[date] = None, horizon: int = BOOKING_HORIZON_DAYS) -> List[date]:
    """Bookable dates: today and the following days up to the horizon."""
    today = today or local_today()
    return [today + timedelta(days=i) for i in range(max(horizon, 0))]


def _check_request(profile: Profile, day: date, time_string: str, today: Optional[date]) -> None:
    dates = available_dates(today)
    if not dates or day < dates[0]:
        raise BookingRejectedError("Appointments cannot be booked in the past")
    if day > dates[-1]:
        raise BookingRejectedError(f"Appointments can be booked at most {len(dates)} days ahead")
    if time_string not in profile.booking_window.slots():
        raise BookingRejectedError(f"{time_string} is not one of the bookable times")


def _insert(repository, appointment: Appointment, source: str) -> Appointment:
    with _booking_lock:
        if appointment.blocks_slot and has_conflict(repository, appointment.dietitian_id, appointment.start_time):
            _reject(appointment.dietitian_id, appointment.start_time, source)
        try:
            repository.add(appointment)
        except SlotAlreadyBookedError:
            _reject(appointment.dietitian_id, appointment.start_time, source)
    logger.info("Appointment %s booked for owner %s at %s (%s)",
                appointment.id, appointment.dietitian_id, appointment.start_time, source)
    publish(APPOINTMENT_REQUESTED, {"appointment": appointment, "source": source})
    return appointment


def _reject(owner_id: str, start_time: str, source: str):
    logger.info("Booking rejected for owner %s at %s: slot unavailable", owner_id, start_time)
    publish(APPOINTMENT_CONFLICT, {"owner_id": owner_id, "start_time": start_time, "source": source})
    raise SlotUnavailableError(owner_id, start_time)


def book_public(repository, profile: Profile, day: date, time_string: str, guest_name: str,
                guest_phone: str, note: str = "", today: Optional[date] = None) -> Appointment:
    """Guest request from the public booking page; lands as pending."""
    _check_request(profile, day, time_string, today)
    appointment = Appointment(
        dietitian_id=profile.id,
        start_time=build_start_time(day, time_string),
        status=STATUS_PENDING,
        guest_name=guest_name.strip(),
        guest_phone=guest_phone.strip(),
        note=note,
    )
    return _insert(repository, appointment, SOURCE_PUBLIC)


def book_for_owner(repository, owner_id: str, day: date, time_string: str, client_id: Optional[str] = None,
                   guest_name: Optional[str] = None, guest_phone: Optional[str] = None, note: str = "",
                   status: str = STATUS_PENDING) -> Appointment:
    """Owner-created appointment from the calendar. Owners may book any time, past or off-grid."""
    appointment = Appointment(
        dietitian_id=owner_id,
        start_time=build_start_time(day, time_string),
        status=status,
        client_id=client_id,
        guest_name=guest_name,
        guest_phone=guest_phone,
        note=note,
    )
    return _insert(repository, appointment, SOURCE_OWNER)


def reschedule(repository, owner_id: str, appointment_id: str, day: date, time_string: str) -> Appointment:
    """Move an appointment; its own current slot does not count as a conflict."""
    with _booking_lock:
        appointment = repository.get(appointment_id)
        if appointment is None or appointment.dietitian_id != owner_id:
            raise KeyError(appointment_id)
        start_time = build_start_time(day, time_string)
        if appointment.blocks_slot and has_conflict(repository, owner_id, start_time, exclude_id=appointment.id):
            _reject(owner_id, start_time, SOURCE_OWNER)
        appointment.start_time = start_time
        try:
            repository.save(appointment)
        except SlotAlreadyBookedError:
            _reject(owner_id, start_time, SOURCE_OWNER)
    logger.info("Appointment %s moved to %s", appointment.id, start_time)
    return appointment


def set_status(repository, owner_id: str, appointment_id: str, status: str) -> Appointment:
    """Approve, reject, complete or cancel. Re-activating a freed slot goes through the conflict check."""
    if status not in APPOINTMENT_STATUSES:
        raise BookingRejectedError(f"Unknown status: {status}")
    with _booking_lock:
        appointment = repository.get(appointment_id)
        if appointment is None or appointment.dietitian_id != owner_id:
            raise KeyError(appointment_id)
        previous = appointment.status
        reactivating = previous not in BLOCKING_STATUSES and status in BLOCKING_STATUSES
        if reactivating and has_conflict(repository, owner_id, appointment.start_time, exclude_id=appointment.id):
            _reject(owner_id, appointment.start_time, SOURCE_OWNER)
        appointment.status = status
        try:
            repository.save(appointment)
        except SlotAlreadyBookedError:
            _reject(owner_id, appointment.start_time, SOURCE_OWNER)
    publish(APPOINTMENT_STATUS_CHANGED, {"appointment": appointment, "previous": previous})
    return appointment


def availability(repository, profile: Profile, day: date) -> List[Dict[str, object]]:
    """Slots of the owner's window for ``day`` with a booked flag each."""
    taken = day_occupancy(repository, profile.id, day)
    return [{"time": slot, "booked": slot in taken} for slot in profile.booking_window.slots()]


def day_calendar(repository, profile: Profile, day: date) -> Dict[str, object]:
    """Owner day view: every slot with the appointments that fall on or nearest to it.

    Appointments of any status are shown; only blocking ones mark a slot busy.
    """
    slots = profile.booking_window.slots()
    start, end = day_bounds(day)
    appointments = repository.list_for_owner(profile.id, start=start, end=end)
    rows = [{"time": slot, "busy": False, "appointments": []} for slot in slots]
    unplaced = []
    for appointment in appointments:
        try:
            index = find_closest_slot_index(local_time_of_day(appointment.start_time), slots)
        except ValueError:
            logger.warning("Appointment %s has bad start_time %r, listing it unplaced",
                           appointment.id, appointment.start_time)
            index = -1
        if index == -1:
            unplaced.append(appointment.to_dict())
            continue
        rows[index]["appointments"].append(appointment.to_dict())
    busy = occupied_times(appointments, profile.id, day)
    for row in rows:
        row["busy"] = row["time"] in busy
    return {"date": day.isoformat(), "slots": rows, "unplaced": unplaced}


__all__ = [
    'BookingRejectedError', 'SlotUnavailableError', 'available_dates', 'book_public', 'book_for_owner',
    'reschedule', 'set_status', 'availability', 'day_calendar',
]
