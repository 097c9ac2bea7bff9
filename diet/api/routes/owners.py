"""Owner back-office API: booking settings, day calendar, appointment management.

The owner id comes from the path; authentication is handled in front of
this service.
"""
import logging
from datetime import date as _date

from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse

from diet.infra.Appointment_Repository import AppointmentRepository
from diet.infra.Profile_Repository import ProfileRepository, SlugTakenError
from diet.logic.scheduling import booking
from diet.utilities.constants import APPOINTMENT_STATUS_LABELS
from diet.utilities.validators import (
    BookingWindowInput, OwnerAppointmentInput, RescheduleInput, StatusInput,
)

router = APIRouter(prefix="/api/owners/{owner_id}")
logger = logging.getLogger(__name__)


def _conflict(e: booking.SlotUnavailableError):
    return JSONResponse(status_code=409, content={"detail": str(e), "start_time": e.start_time})


# -------------------- Settings --------------------
@router.get("/settings")
def get_settings(owner_id: str):
    profile = ProfileRepository().get_or_create(owner_id)
    data = profile.to_dict()
    data.update(profile.booking_window.to_dict())
    data["slots"] = profile.booking_window.slots()
    return data


@router.put("/settings")
def update_settings(owner_id: str, payload: BookingWindowInput):
    repo = ProfileRepository()
    profile = repo.get_or_create(owner_id)
    profile.work_start_hour = payload.work_start_hour
    profile.work_end_hour = payload.work_end_hour
    profile.session_duration = payload.session_duration
    if payload.public_slug is not None:
        profile.public_slug = payload.public_slug or None
    if payload.full_name is not None:
        profile.full_name = payload.full_name
    if payload.phone is not None:
        profile.phone = payload.phone
    try:
        repo.save(profile)
    except SlugTakenError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    logger.info("Booking settings updated for owner %s", owner_id)
    return get_settings(owner_id)


# -------------------- Calendar --------------------
@router.get("/calendar/{day}")
def calendar_day(owner_id: str, day: _date):
    profile = ProfileRepository().get_or_create(owner_id)
    return booking.day_calendar(AppointmentRepository(), profile, day)


# -------------------- Appointments --------------------
def _with_label(appointment):
    data = appointment.to_dict()
    data["status_label"] = APPOINTMENT_STATUS_LABELS.get(appointment.status, appointment.status)
    return data


@router.post("/appointments", status_code=201)
def create_appointment(owner_id: str, payload: OwnerAppointmentInput):
    try:
        appointment = booking.book_for_owner(
            AppointmentRepository(), owner_id, payload.date, payload.time,
            client_id=payload.client_id, guest_name=payload.guest_name,
            guest_phone=payload.guest_phone, note=payload.note, status=payload.status,
        )
    except booking.SlotUnavailableError as e:
        return _conflict(e)
    return _with_label(appointment)


@router.put("/appointments/{appointment_id}")
def move_appointment(owner_id: str, appointment_id: str, payload: RescheduleInput):
    try:
        appointment = booking.reschedule(AppointmentRepository(), owner_id, appointment_id, payload.date, payload.time)
    except KeyError:
        raise HTTPException(status_code=404, detail="Appointment not found")
    except booking.SlotUnavailableError as e:
        return _conflict(e)
    return _with_label(appointment)


@router.patch("/appointments/{appointment_id}/status")
def change_status(owner_id: str, appointment_id: str, payload: StatusInput):
    try:
        appointment = booking.set_status(AppointmentRepository(), owner_id, appointment_id, payload.status)
    except KeyError:
        raise HTTPException(status_code=404, detail="Appointment not found")
    except booking.SlotUnavailableError as e:
        return _conflict(e)
    return _with_label(appointment)
