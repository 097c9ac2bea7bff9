"""Public booking page API (/api/book/{slug}), no login required."""
import logging
from datetime import date as _date
from typing import Optional

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import JSONResponse

from diet.domain.Profile import Profile
from diet.infra.Appointment_Repository import AppointmentRepository
from diet.infra.Profile_Repository import ProfileRepository
from diet.logic.scheduling import booking
from diet.logic.scheduling.occupancy import day_occupancy
from diet.utilities.text import booking_request_message, get_initials, whatsapp_url
from diet.utilities.timeutils import format_turkish_date
from diet.utilities.validators import PublicBookingInput

router = APIRouter(prefix="/api/book")
logger = logging.getLogger(__name__)


def _profile_or_404(slug: str) -> Profile:
    profile = ProfileRepository().get_by_slug(slug)
    if profile is None:
        raise HTTPException(status_code=404, detail="Booking page not found")
    return profile


@router.get("/{slug}")
def booking_page(slug: str):
    profile = _profile_or_404(slug)
    return {
        "full_name": profile.full_name,
        "initials": get_initials(profile.full_name),
        "slug": profile.public_slug,
        "slots": profile.booking_window.slots(),
        "session_duration": profile.booking_window.session_duration,
        "dates": [d.isoformat() for d in booking.available_dates()],
    }


@router.get("/{slug}/availability")
def booking_availability(slug: str, date: _date = Query(...)):
    profile = _profile_or_404(slug)
    return {"date": date.isoformat(), "slots": booking.availability(AppointmentRepository(), profile, date)}


@router.post("/{slug}", status_code=201)
def book(slug: str, payload: PublicBookingInput):
    profile = _profile_or_404(slug)
    repo = AppointmentRepository()
    try:
        appointment = booking.book_public(
            repo, profile, payload.date, payload.time,
            guest_name=payload.guest_name, guest_phone=payload.guest_phone, note=payload.note,
        )
    except booking.BookingRejectedError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except booking.SlotUnavailableError as e:
        # hand back fresh occupancy so the page can redraw without another round trip
        taken: Optional[list] = None
        try:
            taken = sorted(day_occupancy(repo, profile.id, payload.date))
        except Exception as lookup_error:
            logger.error("Could not reload occupancy after conflict: %s", lookup_error)
        return JSONResponse(status_code=409, content={"detail": str(e), "booked": taken})

    message = booking_request_message(profile.full_name, format_turkish_date(payload.date), payload.time)
    return {
        "status": "success",
        "appointment": appointment.to_dict(),
        "whatsapp_url": whatsapp_url(profile.phone, message),
    }
