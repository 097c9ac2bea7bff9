"""Owner profile and its booking window (work hours + session length)."""
from typing import List, Optional
from diet.logic.scheduling.slots import generate_slots_from_hours
from diet.utilities.config import (
    DEFAULT_SESSION_DURATION, DEFAULT_WORK_END_HOUR, DEFAULT_WORK_START_HOUR,
)


class BookingWindow:
    def __init__(self, start_hour=DEFAULT_WORK_START_HOUR, end_hour=DEFAULT_WORK_END_HOUR,
                 session_duration: int = DEFAULT_SESSION_DURATION):
        self.start_hour = start_hour
        self.end_hour = end_hour
        self.session_duration = session_duration

    def slots(self) -> List[str]:
        '''Bookable "HH:MM" start times for any day under this window.'''
        return generate_slots_from_hours(self.start_hour, self.end_hour, self.session_duration)

    def __eq__(self, other) -> bool:
        if not isinstance(other, BookingWindow):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"BookingWindow({self.start_hour}-{self.end_hour}, {self.session_duration} min)"

    def to_dict(self):
        return {
            "work_start_hour": self.start_hour,
            "work_end_hour": self.end_hour,
            "session_duration": self.session_duration,
        }


class Profile:
    def __init__(self, id: str, full_name: Optional[str] = None, phone: Optional[str] = None,
                 public_slug: Optional[str] = None, work_start_hour=None, work_end_hour=None,
                 session_duration: Optional[int] = None):
        self.id = id
        self.full_name = full_name
        self.phone = phone
        self.public_slug = public_slug
        self.work_start_hour = work_start_hour
        self.work_end_hour = work_end_hour
        self.session_duration = session_duration

    @property
    def booking_window(self) -> BookingWindow:
        return BookingWindow(
            self.work_start_hour if self.work_start_hour not in (None, "") else DEFAULT_WORK_START_HOUR,
            self.work_end_hour if self.work_end_hour not in (None, "") else DEFAULT_WORK_END_HOUR,
            self.session_duration or DEFAULT_SESSION_DURATION,
        )

    def __str__(self) -> str:
        return f"{self.full_name or self.id} ({self.public_slug or '-'})"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        allowed = {"id", "full_name", "phone", "public_slug",
                   "work_start_hour", "work_end_hour", "session_duration"}
        filtered = {k: v for k, v in d.items() if k in allowed}
        filtered.setdefault("id", "")
        return Profile(**filtered)

    def to_dict(self):
        return {
            "id": self.id,
            "full_name": self.full_name,
            "phone": self.phone,
            "public_slug": self.public_slug,
            "work_start_hour": self.work_start_hour,
            "work_end_hour": self.work_end_hour,
            "session_duration": self.session_duration,
        }
