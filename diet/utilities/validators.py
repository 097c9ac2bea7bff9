"""
Input validation schemas using Pydantic for the HTTP layer.
"""
from datetime import date as _date
from typing import Dict, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from diet.domain.DietPlan import DayPlan, PlanDocument, WeekPlan
from diet.utilities.constants import APPOINTMENT_STATUSES, DAY_KEYS

_TIME_PATTERN = r'^([01]\d|2[0-3]):[0-5]\d$'


class DayPlanInput(BaseModel):
    """Four meal slots; missing meals are empty strings."""
    breakfast: str = ""
    lunch: str = ""
    snack: str = ""
    dinner: str = ""

    def to_domain(self) -> DayPlan:
        return DayPlan(self.breakfast, self.lunch, self.snack, self.dinner)


class PlanDocumentInput(BaseModel):
    """Structured plan as edited in the form UI."""
    notes: str = ""
    mode: Optional[Literal["daily", "weekly"]] = None
    day: Optional[DayPlanInput] = None
    week: Optional[Dict[str, DayPlanInput]] = None

    @field_validator('week')
    @classmethod
    def validate_week_keys(cls, v):
        """Only the seven fixed day keys are accepted."""
        if v is None:
            return v
        unknown = sorted(set(v) - set(DAY_KEYS))
        if unknown:
            raise ValueError(f"Unknown day keys: {', '.join(unknown)}")
        return v

    @model_validator(mode='after')
    def resolve_mode(self):
        """Mode defaults to whichever of day/week was sent; both, or a mismatch, is an error."""
        if self.day is not None and self.week is not None:
            raise ValueError('Send day or week, not both')
        if self.mode is None:
            self.mode = "weekly" if self.week is not None else "daily"
        elif self.mode == "daily" and self.week is not None:
            raise ValueError('week given for a daily plan')
        elif self.mode == "weekly" and self.day is not None:
            raise ValueError('day given for a weekly plan')
        return self

    def to_domain(self) -> PlanDocument:
        if self.mode == "weekly":
            days = {key: plan.to_domain() for key, plan in (self.week or {}).items()}
            return PlanDocument(self.notes, week=WeekPlan(days))
        return PlanDocument(self.notes, day=(self.day or DayPlanInput()).to_domain())


class DecodeInput(BaseModel):
    content: str = ""
    mode: Optional[Literal["daily", "weekly"]] = None


class DietListInput(BaseModel):
    """Create/update a diet list from raw text or from a structured plan."""
    dietitian_id: str = Field(..., min_length=1)
    title: Optional[str] = Field(None, max_length=200)
    content: Optional[str] = None
    plan: Optional[PlanDocumentInput] = None

    @field_validator('title', 'content')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace."""
        if isinstance(v, str):
            return v.strip()
        return v

    @model_validator(mode='after')
    def require_body(self):
        if self.plan is None and not self.content:
            raise ValueError('Either content or plan is required')
        if self.plan is not None and self.content:
            raise ValueError('Send content or plan, not both')
        return self


class BookingWindowInput(BaseModel):
    """Owner settings for the booking page."""
    work_start_hour: int = Field(..., ge=0, le=23)
    work_end_hour: int = Field(..., ge=1, le=24)
    session_duration: int = Field(..., ge=5, le=240)
    public_slug: Optional[str] = Field(None, max_length=80)
    full_name: Optional[str] = Field(None, max_length=200)
    phone: Optional[str] = Field(None, max_length=30)

    @model_validator(mode='after')
    def validate_window(self):
        if self.work_end_hour <= self.work_start_hour:
            raise ValueError('work_end_hour must be after work_start_hour')
        return self


class PublicBookingInput(BaseModel):
    """Guest booking request from the public page."""
    date: _date
    time: str = Field(..., pattern=_TIME_PATTERN)
    guest_name: str = Field(..., min_length=1, max_length=120)
    guest_phone: str = Field(..., min_length=7, max_length=30)
    note: str = Field("", max_length=1000)

    @field_validator('guest_name', 'guest_phone')
    @classmethod
    def not_blank(cls, v):
        if not v.strip():
            raise ValueError('must not be blank')
        return v.strip()


class OwnerAppointmentInput(BaseModel):
    date: _date
    time: str = Field(..., pattern=_TIME_PATTERN)
    client_id: Optional[str] = None
    guest_name: Optional[str] = None
    guest_phone: Optional[str] = None
    note: str = ""
    status: str = "pending"

    @field_validator('status')
    @classmethod
    def validate_status(cls, v):
        if v not in APPOINTMENT_STATUSES:
            raise ValueError(f'Unknown status: {v}')
        return v

    @model_validator(mode='after')
    def require_someone(self):
        if not self.client_id and not (self.guest_name or '').strip():
            raise ValueError('Either client_id or guest_name is required')
        return self


class RescheduleInput(BaseModel):
    date: _date
    time: str = Field(..., pattern=_TIME_PATTERN)


class StatusInput(BaseModel):
    status: str

    @field_validator('status')
    @classmethod
    def validate_status(cls, v):
        if v not in APPOINTMENT_STATUSES:
            raise ValueError(f'Unknown status: {v}')
        return v
