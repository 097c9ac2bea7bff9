import pytest

from diet.domain.Appointment import Appointment
from diet.domain.DietPlan import DayPlan, PlanDocument, WeekPlan
from diet.domain.Profile import Profile
from diet.utilities.text import format_phone_for_whatsapp, get_initials, slugify, whatsapp_url
from diet.utilities.timeutils import format_turkish_date
from datetime import date


@pytest.mark.parametrize("text,expected", [
    ("Dyt. Ayşe Özkan", "dyt-ayse-ozkan"),
    ("  İLKNUR   Çelik ", "ilknur-celik"),
    ("a__b--c", "a-b-c"),
    ("!!!", ""),
    (None, ""),
])
def test_slugify(text, expected):
    assert slugify(text) == expected


@pytest.mark.parametrize("phone,expected", [
    ("0532 123 45 67", "905321234567"),
    ("5321234567", "905321234567"),
    ("+90 (532) 123-45-67", "905321234567"),
    ("905321234567", "905321234567"),
    ("12345", None),
    ("", None),
])
def test_phone_for_whatsapp(phone, expected):
    assert format_phone_for_whatsapp(phone) == expected


def test_whatsapp_url_encodes_message():
    assert whatsapp_url("05321234567", "a b\nç") == "https://wa.me/905321234567?text=a%20b%0A%C3%A7"
    assert whatsapp_url(None, "x") is None


def test_initials():
    assert get_initials("Ayşe Nur Yılmaz") == "AY"
    assert get_initials("Ayşe") == "AY"
    assert get_initials("") == "??"


def test_turkish_date():
    assert format_turkish_date(date(2026, 10, 19)) == "19 Ekim 2026"


def test_plan_document_is_daily_or_weekly():
    with pytest.raises(ValueError):
        PlanDocument(day=DayPlan(), week=WeekPlan())
    with pytest.raises(KeyError):
        WeekPlan({"monday": DayPlan()})
    with pytest.raises(KeyError):
        DayPlan().get("brunch")
    doc = PlanDocument.from_dict({"mode": "weekly", "week": {"sali": {"lunch": "salata"}}})
    assert doc.week["sali"].lunch == "salata"
    assert PlanDocument.from_dict(doc.to_dict()) == doc


def test_appointment_rows():
    with pytest.raises(ValueError):
        Appointment("owner-x", "2026-10-20T07:00:00Z", status="maybe")
    row = Appointment("owner-x", "2026-10-20T07:00:00Z", status="confirmed").to_dict()
    row["legacy_column"] = 1
    appointment = Appointment.from_dict(row)
    assert appointment.blocks_slot
    assert appointment.to_dict()["id"] == row["id"]


def test_profile_window_defaults():
    window = Profile("owner-x").booking_window
    assert (window.start_hour, window.end_hour, window.session_duration) == (9, 17, 45)
    assert Profile("owner-x", work_start_hour=10, work_end_hour=12, session_duration=60).booking_window.slots() == [
        "10:00", "11:00"]
