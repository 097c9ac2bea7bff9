import threading
from datetime import date, timedelta

import pytest

from diet.domain.Appointment import Appointment
from diet.domain.Profile import Profile
from diet.events import web_observers
from diet.infra.Appointment_Repository import AppointmentRepository, SlotAlreadyBookedError
from diet.logic.scheduling import booking
from diet.utilities.timeutils import build_start_time

TODAY = date(2026, 10, 19)
TOMORROW = TODAY + timedelta(days=1)


@pytest.fixture
def repo(tmp_path):
    return AppointmentRepository(tmp_path / "appointments.json")


@pytest.fixture
def profile():
    return Profile("owner-x", full_name="Ayşe Yılmaz", phone="05321234567", public_slug="ayse-yilmaz",
                   work_start_hour=9, work_end_hour=17, session_duration=45)


def _book(repo, profile, day=TOMORROW, time="10:30", name="Mehmet"):
    return booking.book_public(repo, profile, day, time, guest_name=name, guest_phone="05551112233",
                               today=TODAY)


def test_public_booking_lands_pending(repo, profile):
    appointment = _book(repo, profile)
    assert appointment.status == "pending"
    assert appointment.start_time == build_start_time(TOMORROW, "10:30")
    assert repo.get(appointment.id).guest_name == "Mehmet"


def test_second_booking_for_same_slot_is_refused(repo, profile):
    _book(repo, profile)
    with pytest.raises(booking.SlotUnavailableError) as info:
        _book(repo, profile, name="Zeynep")
    assert "choose another slot" in str(info.value)
    assert len(repo.all()) == 1


def test_other_owner_same_slot_is_fine(repo, profile):
    _book(repo, profile)
    other = Profile("owner-y", session_duration=45)
    _book(repo, other)
    assert len(repo.all()) == 2


@pytest.mark.parametrize("day,time", [
    (TODAY - timedelta(days=1), "10:30"),
    (TODAY + timedelta(days=60), "10:30"),
    (TOMORROW, "10:00"),
    (TOMORROW, "16:30"),
])
def test_requests_outside_the_window_are_rejected(repo, profile, day, time):
    with pytest.raises(booking.BookingRejectedError):
        _book(repo, profile, day=day, time=time)
    assert repo.all() == []


def test_storage_uniqueness_guard(repo):
    start = build_start_time(TOMORROW, "09:00")
    repo.add(Appointment("owner-x", start, status="approved"))
    with pytest.raises(SlotAlreadyBookedError):
        repo.add(Appointment("owner-x", start.replace("Z", "+00:00"), status="pending"))
    repo.add(Appointment("owner-x", start, status="cancelled"))
    assert len(repo.all()) == 2


def test_concurrent_requests_book_once(repo, profile):
    results = []

    def attempt(name):
        try:
            _book(repo, profile, name=name)
            results.append("ok")
        except booking.SlotUnavailableError:
            results.append("taken")

    threads = [threading.Thread(target=attempt, args=(f"guest-{i}",)) for i in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert results.count("ok") == 1
    assert results.count("taken") == 7
    assert len(repo.all()) == 1


def test_owner_booking_and_reschedule(repo, profile):
    first = booking.book_for_owner(repo, "owner-x", TOMORROW, "09:00", client_id="c1", status="approved")
    second = booking.book_for_owner(repo, "owner-x", TOMORROW, "09:45", guest_name="Ali")
    # staying on its own slot is not a conflict
    moved = booking.reschedule(repo, "owner-x", first.id, TOMORROW, "09:00")
    assert moved.start_time == first.start_time
    with pytest.raises(booking.SlotUnavailableError):
        booking.reschedule(repo, "owner-x", first.id, TOMORROW, "09:45")
    moved = booking.reschedule(repo, "owner-x", second.id, TOMORROW, "11:15")
    assert repo.get(second.id).start_time == build_start_time(TOMORROW, "11:15")
    with pytest.raises(KeyError):
        booking.reschedule(repo, "owner-y", first.id, TOMORROW, "12:00")


def test_reactivating_a_taken_slot_is_refused(repo, profile):
    old = booking.book_for_owner(repo, "owner-x", TOMORROW, "09:00", guest_name="Ali")
    booking.set_status(repo, "owner-x", old.id, "cancelled")
    _book(repo, profile, time="09:00")
    with pytest.raises(booking.SlotUnavailableError):
        booking.set_status(repo, "owner-x", old.id, "approved")
    assert repo.get(old.id).status == "cancelled"


def test_unknown_status_is_rejected(repo):
    appointment = booking.book_for_owner(repo, "owner-x", TOMORROW, "09:00", guest_name="Ali")
    with pytest.raises(booking.BookingRejectedError):
        booking.set_status(repo, "owner-x", appointment.id, "maybe")


def test_availability_and_calendar(repo, profile):
    _book(repo, profile, time="10:30")
    booking.book_for_owner(repo, "owner-x", TOMORROW, "11:20", guest_name="Off grid")
    booking.book_for_owner(repo, "owner-x", TOMORROW, "12:00", guest_name="Gone", status="cancelled")

    flags = {row["time"]: row["booked"] for row in booking.availability(repo, profile, TOMORROW)}
    assert flags["10:30"] is True
    assert flags["09:00"] is False
    assert "11:20" not in flags

    calendar = booking.day_calendar(repo, profile, TOMORROW)
    rows = {row["time"]: row for row in calendar["slots"]}
    assert rows["10:30"]["busy"] is True
    assert [a["guest_name"] for a in rows["11:15"]["appointments"]] == ["Off grid"]
    assert rows["12:00"]["busy"] is False
    assert [a["status"] for a in rows["12:00"]["appointments"]] == ["cancelled"]
    assert calendar["unplaced"] == []


def test_booking_events_are_recorded(repo, profile):
    web_observers.start()
    cursor = web_observers.get_events()["next_cursor"]
    _book(repo, profile)
    with pytest.raises(booking.SlotUnavailableError):
        _book(repo, profile)
    events = web_observers.get_events(since=cursor, owner_id="owner-x")["events"]
    assert [e["type"] for e in events] == ["appointment.requested", "appointment.conflict"]


def test_available_dates():
    dates = booking.available_dates(TODAY, horizon=3)
    assert dates == [TODAY, TODAY + timedelta(days=1), TODAY + timedelta(days=2)]


class _UnfilteredRepository:
    def __init__(self, rows):
        self.rows = rows

    def list_for_owner(self, owner_id, start=None, end=None, statuses=None):
        return [a for a in self.rows if a.dietitian_id == owner_id]


def test_calendar_lists_bad_timestamps_as_unplaced(profile):
    good = Appointment("owner-x", build_start_time(TOMORROW, "09:45"), status="approved", id="good")
    bad = Appointment("owner-x", "yarın sabah", status="pending", id="bad")
    calendar = booking.day_calendar(_UnfilteredRepository([bad, good]), profile, TOMORROW)
    assert [a["id"] for a in calendar["unplaced"]] == ["bad"]
    rows = {row["time"]: row for row in calendar["slots"]}
    assert rows["09:45"]["busy"] is True
    assert [a["id"] for a in rows["09:45"]["appointments"]] == ["good"]
