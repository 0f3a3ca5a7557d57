from datetime import timedelta

import pytest

from consultations.core.clock import business_today
from consultations.core.exceptions import InvalidInputError, NotFoundError, SlotConflictError
from consultations.db.models import Booking, BookingStatus
from consultations.schemas.schedule_settings import ScheduleSettingsUpdateRequest
from consultations.services import booking_service
from consultations.services.booking_service import (
    create_booking,
    list_available_slots,
    update_booking_status,
)
from consultations.services.settings_service import update_schedule_settings


def _tomorrow() -> str:
    return (business_today() + timedelta(days=1)).isoformat()


def _book(db, time_slot: str = "10:00", date_value: str | None = None, email: str = "jane@example.com") -> Booking:
    return create_booking(
        db,
        name="Jane Doe",
        email=email,
        date_value=date_value or _tomorrow(),
        time_slot=time_slot,
    )


def test_create_booking_persists_pending_record(db_session):
    booking = _book(db_session)

    assert booking.id is not None
    assert booking.status == BookingStatus.PENDING.value
    assert booking.created_at == booking.updated_at
    assert booking.company is None


def test_second_booking_for_same_slot_is_rejected(db_session):
    _book(db_session)

    with pytest.raises(SlotConflictError) as exc_info:
        _book(db_session, email="other@example.com")

    assert exc_info.value.status_code == 400
    assert exc_info.value.detail == "This time slot is already booked"
    assert db_session.query(Booking).count() == 1


def test_same_slot_on_another_day_is_independent(db_session):
    _book(db_session)
    day_after = (business_today() + timedelta(days=2)).isoformat()

    assert _book(db_session, date_value=day_after).id is not None


def test_cancelling_frees_the_slot(db_session):
    first = _book(db_session)
    update_booking_status(db_session, first.id, "cancelled")

    second = _book(db_session, email="other@example.com")

    assert second.id != first.id
    assert db_session.query(Booking).count() == 2


def test_reopening_cancelled_booking_into_taken_slot_conflicts(db_session):
    first = _book(db_session)
    update_booking_status(db_session, first.id, "cancelled")
    _book(db_session, email="other@example.com")

    with pytest.raises(SlotConflictError):
        update_booking_status(db_session, first.id, "pending")

    assert db_session.get(Booking, first.id).status == BookingStatus.CANCELLED.value


def test_constraint_violation_is_reported_as_slot_conflict(db_session, monkeypatch):
    _book(db_session)
    # simulate a concurrent writer that passed the pre-check before the first commit
    monkeypatch.setattr(booking_service, "find_active_booking", lambda *args, **kwargs: None)

    with pytest.raises(SlotConflictError):
        _book(db_session, email="other@example.com")

    assert db_session.query(Booking).count() == 1


def test_today_is_bookable_but_yesterday_is_not(db_session):
    today = business_today().isoformat()
    yesterday = (business_today() - timedelta(days=1)).isoformat()

    assert _book(db_session, date_value=today).date == business_today()
    with pytest.raises(InvalidInputError) as exc_info:
        _book(db_session, date_value=yesterday)
    assert exc_info.value.detail == "Cannot book in the past"


@pytest.mark.parametrize(
    ("field", "value", "detail"),
    [
        ("name", "", "Name, email, date, and time slot are required"),
        ("email", "not-an-email", "Invalid email format"),
        ("date_value", "19/10/2026", "Invalid date format. Use YYYY-MM-DD"),
        ("date_value", "2026-02-30", "Invalid date format. Use YYYY-MM-DD"),
        ("time_slot", "10:15", "Time slot is not available for the configured working hours"),
        ("time_slot", "18:00", "Time slot is not available for the configured working hours"),
        ("name", 123, "Name must be a string"),
        ("email", ["jane@example.com"], "Email must be a string"),
        ("date_value", 20261020, "Invalid date format. Use YYYY-MM-DD"),
        ("name", "n" * 256, "Name must be at most 255 characters"),
        ("email", "e" * 250 + "@example.com", "Email must be at most 255 characters"),
    ],
)
def test_create_booking_rejects_invalid_input(db_session, field, value, detail):
    payload = {
        "name": "Jane Doe",
        "email": "jane@example.com",
        "date_value": _tomorrow(),
        "time_slot": "10:00",
    }
    payload[field] = value

    with pytest.raises(InvalidInputError) as exc_info:
        create_booking(db_session, **payload)

    assert exc_info.value.detail == detail
    assert db_session.query(Booking).count() == 0


def test_update_status_validates_value_and_existence(db_session):
    booking = _book(db_session)

    with pytest.raises(InvalidInputError):
        update_booking_status(db_session, booking.id, "archived")
    with pytest.raises(InvalidInputError):
        update_booking_status(db_session, booking.id, 5)
    with pytest.raises(NotFoundError):
        update_booking_status(db_session, booking.id + 100, "confirmed")


def test_any_status_transition_is_allowed(db_session):
    booking = _book(db_session)

    for status in ["completed", "pending", "cancelled", "confirmed"]:
        booking = update_booking_status(db_session, booking.id, status)
        assert booking.status == status


def test_available_slots_exclude_active_bookings_only(db_session):
    _book(db_session, time_slot="09:00")
    cancelled = _book(db_session, time_slot="09:30")
    update_booking_status(db_session, cancelled.id, "cancelled")

    summary = list_available_slots(db_session, _tomorrow())

    assert summary.total_slots == 16
    assert summary.booked_count == 1
    assert summary.available_count == 15
    assert "09:00" not in summary.slots
    assert summary.slots[0] == "09:30"


def test_listing_is_idempotent(db_session):
    _book(db_session, time_slot="11:00")

    assert list_available_slots(db_session, _tomorrow()) == list_available_slots(db_session, _tomorrow())


def test_listing_rejects_past_dates(db_session):
    yesterday = (business_today() - timedelta(days=1)).isoformat()

    with pytest.raises(InvalidInputError) as exc_info:
        list_available_slots(db_session, yesterday)

    assert exc_info.value.detail == "Cannot book slots in the past"


def test_settings_update_is_visible_to_next_listing(db_session):
    assert list_available_slots(db_session, _tomorrow()).total_slots == 16

    update_schedule_settings(
        db_session,
        ScheduleSettingsUpdateRequest(working_hours_start="10:00", working_hours_end="12:00", meeting_duration=60),
    )

    summary = list_available_slots(db_session, _tomorrow())
    assert summary.slots == ["10:00", "11:00"]
