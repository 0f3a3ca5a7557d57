import logging
import re
from dataclasses import dataclass
from datetime import date
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from consultations.core.clock import business_today, utcnow
from consultations.core.exceptions import InvalidInputError, NotFoundError, SlotConflictError
from consultations.core.metrics import BOOKING_ADMISSIONS
from consultations.db.models import Booking, BookingStatus
from consultations.services.settings_service import get_schedule_settings
from consultations.services.slot_service import generate_time_slots
from consultations.services.validation import EMAIL_PATTERN, INVALID_EMAIL_DETAIL, clean_text, parse_ids

logger = logging.getLogger(__name__)

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
TIME_SLOT_PATTERN = re.compile(r"^\d{2}:\d{2}$")

DATE_REQUIRED_DETAIL = "Date is required"
INVALID_DATE_DETAIL = "Invalid date format. Use YYYY-MM-DD"
PAST_SLOTS_DETAIL = "Cannot book slots in the past"
PAST_BOOKING_DETAIL = "Cannot book in the past"
REQUIRED_FIELDS_DETAIL = "Name, email, date, and time slot are required"
INVALID_TIME_SLOT_DETAIL = "Time slot is not available for the configured working hours"
SLOT_ALREADY_BOOKED_DETAIL = "This time slot is already booked"
INVALID_STATUS_DETAIL = "Invalid status. Must be: pending, confirmed, completed, or cancelled"
BOOKING_NOT_FOUND_DETAIL = "Booking not found"
BULK_IDS_REQUIRED_DETAIL = "Booking IDs array is required"


@dataclass(frozen=True)
class AvailabilitySummary:
    date: date
    slots: list[str]
    total_slots: int
    available_count: int
    booked_count: int


@dataclass(frozen=True)
class BookingCounts:
    total: int
    today: int
    by_status: dict[str, int]

    @property
    def completion_rate(self) -> float:
        if not self.total:
            return 0.0
        return round(self.by_status[BookingStatus.COMPLETED.value] * 100 / self.total, 2)


def parse_booking_date(value: Any, past_detail: str = PAST_BOOKING_DETAIL) -> date:
    """Parse ``YYYY-MM-DD`` and reject days before today; today itself is always bookable."""
    if not value:
        raise InvalidInputError(DATE_REQUIRED_DETAIL)
    if not isinstance(value, str) or not DATE_PATTERN.match(value):
        raise InvalidInputError(INVALID_DATE_DETAIL)
    try:
        parsed = date.fromisoformat(value)
    except ValueError:
        raise InvalidInputError(INVALID_DATE_DETAIL) from None

    if parsed < business_today():
        raise InvalidInputError(past_detail)
    return parsed


def find_active_booking(db: Session, booking_date: date, time_slot: str) -> Booking | None:
    return db.scalar(
        select(Booking).where(
            Booking.date == booking_date,
            Booking.time_slot == time_slot,
            Booking.status != BookingStatus.CANCELLED.value,
        )
    )


def list_active_bookings_for_date(db: Session, booking_date: date) -> list[Booking]:
    return list(
        db.scalars(
            select(Booking)
            .where(
                Booking.date == booking_date,
                Booking.status != BookingStatus.CANCELLED.value,
            )
            .order_by(Booking.time_slot)
        ).all()
    )


def list_available_slots(db: Session, date_value: str | None) -> AvailabilitySummary:
    booking_date = parse_booking_date(date_value, past_detail=PAST_SLOTS_DETAIL)

    all_slots = generate_time_slots(get_schedule_settings(db))
    bookings = list_active_bookings_for_date(db, booking_date)
    taken = {booking.time_slot for booking in bookings}
    available = [slot for slot in all_slots if slot not in taken]

    return AvailabilitySummary(
        date=booking_date,
        slots=available,
        total_slots=len(all_slots),
        available_count=len(available),
        booked_count=len(bookings),
    )


def create_booking(
    db: Session,
    *,
    name: Any,
    email: Any,
    date_value: Any,
    time_slot: Any,
    company: Any = None,
    notes: Any = None,
) -> Booking:
    name = clean_text(name, "Name")
    email = clean_text(email, "Email")
    time_slot = clean_text(time_slot, "Time slot")
    company = clean_text(company, "Company")
    notes = clean_text(notes, "Notes", max_length=None)
    if not (name and email and date_value and time_slot):
        raise InvalidInputError(REQUIRED_FIELDS_DETAIL)
    if not EMAIL_PATTERN.match(email):
        raise InvalidInputError(INVALID_EMAIL_DETAIL)
    booking_date = parse_booking_date(date_value)
    if not TIME_SLOT_PATTERN.match(time_slot):
        raise InvalidInputError(INVALID_TIME_SLOT_DETAIL)

    if time_slot not in generate_time_slots(get_schedule_settings(db)):
        raise InvalidInputError(INVALID_TIME_SLOT_DETAIL)

    # Fast path for a friendly error; uq_bookings_active_slot is what actually guarantees uniqueness.
    if find_active_booking(db, booking_date, time_slot):
        BOOKING_ADMISSIONS.labels(outcome="conflict").inc()
        logger.info("booking_rejected reason=slot_taken date=%s time_slot=%s", booking_date, time_slot)
        raise SlotConflictError(SLOT_ALREADY_BOOKED_DETAIL)

    now = utcnow()
    booking = Booking(
        name=name,
        email=email,
        company=company,
        notes=notes,
        date=booking_date,
        time_slot=time_slot,
        status=BookingStatus.PENDING.value,
        created_at=now,
        updated_at=now,
    )
    db.add(booking)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        BOOKING_ADMISSIONS.labels(outcome="conflict").inc()
        logger.info("booking_rejected reason=unique_violation date=%s time_slot=%s", booking_date, time_slot)
        raise SlotConflictError(SLOT_ALREADY_BOOKED_DETAIL) from None

    db.refresh(booking)
    BOOKING_ADMISSIONS.labels(outcome="created").inc()
    logger.info("booking_created id=%s date=%s time_slot=%s", booking.id, booking.date, booking.time_slot)
    return booking


def get_booking(db: Session, booking_id: int) -> Booking:
    booking = db.get(Booking, booking_id)
    if not booking:
        raise NotFoundError(BOOKING_NOT_FOUND_DETAIL)
    return booking


def update_booking_status(db: Session, booking_id: int, status: Any) -> Booking:
    """Move a booking to any of the four statuses; transitions are not ordered."""
    if not isinstance(status, str):
        raise InvalidInputError(INVALID_STATUS_DETAIL)
    try:
        new_status = BookingStatus(status)
    except ValueError:
        raise InvalidInputError(INVALID_STATUS_DETAIL) from None

    booking = get_booking(db, booking_id)
    previous_status = booking.status
    booking.set_status(new_status)
    try:
        db.commit()
    except IntegrityError:
        # re-opening a cancelled booking whose slot was taken in the meantime
        db.rollback()
        raise SlotConflictError(SLOT_ALREADY_BOOKED_DETAIL) from None

    db.refresh(booking)
    logger.info("booking_status_updated id=%s from=%s to=%s", booking.id, previous_status, booking.status)
    return booking


def delete_booking(db: Session, booking_id: int) -> None:
    booking = get_booking(db, booking_id)
    db.delete(booking)
    db.commit()
    logger.info("booking_deleted id=%s", booking_id)


def bulk_delete_bookings(db: Session, booking_ids: Any) -> tuple[int, list[int]]:
    requested = parse_ids(booking_ids, BULK_IDS_REQUIRED_DETAIL)
    bookings = db.scalars(select(Booking).where(Booking.id.in_(requested))).all()
    found = {booking.id for booking in bookings}
    for booking in bookings:
        db.delete(booking)
    db.commit()

    logger.info("bookings_bulk_deleted count=%s", len(found))
    return len(found), [booking_id for booking_id in requested if booking_id not in found]


def list_bookings(
    db: Session,
    status: BookingStatus | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
    limit: int = 10,
    offset: int = 0,
) -> tuple[list[Booking], int]:
    query = select(Booking)
    if status:
        query = query.where(Booking.status == status.value)
    if start_date:
        query = query.where(Booking.date >= start_date)
    if end_date:
        query = query.where(Booking.date <= end_date)

    total = db.scalar(select(func.count()).select_from(query.subquery()))
    bookings = db.scalars(
        query.order_by(Booking.date.desc(), Booking.time_slot.desc(), Booking.id.desc()).limit(limit).offset(offset)
    ).all()
    return list(bookings), total or 0


def recent_bookings(db: Session, limit: int = 5) -> list[Booking]:
    return list(db.scalars(select(Booking).order_by(Booking.created_at.desc(), Booking.id.desc()).limit(limit)).all())


def count_bookings(db: Session) -> BookingCounts:
    rows = db.execute(select(Booking.status, func.count()).group_by(Booking.status)).all()
    by_status = {status.value: 0 for status in BookingStatus}
    by_status.update({status: count for status, count in rows})

    today = db.scalar(
        select(func.count())
        .select_from(Booking)
        .where(
            Booking.date == business_today(),
            Booking.status != BookingStatus.CANCELLED.value,
        )
    )
    return BookingCounts(total=sum(by_status.values()), today=today or 0, by_status=by_status)
