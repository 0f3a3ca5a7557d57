import datetime as dt
from enum import Enum

from sqlalchemy import Date, DateTime, Index, String, Text, func, text
from sqlalchemy.orm import Mapped, mapped_column

from consultations.core.clock import utcnow
from consultations.db.base import Base


class BookingStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


ACTIVE_SLOT_PREDICATE = "status <> 'cancelled'"


class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        # One non-cancelled booking per (date, time_slot); cancelled rows free the slot.
        Index(
            "uq_bookings_active_slot",
            "date",
            "time_slot",
            unique=True,
            postgresql_where=text(ACTIVE_SLOT_PREDICATE),
            sqlite_where=text(ACTIVE_SLOT_PREDICATE),
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    company: Mapped[str | None] = mapped_column(String(255), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False, index=True)
    time_slot: Mapped[str] = mapped_column(String(5), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=BookingStatus.PENDING.value)
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    def set_status(self, status: BookingStatus) -> None:
        self.status = status.value
        self.updated_at = utcnow()
