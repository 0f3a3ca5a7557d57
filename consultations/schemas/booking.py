import datetime as dt
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class BookingCreateRequest(BaseModel):
    # Presence, type and format are checked by the admission service so that
    # they surface as 400 invalid_input rather than schema errors.
    name: Any = None
    email: Any = None
    company: Any = None
    notes: Any = None
    date: Any = None
    time_slot: Any = Field(default=None, alias="timeSlot")

    model_config = ConfigDict(populate_by_name=True)


class BookingStatusUpdateRequest(BaseModel):
    status: Any = None


class BookingBulkDeleteRequest(BaseModel):
    ids: Any = None


class BookingSummary(BaseModel):
    id: int
    name: str
    email: str
    company: str | None
    date: dt.date
    time_slot: str
    status: str
    created_at: dt.datetime

    model_config = ConfigDict(from_attributes=True)


class BookingResponse(BookingSummary):
    notes: str | None
    updated_at: dt.datetime


class BookingCreatedResponse(BaseModel):
    success: bool = True
    message: str
    booking: BookingSummary


class BookingEnvelope(BaseModel):
    success: bool = True
    message: str | None = None
    booking: BookingResponse


class Pagination(BaseModel):
    total: int
    limit: int
    offset: int


class BookingListResponse(BaseModel):
    success: bool = True
    bookings: list[BookingResponse]
    pagination: Pagination


class AvailabilityResponse(BaseModel):
    success: bool = True
    date: dt.date
    slots: list[str]
    total_slots: int = Field(alias="totalSlots")
    available_count: int = Field(alias="availableCount")
    booked_count: int = Field(alias="bookedCount")

    model_config = ConfigDict(populate_by_name=True)


class BookingStats(BaseModel):
    total: int
    today: int
    pending: int
    confirmed: int
    completed: int
    cancelled: int
    completion_rate: float = Field(alias="completionRate")

    model_config = ConfigDict(populate_by_name=True)


class BookingStatsResponse(BaseModel):
    success: bool = True
    stats: BookingStats


class BulkDeleteResponse(BaseModel):
    success: bool = True
    message: str
    deleted_count: int = Field(alias="deletedCount")
    missing_ids: list[int] = Field(default_factory=list, alias="missingIds")

    model_config = ConfigDict(populate_by_name=True)
