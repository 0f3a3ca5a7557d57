from datetime import date

from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from sqlalchemy.orm import Session

from consultations.api.deps import get_current_admin
from consultations.api.pagination import LimitParam, OffsetParam, page_info
from consultations.db.models import Admin, BookingStatus
from consultations.db.session import get_db
from consultations.schemas.admin import MessageResponse
from consultations.schemas.booking import (
    BookingBulkDeleteRequest,
    BookingCreatedResponse,
    BookingCreateRequest,
    BookingEnvelope,
    BookingListResponse,
    BookingResponse,
    BookingStats,
    BookingStatsResponse,
    BookingStatusUpdateRequest,
    BookingSummary,
    BulkDeleteResponse,
)
from consultations.services import booking_service
from consultations.services.notification_service import (
    booking_payload,
    notify_booking_created,
    notify_booking_status_changed,
)

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.post("", response_model=BookingCreatedResponse, status_code=status.HTTP_201_CREATED)
def create_booking(
    payload: BookingCreateRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
) -> BookingCreatedResponse:
    booking = booking_service.create_booking(
        db,
        name=payload.name,
        email=payload.email,
        company=payload.company,
        notes=payload.notes,
        date_value=payload.date,
        time_slot=payload.time_slot,
    )
    background_tasks.add_task(notify_booking_created, booking_payload(booking))
    return BookingCreatedResponse(
        message="Booking created successfully! Check your email for confirmation.",
        booking=BookingSummary.model_validate(booking),
    )


@router.get("", response_model=BookingListResponse, status_code=status.HTTP_200_OK)
def list_bookings(
    status_filter: BookingStatus | None = Query(default=None, alias="status"),
    start_date: date | None = Query(default=None, alias="startDate"),
    end_date: date | None = Query(default=None, alias="endDate"),
    limit: LimitParam = 10,
    offset: OffsetParam = 0,
    _: Admin = Depends(get_current_admin),
    db: Session = Depends(get_db),
) -> BookingListResponse:
    bookings, total = booking_service.list_bookings(
        db,
        status=status_filter,
        start_date=start_date,
        end_date=end_date,
        limit=limit,
        offset=offset,
    )
    return BookingListResponse(
        bookings=[BookingResponse.model_validate(booking) for booking in bookings],
        pagination=page_info(total=total, limit=limit, offset=offset),
    )


@router.get("/stats", response_model=BookingStatsResponse, status_code=status.HTTP_200_OK)
def get_booking_stats(
    _: Admin = Depends(get_current_admin),
    db: Session = Depends(get_db),
) -> BookingStatsResponse:
    counts = booking_service.count_bookings(db)
    return BookingStatsResponse(
        stats=BookingStats(
            total=counts.total,
            today=counts.today,
            pending=counts.by_status[BookingStatus.PENDING.value],
            confirmed=counts.by_status[BookingStatus.CONFIRMED.value],
            completed=counts.by_status[BookingStatus.COMPLETED.value],
            cancelled=counts.by_status[BookingStatus.CANCELLED.value],
            completion_rate=counts.completion_rate,
        )
    )


@router.post("/bulk-delete", response_model=BulkDeleteResponse, status_code=status.HTTP_200_OK)
def bulk_delete_bookings(
    payload: BookingBulkDeleteRequest,
    _: Admin = Depends(get_current_admin),
    db: Session = Depends(get_db),
) -> BulkDeleteResponse:
    deleted_count, missing_ids = booking_service.bulk_delete_bookings(db, payload.ids)
    return BulkDeleteResponse(
        message=f"{deleted_count} booking(s) deleted successfully",
        deleted_count=deleted_count,
        missing_ids=missing_ids,
    )


@router.get("/{booking_id}", response_model=BookingEnvelope, status_code=status.HTTP_200_OK)
def get_booking(
    booking_id: int,
    _: Admin = Depends(get_current_admin),
    db: Session = Depends(get_db),
) -> BookingEnvelope:
    booking = booking_service.get_booking(db, booking_id)
    return BookingEnvelope(booking=BookingResponse.model_validate(booking))


@router.patch("/{booking_id}", response_model=BookingEnvelope, status_code=status.HTTP_200_OK)
def update_booking_status(
    booking_id: int,
    payload: BookingStatusUpdateRequest,
    background_tasks: BackgroundTasks,
    _: Admin = Depends(get_current_admin),
    db: Session = Depends(get_db),
) -> BookingEnvelope:
    booking = booking_service.update_booking_status(db, booking_id, payload.status)
    background_tasks.add_task(notify_booking_status_changed, booking_payload(booking), booking.status)
    return BookingEnvelope(
        message="Booking status updated successfully",
        booking=BookingResponse.model_validate(booking),
    )


@router.delete("/{booking_id}", response_model=MessageResponse, status_code=status.HTTP_200_OK)
def delete_booking(
    booking_id: int,
    _: Admin = Depends(get_current_admin),
    db: Session = Depends(get_db),
) -> MessageResponse:
    booking_service.delete_booking(db, booking_id)
    return MessageResponse(message="Booking deleted successfully")
