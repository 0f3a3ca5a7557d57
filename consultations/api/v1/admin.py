from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from consultations.api.deps import get_current_admin
from consultations.db.models import Admin, BookingStatus, ContactStatus
from consultations.db.session import get_db
from consultations.schemas.admin import (
    AdminCreateRequest,
    AdminEnvelope,
    AdminListResponse,
    AdminPasswordUpdateRequest,
    AdminResponse,
    DashboardResponse,
    DashboardStats,
    MessageResponse,
)
from consultations.schemas.booking import BookingResponse
from consultations.schemas.schedule_settings import (
    ScheduleSettingsEnvelope,
    ScheduleSettingsResponse,
    ScheduleSettingsUpdateRequest,
)
from consultations.services import (
    admin_service,
    booking_service,
    contact_service,
    newsletter_service,
    settings_service,
)

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/stats", response_model=DashboardResponse, status_code=status.HTTP_200_OK)
def get_dashboard(
    _: Admin = Depends(get_current_admin),
    db: Session = Depends(get_db),
) -> DashboardResponse:
    bookings = booking_service.count_bookings(db)
    contacts = contact_service.count_contacts(db)
    subscribers = newsletter_service.count_subscribers(db)
    return DashboardResponse(
        stats=DashboardStats(
            total_bookings=bookings.total,
            today_bookings=bookings.today,
            pending_bookings=bookings.by_status[BookingStatus.PENDING.value],
            confirmed_bookings=bookings.by_status[BookingStatus.CONFIRMED.value],
            completed_bookings=bookings.by_status[BookingStatus.COMPLETED.value],
            cancelled_bookings=bookings.by_status[BookingStatus.CANCELLED.value],
            new_contacts=contacts.by_status[ContactStatus.NEW.value],
            active_subscribers=subscribers.active,
        ),
        recent_bookings=[
            BookingResponse.model_validate(booking) for booking in booking_service.recent_bookings(db)
        ],
    )


@router.get("/admins", response_model=AdminListResponse, status_code=status.HTTP_200_OK)
def list_admins(
    _: Admin = Depends(get_current_admin),
    db: Session = Depends(get_db),
) -> AdminListResponse:
    return AdminListResponse(
        admins=[AdminResponse.model_validate(admin) for admin in admin_service.list_admins(db)]
    )


@router.post("/admins", response_model=AdminEnvelope, status_code=status.HTTP_201_CREATED)
def create_admin(
    payload: AdminCreateRequest,
    _: Admin = Depends(get_current_admin),
    db: Session = Depends(get_db),
) -> AdminEnvelope:
    admin = admin_service.create_admin(db, payload)
    return AdminEnvelope(message="Admin created successfully", admin=AdminResponse.model_validate(admin))


@router.delete("/admins/{admin_id}", response_model=MessageResponse, status_code=status.HTTP_200_OK)
def delete_admin(
    admin_id: int,
    current_admin: Admin = Depends(get_current_admin),
    db: Session = Depends(get_db),
) -> MessageResponse:
    admin_service.delete_admin(db, admin_id, current_admin)
    return MessageResponse(message="Admin deleted successfully")


@router.patch("/admins/{admin_id}/password", response_model=MessageResponse, status_code=status.HTTP_200_OK)
def update_admin_password(
    admin_id: int,
    payload: AdminPasswordUpdateRequest,
    _: Admin = Depends(get_current_admin),
    db: Session = Depends(get_db),
) -> MessageResponse:
    admin_service.update_admin_password(db, admin_id, payload.new_password)
    return MessageResponse(message="Password updated successfully")


@router.get("/settings", response_model=ScheduleSettingsEnvelope, status_code=status.HTTP_200_OK)
def get_schedule_settings(
    _: Admin = Depends(get_current_admin),
    db: Session = Depends(get_db),
) -> ScheduleSettingsEnvelope:
    schedule = settings_service.get_schedule_settings(db)
    return ScheduleSettingsEnvelope(settings=ScheduleSettingsResponse.model_validate(schedule))


@router.put("/settings", response_model=ScheduleSettingsEnvelope, status_code=status.HTTP_200_OK)
def update_schedule_settings(
    payload: ScheduleSettingsUpdateRequest,
    _: Admin = Depends(get_current_admin),
    db: Session = Depends(get_db),
) -> ScheduleSettingsEnvelope:
    schedule = settings_service.update_schedule_settings(db, payload)
    return ScheduleSettingsEnvelope(settings=ScheduleSettingsResponse.model_validate(schedule))
