from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from sqlalchemy.orm import Session

from consultations.api.deps import get_current_admin
from consultations.api.pagination import LimitParam, OffsetParam, page_info
from consultations.db.models import Admin, ContactStatus
from consultations.db.session import get_db
from consultations.schemas.admin import MessageResponse
from consultations.schemas.booking import BulkDeleteResponse
from consultations.schemas.contact import (
    ContactBulkDeleteRequest,
    ContactCreatedResponse,
    ContactCreatedSummary,
    ContactCreateRequest,
    ContactEnvelope,
    ContactListResponse,
    ContactResponse,
    ContactStats,
    ContactStatsResponse,
    ContactStatusUpdateRequest,
)
from consultations.services import contact_service
from consultations.services.notification_service import contact_payload, notify_contact_received

router = APIRouter(prefix="/contacts", tags=["contacts"])


@router.post("", response_model=ContactCreatedResponse, status_code=status.HTTP_201_CREATED)
def create_contact(
    payload: ContactCreateRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
) -> ContactCreatedResponse:
    contact = contact_service.create_contact(
        db,
        name=payload.name,
        email=payload.email,
        subject=payload.subject,
        message=payload.message,
    )
    background_tasks.add_task(notify_contact_received, contact_payload(contact))
    return ContactCreatedResponse(
        message="Message sent successfully. We will get back to you soon!",
        contact=ContactCreatedSummary.model_validate(contact),
    )


@router.get("", response_model=ContactListResponse, status_code=status.HTTP_200_OK)
def list_contacts(
    status_filter: ContactStatus | None = Query(default=None, alias="status"),
    limit: LimitParam = 10,
    offset: OffsetParam = 0,
    _: Admin = Depends(get_current_admin),
    db: Session = Depends(get_db),
) -> ContactListResponse:
    contacts, total = contact_service.list_contacts(db, status=status_filter, limit=limit, offset=offset)
    return ContactListResponse(
        contacts=[ContactResponse.model_validate(contact) for contact in contacts],
        pagination=page_info(total=total, limit=limit, offset=offset),
    )


@router.get("/stats", response_model=ContactStatsResponse, status_code=status.HTTP_200_OK)
def get_contact_stats(
    _: Admin = Depends(get_current_admin),
    db: Session = Depends(get_db),
) -> ContactStatsResponse:
    counts = contact_service.count_contacts(db)
    return ContactStatsResponse(
        stats=ContactStats(
            total=counts.total,
            new=counts.by_status[ContactStatus.NEW.value],
            read=counts.by_status[ContactStatus.READ.value],
            responded=counts.by_status[ContactStatus.RESPONDED.value],
            response_rate=counts.response_rate,
        )
    )


@router.post("/bulk-delete", response_model=BulkDeleteResponse, status_code=status.HTTP_200_OK)
def bulk_delete_contacts(
    payload: ContactBulkDeleteRequest,
    _: Admin = Depends(get_current_admin),
    db: Session = Depends(get_db),
) -> BulkDeleteResponse:
    deleted_count, missing_ids = contact_service.bulk_delete_contacts(db, payload.ids)
    return BulkDeleteResponse(
        message=f"{deleted_count} contact(s) deleted successfully",
        deleted_count=deleted_count,
        missing_ids=missing_ids,
    )


@router.get("/{contact_id}", response_model=ContactEnvelope, status_code=status.HTTP_200_OK)
def get_contact(
    contact_id: int,
    _: Admin = Depends(get_current_admin),
    db: Session = Depends(get_db),
) -> ContactEnvelope:
    return ContactEnvelope(contact=ContactResponse.model_validate(contact_service.get_contact(db, contact_id)))


@router.patch("/{contact_id}", response_model=ContactEnvelope, status_code=status.HTTP_200_OK)
def update_contact_status(
    contact_id: int,
    payload: ContactStatusUpdateRequest,
    _: Admin = Depends(get_current_admin),
    db: Session = Depends(get_db),
) -> ContactEnvelope:
    contact = contact_service.update_contact_status(db, contact_id, payload.status)
    return ContactEnvelope(
        message="Contact status updated successfully",
        contact=ContactResponse.model_validate(contact),
    )


@router.delete("/{contact_id}", response_model=MessageResponse, status_code=status.HTTP_200_OK)
def delete_contact(
    contact_id: int,
    _: Admin = Depends(get_current_admin),
    db: Session = Depends(get_db),
) -> MessageResponse:
    contact_service.delete_contact(db, contact_id)
    return MessageResponse(message="Contact deleted successfully")
