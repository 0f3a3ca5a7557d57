from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from consultations.db.session import get_db
from consultations.schemas.booking import AvailabilityResponse
from consultations.services.booking_service import list_available_slots

router = APIRouter(prefix="/availability", tags=["availability"])


@router.get("", response_model=AvailabilityResponse, status_code=status.HTTP_200_OK)
def get_availability(
    date_value: str | None = Query(default=None, alias="date"),
    db: Session = Depends(get_db),
) -> AvailabilityResponse:
    summary = list_available_slots(db, date_value)
    return AvailabilityResponse(
        date=summary.date,
        slots=summary.slots,
        total_slots=summary.total_slots,
        available_count=summary.available_count,
        booked_count=summary.booked_count,
    )
