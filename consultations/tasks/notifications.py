from typing import Any

from consultations.services.email_service import (
    send_booking_confirmation,
    send_booking_status_update,
    send_contact_notification,
)
from consultations.tasks.celery_app import celery_app


@celery_app.task(name="notifications.booking_confirmation")
def booking_confirmation_task(booking: dict[str, Any]) -> bool:
    return send_booking_confirmation(booking)


@celery_app.task(name="notifications.booking_status_update")
def booking_status_update_task(booking: dict[str, Any], status: str) -> bool:
    return send_booking_status_update(booking, status)


@celery_app.task(name="notifications.contact_received")
def contact_received_task(contact: dict[str, Any]) -> bool:
    return send_contact_notification(contact)
