"""Fire-and-forget dispatch of booking and contact notifications.

Callers schedule these after their write has committed. Whatever happens here
(broker down, SMTP refused, bad template data) is logged and counted, and never
reaches the caller.
"""

import logging
from collections.abc import Callable
from typing import Any

from celery import Task

from consultations.core.config import settings
from consultations.core.metrics import NOTIFICATION_FAILURES
from consultations.db.models import Booking, ContactMessage
from consultations.services import email_service
from consultations.tasks.notifications import (
    booking_confirmation_task,
    booking_status_update_task,
    contact_received_task,
)

logger = logging.getLogger(__name__)

BACKEND_CELERY = "celery"
BACKEND_INLINE = "inline"
BACKEND_DISABLED = "disabled"


def booking_payload(booking: Booking) -> dict[str, Any]:
    return {
        "id": booking.id,
        "name": booking.name,
        "email": booking.email,
        "company": booking.company,
        "date": booking.date.isoformat(),
        "time_slot": booking.time_slot,
        "status": booking.status,
    }


def contact_payload(contact: ContactMessage) -> dict[str, Any]:
    return {
        "id": contact.id,
        "name": contact.name,
        "email": contact.email,
        "subject": contact.subject,
        "message": contact.message,
    }


def _dispatch(kind: str, task: Task, send: Callable[..., Any], *args: Any) -> None:
    backend = settings.notification_backend.strip().lower()
    if backend == BACKEND_DISABLED:
        return

    try:
        if backend == BACKEND_CELERY:
            task.delay(*args)
        else:
            send(*args)
    except Exception:
        NOTIFICATION_FAILURES.labels(kind=kind).inc()
        logger.exception("notification_failed kind=%s backend=%s", kind, backend)


def notify_booking_created(booking: dict[str, Any]) -> None:
    _dispatch(
        "booking_confirmation",
        booking_confirmation_task,
        email_service.send_booking_confirmation,
        booking,
    )


def notify_booking_status_changed(booking: dict[str, Any], status: str) -> None:
    _dispatch(
        "booking_status_update",
        booking_status_update_task,
        email_service.send_booking_status_update,
        booking,
        status,
    )


def notify_contact_received(contact: dict[str, Any]) -> None:
    _dispatch(
        "contact_received",
        contact_received_task,
        email_service.send_contact_notification,
        contact,
    )
