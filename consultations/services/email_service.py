"""SMTP delivery and message builders for transactional emails.

Builders take plain JSON-serialisable dicts so they can run inside a Celery
worker as well as in-process. Delivery errors propagate to the caller.
"""

import logging
import smtplib
from email.message import EmailMessage
from typing import Any

from consultations.core.config import settings

logger = logging.getLogger(__name__)

STATUS_HEADLINES = {
    "pending": "is awaiting confirmation",
    "confirmed": "has been confirmed",
    "completed": "has been marked as completed",
    "cancelled": "has been cancelled",
}


def send_email(to_email: str, subject: str, body: str) -> bool:
    from_email = settings.smtp_from_email or settings.smtp_username
    if not settings.smtp_host or not from_email:
        logger.info("email_skipped reason=smtp_not_configured to=%s subject=%r", to_email, subject)
        return False

    message = EmailMessage()
    message["From"] = from_email
    message["To"] = to_email
    message["Subject"] = subject
    message.set_content(body)

    with smtplib.SMTP(settings.smtp_host, settings.smtp_port, timeout=settings.smtp_timeout_seconds) as server:
        if settings.smtp_use_tls:
            server.starttls()
        if settings.smtp_username and settings.smtp_password:
            server.login(settings.smtp_username, settings.smtp_password)
        server.send_message(message)

    logger.info("email_sent to=%s subject=%r", to_email, subject)
    return True


def _booking_details(booking: dict[str, Any]) -> str:
    lines = [
        f"Date: {booking['date']}",
        f"Time: {booking['time_slot']}",
    ]
    if booking.get("company"):
        lines.append(f"Company: {booking['company']}")
    lines.append(f"Reference: #{booking['id']}")
    return "\n".join(lines)


def send_booking_confirmation(booking: dict[str, Any]) -> bool:
    body = (
        f"Hello {booking['name']},\n\n"
        "Thank you for booking a consultation. We have received your request "
        "and will confirm it shortly.\n\n"
        f"{_booking_details(booking)}\n"
    )
    return send_email(booking["email"], "Your consultation request has been received", body)


def send_booking_status_update(booking: dict[str, Any], status: str) -> bool:
    headline = STATUS_HEADLINES.get(status, f"is now {status}")
    body = (
        f"Hello {booking['name']},\n\n"
        f"Your consultation booking {headline}.\n\n"
        f"{_booking_details(booking)}\n"
    )
    return send_email(booking["email"], f"Consultation booking update: {status}", body)


def send_contact_notification(contact: dict[str, Any]) -> bool:
    if not settings.admin_notification_email:
        logger.info("email_skipped reason=no_admin_recipient contact_id=%s", contact["id"])
        return False

    body = (
        f"New contact message #{contact['id']}\n\n"
        f"From: {contact['name']} <{contact['email']}>\n"
        f"Subject: {contact.get('subject') or '(no subject)'}\n\n"
        f"{contact['message']}\n"
    )
    return send_email(settings.admin_notification_email, f"New contact message from {contact['name']}", body)
