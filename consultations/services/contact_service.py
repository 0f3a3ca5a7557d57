import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from consultations.core.clock import utcnow
from consultations.core.exceptions import InvalidInputError, NotFoundError
from consultations.db.models import ContactMessage, ContactStatus
from consultations.services.validation import EMAIL_PATTERN, INVALID_EMAIL_DETAIL, clean_text, parse_ids

logger = logging.getLogger(__name__)

REQUIRED_FIELDS_DETAIL = "Name, email, and message are required"
INVALID_STATUS_DETAIL = "Invalid status. Must be: new, read, or responded"
CONTACT_NOT_FOUND_DETAIL = "Contact not found"
BULK_IDS_REQUIRED_DETAIL = "Contact IDs array is required"


@dataclass(frozen=True)
class ContactCounts:
    total: int
    by_status: dict[str, int]

    @property
    def response_rate(self) -> float:
        if not self.total:
            return 0.0
        return round(self.by_status[ContactStatus.RESPONDED.value] * 100 / self.total, 2)


def create_contact(
    db: Session,
    name: Any,
    email: Any,
    message: Any,
    subject: Any = None,
) -> ContactMessage:
    name = clean_text(name, "Name")
    email = clean_text(email, "Email")
    message = clean_text(message, "Message", max_length=None)
    subject = clean_text(subject, "Subject")
    if not (name and email and message):
        raise InvalidInputError(REQUIRED_FIELDS_DETAIL)
    if not EMAIL_PATTERN.match(email):
        raise InvalidInputError(INVALID_EMAIL_DETAIL)

    now = utcnow()
    contact = ContactMessage(
        name=name,
        email=email,
        subject=subject,
        message=message,
        status=ContactStatus.NEW.value,
        created_at=now,
        updated_at=now,
    )
    db.add(contact)
    db.commit()
    db.refresh(contact)
    logger.info("contact_created id=%s", contact.id)
    return contact


def get_contact(db: Session, contact_id: int) -> ContactMessage:
    contact = db.get(ContactMessage, contact_id)
    if not contact:
        raise NotFoundError(CONTACT_NOT_FOUND_DETAIL)
    return contact


def list_contacts(
    db: Session,
    status: ContactStatus | None = None,
    limit: int = 10,
    offset: int = 0,
) -> tuple[list[ContactMessage], int]:
    query = select(ContactMessage)
    if status:
        query = query.where(ContactMessage.status == status.value)

    total = db.scalar(select(func.count()).select_from(query.subquery()))
    contacts = db.scalars(
        query.order_by(ContactMessage.created_at.desc(), ContactMessage.id.desc()).limit(limit).offset(offset)
    ).all()
    return list(contacts), total or 0


def update_contact_status(db: Session, contact_id: int, status: Any) -> ContactMessage:
    if not isinstance(status, str):
        raise InvalidInputError(INVALID_STATUS_DETAIL)
    try:
        new_status = ContactStatus(status)
    except ValueError:
        raise InvalidInputError(INVALID_STATUS_DETAIL) from None

    contact = get_contact(db, contact_id)
    contact.set_status(new_status)
    db.commit()
    db.refresh(contact)
    logger.info("contact_status_updated id=%s status=%s", contact.id, contact.status)
    return contact


def delete_contact(db: Session, contact_id: int) -> None:
    contact = get_contact(db, contact_id)
    db.delete(contact)
    db.commit()
    logger.info("contact_deleted id=%s", contact_id)


def bulk_delete_contacts(db: Session, contact_ids: Any) -> tuple[int, list[int]]:
    requested = parse_ids(contact_ids, BULK_IDS_REQUIRED_DETAIL)
    contacts = db.scalars(select(ContactMessage).where(ContactMessage.id.in_(requested))).all()
    found = {contact.id for contact in contacts}
    for contact in contacts:
        db.delete(contact)
    db.commit()

    return len(found), [contact_id for contact_id in requested if contact_id not in found]


def count_contacts(db: Session) -> ContactCounts:
    rows = db.execute(select(ContactMessage.status, func.count()).group_by(ContactMessage.status)).all()
    by_status = {status.value: 0 for status in ContactStatus}
    by_status.update({status: count for status, count in rows})
    return ContactCounts(total=sum(by_status.values()), by_status=by_status)
