import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from consultations.core.clock import utcnow
from consultations.core.exceptions import InvalidInputError, NotFoundError
from consultations.db.models import NewsletterSubscriber
from consultations.services.validation import EMAIL_PATTERN, INVALID_EMAIL_DETAIL, clean_text, parse_ids

logger = logging.getLogger(__name__)

EMAIL_REQUIRED_DETAIL = "Email is required"
ALREADY_SUBSCRIBED_DETAIL = "This email is already subscribed to our newsletter"
NOT_SUBSCRIBED_DETAIL = "Email not found in our subscriber list"
SUBSCRIBER_NOT_FOUND_DETAIL = "Subscriber not found"
BULK_IDS_REQUIRED_DETAIL = "Subscriber IDs array is required"
RECENT_WINDOW = timedelta(days=30)


@dataclass(frozen=True)
class SubscriptionResult:
    subscriber: NewsletterSubscriber
    created: bool


@dataclass(frozen=True)
class NewsletterCounts:
    total: int
    active: int
    recent: int

    @property
    def inactive(self) -> int:
        return self.total - self.active

    @property
    def active_rate(self) -> float:
        if not self.total:
            return 0.0
        return round(self.active * 100 / self.total, 2)


def _normalize_email(email: Any) -> str:
    email = (clean_text(email, "Email") or "").lower()
    if not email:
        raise InvalidInputError(EMAIL_REQUIRED_DETAIL)
    if not EMAIL_PATTERN.match(email):
        raise InvalidInputError(INVALID_EMAIL_DETAIL)
    return email


def _find_by_email(db: Session, email: str) -> NewsletterSubscriber | None:
    return db.scalar(select(NewsletterSubscriber).where(NewsletterSubscriber.email == email))


def subscribe(db: Session, email: Any) -> SubscriptionResult:
    """Create a subscription, or reactivate a previously cancelled one."""
    email = _normalize_email(email)

    existing = _find_by_email(db, email)
    if existing:
        if existing.is_active:
            raise InvalidInputError(ALREADY_SUBSCRIBED_DETAIL)
        existing.activate()
        db.commit()
        db.refresh(existing)
        logger.info("newsletter_reactivated id=%s", existing.id)
        return SubscriptionResult(subscriber=existing, created=False)

    now = utcnow()
    subscriber = NewsletterSubscriber(email=email, is_active=True, subscribed_at=now, updated_at=now)
    db.add(subscriber)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise InvalidInputError(ALREADY_SUBSCRIBED_DETAIL) from None

    db.refresh(subscriber)
    logger.info("newsletter_subscribed id=%s", subscriber.id)
    return SubscriptionResult(subscriber=subscriber, created=True)


def unsubscribe(db: Session, email: Any) -> NewsletterSubscriber:
    email = _normalize_email(email)
    subscriber = _find_by_email(db, email)
    if not subscriber:
        raise NotFoundError(NOT_SUBSCRIBED_DETAIL)

    subscriber.deactivate()
    db.commit()
    db.refresh(subscriber)
    logger.info("newsletter_unsubscribed id=%s", subscriber.id)
    return subscriber


def get_subscriber(db: Session, subscriber_id: int) -> NewsletterSubscriber:
    subscriber = db.get(NewsletterSubscriber, subscriber_id)
    if not subscriber:
        raise NotFoundError(SUBSCRIBER_NOT_FOUND_DETAIL)
    return subscriber


def list_subscribers(
    db: Session,
    active: bool | None = None,
    limit: int = 50,
    offset: int = 0,
) -> tuple[list[NewsletterSubscriber], int]:
    query = select(NewsletterSubscriber)
    if active is not None:
        query = query.where(NewsletterSubscriber.is_active.is_(active))

    total = db.scalar(select(func.count()).select_from(query.subquery()))
    subscribers = db.scalars(
        query.order_by(NewsletterSubscriber.subscribed_at.desc(), NewsletterSubscriber.id.desc())
        .limit(limit)
        .offset(offset)
    ).all()
    return list(subscribers), total or 0


def delete_subscriber(db: Session, subscriber_id: int) -> None:
    subscriber = get_subscriber(db, subscriber_id)
    db.delete(subscriber)
    db.commit()
    logger.info("newsletter_subscriber_deleted id=%s", subscriber_id)


def bulk_delete_subscribers(db: Session, subscriber_ids: Any) -> tuple[int, list[int]]:
    requested = parse_ids(subscriber_ids, BULK_IDS_REQUIRED_DETAIL)
    subscribers = db.scalars(select(NewsletterSubscriber).where(NewsletterSubscriber.id.in_(requested))).all()
    found = {subscriber.id for subscriber in subscribers}
    for subscriber in subscribers:
        db.delete(subscriber)
    db.commit()

    return len(found), [subscriber_id for subscriber_id in requested if subscriber_id not in found]


def count_subscribers(db: Session) -> NewsletterCounts:
    total = db.scalar(select(func.count()).select_from(NewsletterSubscriber))
    active = db.scalar(
        select(func.count()).select_from(NewsletterSubscriber).where(NewsletterSubscriber.is_active.is_(True))
    )
    recent = db.scalar(
        select(func.count())
        .select_from(NewsletterSubscriber)
        .where(NewsletterSubscriber.subscribed_at >= utcnow() - RECENT_WINDOW)
    )
    return NewsletterCounts(total=total or 0, active=active or 0, recent=recent or 0)
