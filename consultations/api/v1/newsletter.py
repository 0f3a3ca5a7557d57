from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from consultations.api.deps import get_current_admin
from consultations.api.pagination import LimitParam, OffsetParam, page_info
from consultations.db.models import Admin
from consultations.db.session import get_db
from consultations.schemas.admin import MessageResponse
from consultations.schemas.booking import BulkDeleteResponse
from consultations.schemas.newsletter import (
    NewsletterBulkDeleteRequest,
    NewsletterEmailRequest,
    NewsletterStats,
    NewsletterStatsResponse,
    SubscriberEnvelope,
    SubscriberListResponse,
    SubscriberResponse,
    SubscriptionResponse,
)
from consultations.services import newsletter_service

router = APIRouter(prefix="/newsletter", tags=["newsletter"])


@router.post("/subscribe", response_model=SubscriptionResponse, status_code=status.HTTP_201_CREATED)
def subscribe(
    payload: NewsletterEmailRequest,
    response: Response,
    db: Session = Depends(get_db),
) -> SubscriptionResponse:
    result = newsletter_service.subscribe(db, payload.email)
    if not result.created:
        response.status_code = status.HTTP_200_OK
        return SubscriptionResponse(
            message="Welcome back! Your subscription has been reactivated.",
            subscriber=SubscriberResponse.model_validate(result.subscriber),
        )
    return SubscriptionResponse(
        message="Thank you for subscribing! You will receive our latest updates.",
        subscriber=SubscriberResponse.model_validate(result.subscriber),
    )


@router.post("/unsubscribe", response_model=SubscriptionResponse, status_code=status.HTTP_200_OK)
def unsubscribe(
    payload: NewsletterEmailRequest,
    db: Session = Depends(get_db),
) -> SubscriptionResponse:
    newsletter_service.unsubscribe(db, payload.email)
    return SubscriptionResponse(
        message="You have been unsubscribed successfully. We are sorry to see you go!",
    )


@router.get("/subscribers", response_model=SubscriberListResponse, status_code=status.HTTP_200_OK)
def list_subscribers(
    active: bool | None = Query(default=None),
    limit: LimitParam = 50,
    offset: OffsetParam = 0,
    _: Admin = Depends(get_current_admin),
    db: Session = Depends(get_db),
) -> SubscriberListResponse:
    subscribers, total = newsletter_service.list_subscribers(db, active=active, limit=limit, offset=offset)
    return SubscriberListResponse(
        subscribers=[SubscriberResponse.model_validate(subscriber) for subscriber in subscribers],
        pagination=page_info(total=total, limit=limit, offset=offset),
    )


@router.get("/stats", response_model=NewsletterStatsResponse, status_code=status.HTTP_200_OK)
def get_newsletter_stats(
    _: Admin = Depends(get_current_admin),
    db: Session = Depends(get_db),
) -> NewsletterStatsResponse:
    counts = newsletter_service.count_subscribers(db)
    return NewsletterStatsResponse(
        stats=NewsletterStats(
            total=counts.total,
            active=counts.active,
            inactive=counts.inactive,
            recent_subscribers=counts.recent,
            active_rate=counts.active_rate,
        )
    )


@router.post("/bulk-delete", response_model=BulkDeleteResponse, status_code=status.HTTP_200_OK)
def bulk_delete_subscribers(
    payload: NewsletterBulkDeleteRequest,
    _: Admin = Depends(get_current_admin),
    db: Session = Depends(get_db),
) -> BulkDeleteResponse:
    deleted_count, missing_ids = newsletter_service.bulk_delete_subscribers(db, payload.ids)
    return BulkDeleteResponse(
        message=f"{deleted_count} subscriber(s) deleted successfully",
        deleted_count=deleted_count,
        missing_ids=missing_ids,
    )


@router.get("/subscribers/{subscriber_id}", response_model=SubscriberEnvelope, status_code=status.HTTP_200_OK)
def get_subscriber(
    subscriber_id: int,
    _: Admin = Depends(get_current_admin),
    db: Session = Depends(get_db),
) -> SubscriberEnvelope:
    subscriber = newsletter_service.get_subscriber(db, subscriber_id)
    return SubscriberEnvelope(subscriber=SubscriberResponse.model_validate(subscriber))


@router.delete("/subscribers/{subscriber_id}", response_model=MessageResponse, status_code=status.HTTP_200_OK)
def delete_subscriber(
    subscriber_id: int,
    _: Admin = Depends(get_current_admin),
    db: Session = Depends(get_db),
) -> MessageResponse:
    newsletter_service.delete_subscriber(db, subscriber_id)
    return MessageResponse(message="Subscriber deleted successfully")
