from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from consultations.schemas.booking import Pagination


class NewsletterEmailRequest(BaseModel):
    email: Any = None


class NewsletterBulkDeleteRequest(BaseModel):
    ids: Any = None


class SubscriberResponse(BaseModel):
    id: int
    email: str
    is_active: bool
    subscribed_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SubscriptionResponse(BaseModel):
    success: bool = True
    message: str
    subscriber: SubscriberResponse | None = None


class SubscriberEnvelope(BaseModel):
    success: bool = True
    subscriber: SubscriberResponse


class SubscriberListResponse(BaseModel):
    success: bool = True
    subscribers: list[SubscriberResponse]
    pagination: Pagination


class NewsletterStats(BaseModel):
    total: int
    active: int
    inactive: int
    recent_subscribers: int = Field(alias="recentSubscribers")
    active_rate: float = Field(alias="activeRate")

    model_config = ConfigDict(populate_by_name=True)


class NewsletterStatsResponse(BaseModel):
    success: bool = True
    stats: NewsletterStats
