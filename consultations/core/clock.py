from datetime import UTC, date, datetime
from zoneinfo import ZoneInfo

from consultations.core.config import settings


def utcnow() -> datetime:
    return datetime.now(UTC)


def business_today() -> date:
    """Calendar day in the configured booking timezone; bookings compare against this."""
    return datetime.now(ZoneInfo(settings.booking_timezone)).date()
