import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from consultations.core.clock import utcnow
from consultations.core.config import settings
from consultations.db.models import SCHEDULE_SETTINGS_ID, ScheduleSettings
from consultations.schemas.schedule_settings import ScheduleSettingsUpdateRequest

logger = logging.getLogger(__name__)


def _select_settings(db: Session) -> ScheduleSettings | None:
    return db.scalar(select(ScheduleSettings).where(ScheduleSettings.id == SCHEDULE_SETTINGS_ID))


def get_schedule_settings(db: Session) -> ScheduleSettings:
    """Read the persisted schedule, seeding it from configured defaults on first use.

    Never cached: every slot listing sees the latest committed values.
    """
    schedule = _select_settings(db)
    if schedule:
        return schedule

    schedule = ScheduleSettings(
        id=SCHEDULE_SETTINGS_ID,
        working_hours_start=settings.default_working_hours_start,
        working_hours_end=settings.default_working_hours_end,
        meeting_duration=settings.default_meeting_duration,
        updated_at=utcnow(),
    )
    db.add(schedule)
    try:
        db.commit()
    except IntegrityError:
        # another request seeded the row first
        db.rollback()
        return _select_settings(db)

    db.refresh(schedule)
    logger.info(
        "schedule_settings_seeded start=%s end=%s duration=%s",
        schedule.working_hours_start,
        schedule.working_hours_end,
        schedule.meeting_duration,
    )
    return schedule


def update_schedule_settings(db: Session, payload: ScheduleSettingsUpdateRequest) -> ScheduleSettings:
    schedule = get_schedule_settings(db)
    schedule.working_hours_start = payload.working_hours_start
    schedule.working_hours_end = payload.working_hours_end
    schedule.meeting_duration = payload.meeting_duration
    schedule.updated_at = utcnow()
    db.commit()
    db.refresh(schedule)
    logger.info(
        "schedule_settings_updated start=%s end=%s duration=%s",
        schedule.working_hours_start,
        schedule.working_hours_end,
        schedule.meeting_duration,
    )
    return schedule
