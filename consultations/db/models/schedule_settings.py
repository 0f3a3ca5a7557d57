from datetime import datetime

from sqlalchemy import DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from consultations.db.base import Base

SCHEDULE_SETTINGS_ID = 1


class ScheduleSettings(Base):
    __tablename__ = "schedule_settings"

    id: Mapped[int] = mapped_column(primary_key=True, default=SCHEDULE_SETTINGS_ID)
    working_hours_start: Mapped[str] = mapped_column(String(5), nullable=False)
    working_hours_end: Mapped[str] = mapped_column(String(5), nullable=False)
    meeting_duration: Mapped[int] = mapped_column(Integer, nullable=False, default=30)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
