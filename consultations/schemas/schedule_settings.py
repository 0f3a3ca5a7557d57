import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

HOUR_MINUTE_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class ScheduleSettingsUpdateRequest(BaseModel):
    working_hours_start: str
    working_hours_end: str
    meeting_duration: int = Field(default=30, ge=5, le=480)

    @field_validator("working_hours_start", "working_hours_end")
    @classmethod
    def validate_hour_minute(cls, value: str) -> str:
        if not HOUR_MINUTE_PATTERN.match(value):
            raise ValueError("must be a time of day in HH:MM format")
        return value

    @model_validator(mode="after")
    def validate_interval(self) -> "ScheduleSettingsUpdateRequest":
        if self.working_hours_end <= self.working_hours_start:
            raise ValueError("working_hours_end must be later than working_hours_start")
        return self


class ScheduleSettingsResponse(BaseModel):
    working_hours_start: str
    working_hours_end: str
    meeting_duration: int
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ScheduleSettingsEnvelope(BaseModel):
    success: bool = True
    settings: ScheduleSettingsResponse
