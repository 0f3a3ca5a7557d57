"""Derivation of the bookable time-of-day grid from working-hours settings."""

from typing import Protocol

from consultations.core.exceptions import InvalidConfigurationError

DEFAULT_MEETING_DURATION = 30
MINUTES_PER_HOUR = 60


class WorkingHours(Protocol):
    working_hours_start: str
    working_hours_end: str
    meeting_duration: int | None


def _parse_hour(value: str, field_name: str) -> int:
    try:
        hour = int(value.split(":", 1)[0])
    except (AttributeError, ValueError):
        raise InvalidConfigurationError(f"{field_name} must be in HH:MM format, got {value!r}") from None
    if not 0 <= hour <= 24:
        raise InvalidConfigurationError(f"{field_name} hour out of range: {value!r}")
    return hour


def generate_time_slots(schedule: WorkingHours) -> list[str]:
    """Return the ordered ``HH:MM`` start times of every slot in a working day.

    Hours are taken at hour granularity (the minutes of ``working_hours_start``
    and ``working_hours_end`` are ignored). Inside each hour, slots start at
    multiples of ``meeting_duration``; a slot is kept only when it finishes no
    later than the closing hour, so a duration that does not divide 60 loses
    the final partial slot of the day instead of running past closing time.
    """
    duration = schedule.meeting_duration
    if duration is None:
        duration = DEFAULT_MEETING_DURATION
    if duration <= 0:
        raise InvalidConfigurationError(f"meeting_duration must be positive, got {duration}")

    start_hour = _parse_hour(schedule.working_hours_start, "working_hours_start")
    end_hour = _parse_hour(schedule.working_hours_end, "working_hours_end")
    closing_minute = end_hour * MINUTES_PER_HOUR

    slots: list[str] = []
    for hour in range(start_hour, end_hour):
        for minute in range(0, MINUTES_PER_HOUR, duration):
            if hour * MINUTES_PER_HOUR + minute + duration <= closing_minute:
                slots.append(f"{hour:02d}:{minute:02d}")
    return slots
