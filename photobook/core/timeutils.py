from datetime import date, datetime
from zoneinfo import ZoneInfo

from ..config import get_settings
from .constants import TIME_PATTERN
from .errors import ValidationError


def to_minutes(value: str) -> int:
    """Convert a zero-padded ``HH:MM`` string to minutes since midnight."""
    match = TIME_PATTERN.match(value or "")
    if not match:
        raise ValidationError(f"Time must be in HH:MM format, got {value!r}")
    hours, minutes = match.groups()
    return int(hours) * 60 + int(minutes)


def time_range(start_time: str, end_time: str) -> tuple[int, int]:
    start = to_minutes(start_time)
    end = to_minutes(end_time)
    if start >= end:
        raise ValidationError("Start time must be before end time")
    return start, end


def today() -> date:
    settings = get_settings()
    return datetime.now(ZoneInfo(settings.timezone)).date()
