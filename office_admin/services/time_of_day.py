"""
Time-of-day values used by office hours and time slots
Always interpreted in UTC so stored times never drift with the server clock
"""

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union

import pytz

from .errors import InvalidTimeFormat

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)(?::([0-5]\d))?$")


@dataclass(frozen=True, order=True)
class TimeOfDay:
    hours: int
    minutes: int
    seconds: int = 0

    def __post_init__(self):
        if not (0 <= self.hours <= 23 and 0 <= self.minutes <= 59 and 0 <= self.seconds <= 59):
            raise InvalidTimeFormat(f"{self.hours}:{self.minutes}:{self.seconds}")

    @classmethod
    def parse(cls, value: Optional[str], field: Optional[str] = None) -> "TimeOfDay":
        """Parse 'HH:MM' or 'HH:MM:SS' (24-hour). Seconds default to 00."""
        if not isinstance(value, str):
            raise InvalidTimeFormat(value, field)
        match = TIME_PATTERN.fullmatch(value)
        if not match:
            raise InvalidTimeFormat(value, field)
        hours, minutes, seconds = match.groups()
        return cls(int(hours), int(minutes), int(seconds or 0))

    @classmethod
    def from_datetime(cls, value: datetime) -> "TimeOfDay":
        """Take the wall-clock time of a datetime in UTC. Naive values are treated as UTC."""
        if value.tzinfo is not None:
            value = value.astimezone(pytz.utc)
        return cls(value.hour, value.minute, value.second)

    def to_minutes(self) -> int:
        # seconds are ignored for duration arithmetic
        return self.hours * 60 + self.minutes

    def to_seconds(self) -> int:
        return self.hours * 3600 + self.minutes * 60 + self.seconds

    def format(self) -> str:
        return f"{self.hours:02d}:{self.minutes:02d}:{self.seconds:02d}"

    def __str__(self) -> str:
        return self.format()


def parse_optional_time(value: Optional[str], field: Optional[str] = None) -> Optional[TimeOfDay]:
    if value is None:
        return None
    return TimeOfDay.parse(value, field)


def format_optional_time(value: Optional[TimeOfDay]) -> Optional[str]:
    return value.format() if value is not None else None


def format_time_am_pm(value: Union[TimeOfDay, str, None], locale: str = "es-CO") -> str:
    """
    Human readable 12-hour rendering for display only
    Spanish locales use 'a.m.'/'p.m.' ("2:30 p.m."), everything else 'AM'/'PM'
    """
    if value is None or value == "":
        return "N/A"
    if isinstance(value, str):
        value = TimeOfDay.parse(value)

    hour_12 = value.hours % 12 or 12
    is_pm = value.hours >= 12
    if locale.lower().startswith("es"):
        suffix = "p.m." if is_pm else "a.m."
    else:
        suffix = "PM" if is_pm else "AM"
    return f"{hour_12}:{value.minutes:02d} {suffix}"
