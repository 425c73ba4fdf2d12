"""
Plain data records for offices, time slots and job positions
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional

from .time_of_day import TimeOfDay


class Weekday(str, Enum):
    MONDAY = "MONDAY"
    TUESDAY = "TUESDAY"
    WEDNESDAY = "WEDNESDAY"
    THURSDAY = "THURSDAY"
    FRIDAY = "FRIDAY"
    SATURDAY = "SATURDAY"
    SUNDAY = "SUNDAY"

    @property
    def day_number(self) -> int:
        """Calendar-widget numbering, 0=Sunday .. 6=Saturday"""
        return DAY_NUMBERS[self]


DAY_NUMBERS = {
    Weekday.SUNDAY: 0,
    Weekday.MONDAY: 1,
    Weekday.TUESDAY: 2,
    Weekday.WEDNESDAY: 3,
    Weekday.THURSDAY: 4,
    Weekday.FRIDAY: 5,
    Weekday.SATURDAY: 6,
}


@dataclass
class TimeSlot:
    id: str
    office_id: str
    start_time: TimeOfDay
    end_time: TimeOfDay
    created_at: datetime
    updated_at: Optional[datetime] = None

    @property
    def duration_minutes(self) -> int:
        return self.end_time.to_minutes() - self.start_time.to_minutes()


@dataclass
class JobPosition:
    id: str
    office_id: str
    name: str
    color: str
    created_at: datetime
    updated_at: Optional[datetime] = None


@dataclass
class Office:
    id: str
    name: str
    work_start_time: Optional[TimeOfDay]
    work_end_time: Optional[TimeOfDay]
    # None = never configured, [] = configured with no days
    working_days: Optional[List[Weekday]]
    created_at: datetime
    updated_at: Optional[datetime] = None
    time_slots_count: int = 0
    job_positions_count: int = 0
    time_slots: List[TimeSlot] = field(default_factory=list)
    job_positions: List[JobPosition] = field(default_factory=list)
