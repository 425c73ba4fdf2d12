"""
Scheduling rules shared by the time slot service and the office views

- validate_within_office_hours: slot must sit inside the office window
- non_working_day_numbers: weekdays a date picker should disable
- is_schedule_full: aggregate-duration check used to disable "add slot"
"""

import logging
from typing import Iterable, Optional, Set

from .entities import DAY_NUMBERS, TimeSlot, Weekday
from .errors import OutOfOfficeHours
from .time_of_day import TimeOfDay

logger = logging.getLogger(__name__)

ALL_DAY_NUMBERS = frozenset(range(7))


def validate_within_office_hours(
    office_start: Optional[TimeOfDay],
    office_end: Optional[TimeOfDay],
    slot_start: TimeOfDay,
    slot_end: TimeOfDay,
    log: Optional[logging.Logger] = None,
) -> None:
    """
    Raise OutOfOfficeHours when the slot leaves the office window
    Both office bounds are inclusive. Offices without hours impose no constraint.
    """
    log = log or logger

    if office_start is None or office_end is None:
        log.debug(
            f"Skipping office hours check for slot {slot_start}-{slot_end} (office hours not set)"
        )
        return

    if slot_start < office_start:
        log.warning(f"Slot start {slot_start} is before office start {office_start}")
        raise OutOfOfficeHours("start", slot_start.format(), office_start.format())

    if slot_end > office_end:
        log.warning(f"Slot end {slot_end} is after office end {office_end}")
        raise OutOfOfficeHours("end", slot_end.format(), office_end.format())

    log.debug(f"Slot {slot_start}-{slot_end} is within {office_start}-{office_end}")


def non_working_day_numbers(working_days: Optional[Iterable[Weekday]]) -> Set[int]:
    """
    Weekday numbers (0=Sunday..6=Saturday) that are not working days

    None, [] and the full week all mean "no restriction" (empty set).
    """
    if working_days is None:
        return set()

    allowed = {DAY_NUMBERS[Weekday(day)] for day in working_days}
    if not allowed or allowed == ALL_DAY_NUMBERS:
        return set()

    return set(ALL_DAY_NUMBERS - allowed)


def is_schedule_full(
    office_start: Optional[TimeOfDay],
    office_end: Optional[TimeOfDay],
    slots: Iterable[TimeSlot],
    log: Optional[logging.Logger] = None,
) -> bool:
    """
    True when the summed slot durations cover the office window

    Only the total is compared; gaps between slots are not detected.
    """
    log = log or logger

    if office_start is None or office_end is None or office_end <= office_start:
        return False

    slots = list(slots)
    if not slots:
        return False

    office_minutes = office_end.to_minutes() - office_start.to_minutes()

    booked_minutes = 0
    for slot in slots:
        duration = slot.duration_minutes
        if duration <= 0:
            log.warning(
                f"Ignoring time slot {slot.id} with invalid duration "
                f"({slot.start_time}-{slot.end_time})"
            )
            continue
        booked_minutes += duration

    return booked_minutes >= office_minutes
