"""
Time Slot Service
Creates, updates and removes the time slots that subdivide an office's working day.
Every change is checked against the office hours and against the office's other slots.
"""

import logging
import sqlite3
import uuid
from typing import Any, Dict, List, Optional, Union

from .entities import TimeSlot
from .errors import InvalidTimeRange, OfficeNotFound, SlotOverlap, TimeSlotNotFound
from .schedule_rules import validate_within_office_hours
from .schedule_store import ScheduleStore, StoreSession, is_overlap_violation, utc_now
from .time_of_day import TimeOfDay

TimeInput = Union[str, TimeOfDay]

FIELD_LABELS = {"start_time": "startTime", "end_time": "endTime"}


def coerce_time(value: TimeInput, field: Optional[str] = None) -> TimeOfDay:
    if isinstance(value, TimeOfDay):
        return value
    return TimeOfDay.parse(value, field)


class TimeSlotService:
    def __init__(self, store: ScheduleStore, logger: Optional[logging.Logger] = None):
        self.store = store
        self.logger = logger or logging.getLogger(__name__)

    def _get_office(self, session: StoreSession, office_id: str):
        office = session.find_office(office_id)
        if office is None:
            raise OfficeNotFound(office_id)
        return office

    def _get_slot(self, session: StoreSession, slot_id: str, office_id: Optional[str] = None) -> TimeSlot:
        slot = session.find_time_slot_by_id(slot_id)
        if slot is None or (office_id is not None and slot.office_id != office_id):
            raise TimeSlotNotFound(slot_id)
        return slot

    def validate_no_overlap(
        self,
        session: StoreSession,
        office_id: str,
        start_time: TimeOfDay,
        end_time: TimeOfDay,
        exclude_slot_id: Optional[str] = None,
    ) -> None:
        """
        Reject the window when it intersects another slot of the same office
        Slots that only share a boundary (10:00-11:00 and 11:00-12:00) do not overlap.
        """
        self.logger.debug(
            f"Checking overlap for office {office_id}, slot {start_time}-{end_time}, "
            f"excluding {exclude_slot_id or 'none'}"
        )
        conflict = session.find_overlapping_time_slot(office_id, start_time, end_time, exclude_slot_id)
        if conflict is not None:
            self.logger.warning(
                f"Overlap detected for office {office_id}: {start_time}-{end_time} "
                f"conflicts with {conflict.start_time}-{conflict.end_time}"
            )
            raise SlotOverlap(
                start_time.format(),
                end_time.format(),
                conflict.start_time.format(),
                conflict.end_time.format(),
            )

    def create(self, office_id: str, start_time: TimeInput, end_time: TimeInput) -> TimeSlot:
        start = coerce_time(start_time, "startTime")
        end = coerce_time(end_time, "endTime")
        if end <= start:
            raise InvalidTimeRange(start.format(), end.format())

        with self.store.session(write=True) as session:
            office = self._get_office(session, office_id)

            validate_within_office_hours(
                office.work_start_time, office.work_end_time, start, end, self.logger
            )
            self.validate_no_overlap(session, office_id, start, end)

            slot = TimeSlot(
                id=str(uuid.uuid4()),
                office_id=office_id,
                start_time=start,
                end_time=end,
                created_at=utc_now(),
            )
            try:
                session.save_time_slot(slot)
            except sqlite3.IntegrityError as e:
                if is_overlap_violation(e):
                    self.logger.warning(f"Storage rejected overlapping slot {start}-{end} for office {office_id}")
                    raise SlotOverlap(start.format(), end.format()) from e
                raise

        self.logger.info(f"Created time slot {slot.id} for office {office_id}: {start}-{end}")
        return slot

    def find_all_for_office(self, office_id: str) -> List[TimeSlot]:
        with self.store.session() as session:
            self._get_office(session, office_id)
            return session.find_time_slots_by_office(office_id)

    def find_one(self, slot_id: str, office_id: Optional[str] = None) -> TimeSlot:
        with self.store.session() as session:
            return self._get_slot(session, slot_id, office_id)

    def update(self, slot_id: str, changes: Dict[str, Any], office_id: Optional[str] = None) -> TimeSlot:
        """
        Apply a partial change of start_time and/or end_time

        With no time field in the change set the slot is returned untouched and
        no validation runs. Otherwise the effective window is re-validated,
        ignoring the slot's own current row in the overlap check.
        """
        requested = {
            key: coerce_time(changes[key], FIELD_LABELS[key])
            for key in ("start_time", "end_time")
            if changes.get(key) is not None
        }

        with self.store.session(write=True) as session:
            slot = self._get_slot(session, slot_id, office_id)
            if not requested:
                self.logger.debug(f"No time changes for slot {slot_id}, skipping validation")
                return slot

            start = requested.get("start_time", slot.start_time)
            end = requested.get("end_time", slot.end_time)
            if end <= start:
                raise InvalidTimeRange(start.format(), end.format())

            office = self._get_office(session, slot.office_id)
            validate_within_office_hours(
                office.work_start_time, office.work_end_time, start, end, self.logger
            )
            self.validate_no_overlap(session, slot.office_id, start, end, exclude_slot_id=slot_id)

            try:
                session.update_time_slot(slot_id, requested)
            except sqlite3.IntegrityError as e:
                if is_overlap_violation(e):
                    raise SlotOverlap(start.format(), end.format()) from e
                raise

            updated = session.find_time_slot_by_id(slot_id)

        self.logger.info(f"Updated time slot {slot_id} to {start}-{end}")
        return updated

    def remove(self, slot_id: str, office_id: Optional[str] = None) -> None:
        with self.store.session(write=True) as session:
            slot = self._get_slot(session, slot_id, office_id)
            if session.delete_time_slot(slot.id) == 0:
                raise TimeSlotNotFound(slot_id)
        self.logger.info(f"Deleted time slot {slot_id}")

    def remove_all_for_office(self, office_id: str) -> int:
        with self.store.session(write=True) as session:
            self._get_office(session, office_id)
            deleted_count = session.delete_time_slots_for_office(office_id)
        self.logger.info(f"Deleted {deleted_count} time slots for office {office_id}")
        return deleted_count
